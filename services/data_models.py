# DEPENDENCIES
import sys
from enum import Enum
from typing import Any
from typing import Dict
from typing import Tuple
from typing import Generic
from typing import TypeVar
from pathlib import Path
from typing import Optional
from datetime import datetime
from datetime import timezone
from dataclasses import replace
from dataclasses import dataclass

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.clause_rules import RiskWeight


T = TypeVar("T")


def current_timestamp() -> str:
    """
    UTC wall-clock time as an ISO-8601 string with millisecond precision, e.g. 2026-10-19T08:30:00.000Z
    """
    return datetime.now(timezone.utc).isoformat(timespec = "milliseconds").replace("+00:00", "Z")



@dataclass(frozen = True)
class ClauseIssue:
    """
    A matched clause rule, carrying its severity and suggested rewrite
    """
    clause_name           : str
    risk_weight           : RiskWeight
    issue_description     : str
    suggested_alternative : str

    def to_dict(self) -> Dict[str, Any]:
        return {"clause"     : self.clause_name,
                "risk"       : self.risk_weight.value,
                "issue"      : self.issue_description,
                "suggestion" : self.suggested_alternative,
               }


@dataclass(frozen = True)
class NegotiationPoint:
    """
    Replacement clause text paired with a detected issue
    """
    point       : str
    priority    : RiskWeight
    alternative : str

    def to_dict(self) -> Dict[str, Any]:
        return {"point"       : self.point,
                "priority"    : self.priority.value,
                "alternative" : self.alternative,
               }


@dataclass(frozen = True)
class AnalysisResult:
    """
    Outcome of one clause-risk analysis run

    The analyzer leaves `source_identifier` and `analyzed_at` unset; the caller attaches
    them through `with_provenance` at the moment it asks for the analysis
    """
    global_score       : int
    risk_level         : RiskWeight
    clause_issues      : Tuple[ClauseIssue, ...]
    negotiation_points : Tuple[NegotiationPoint, ...]
    summary            : str
    source_text        : str
    source_identifier  : Optional[str] = None
    file_size_bytes    : Optional[int] = None
    analyzed_at        : Optional[str] = None


    def with_provenance(self, source_identifier: str, analyzed_at: Optional[str] = None, file_size_bytes: Optional[int] = None) -> "AnalysisResult":
        """
        Copy of this result stamped with its source and analysis time (now, when not given)
        """
        return replace(self,
                       source_identifier = source_identifier,
                       file_size_bytes   = file_size_bytes,
                       analyzed_at       = analyzed_at or current_timestamp(),
                      )


    def to_dict(self) -> Dict[str, Any]:
        return {"sourceIdentifier"  : self.source_identifier,
                "fileSize"          : self.file_size_bytes,
                "analyzedAt"        : self.analyzed_at,
                "globalScore"       : self.global_score,
                "riskLevel"         : self.risk_level.value,
                "summary"           : self.summary,
                "clauseIssues"      : [issue.to_dict() for issue in self.clause_issues],
                "negotiationPoints" : [point.to_dict() for point in self.negotiation_points],
                "sourceText"        : self.source_text,
               }


class DiffStatus(Enum):
    EQUAL    = "equal"
    DELETED  = "deleted"
    INSERTED = "inserted"


@dataclass(frozen = True)
class DiffToken:
    value  : str
    status : DiffStatus

    def to_dict(self) -> Dict[str, str]:
        return {"value"  : self.value,
                "status" : self.status.value,
               }


@dataclass(frozen = True)
class DiffSummary:
    """
    Token counts of a diff and the share of tokens both versions have in common
    """
    equal      : int
    deleted    : int
    inserted   : int
    similarity : float

    @property
    def has_changes(self) -> bool:
        return (self.deleted + self.inserted) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {"equal"       : self.equal,
                "deleted"     : self.deleted,
                "inserted"    : self.inserted,
                "similarity"  : round(self.similarity, 4),
                "has_changes" : self.has_changes,
               }


@dataclass(frozen = True)
class SearchHit:
    """
    One keyword occurrence with its context, or a placeholder when `keyword` is None
    """
    context_snippet : str
    label           : str
    keyword         : Optional[str] = None
    leading_context : str           = ""

    @property
    def is_placeholder(self) -> bool:
        return self.keyword is None

    def to_dict(self) -> Dict[str, str]:
        # Remote QA answer shape, plus the text just before the match
        return {"clause"         : self.context_snippet,
                "summary"        : self.label,
                "leadingContext" : self.leading_context,
               }


@dataclass(frozen = True)
class SignatureRecord:
    id                : str
    signed_at         : str
    signer            : str
    email             : str
    source_identifier : Optional[str] = None
    analyzed_at       : Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id"         : self.id,
                "at"         : self.signed_at,
                "signer"     : self.signer,
                "email"      : self.email,
                "fileName"   : self.source_identifier,
                "analyzedAt" : self.analyzed_at,
               }


@dataclass
class TaskOutcome(Generic[T]):
    """
    Result/error union returned by asynchronous boundary tasks
    """
    value : Optional[T]         = None
    error : Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error

        return self.value

    @classmethod
    def success(cls, value: T) -> "TaskOutcome[T]":
        return cls(value = value)

    @classmethod
    def failure(cls, error: Exception) -> "TaskOutcome[T]":
        return cls(error = error)
