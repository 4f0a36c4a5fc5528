# DEPENDENCIES
import re
import sys
import json
from enum import Enum
from typing import Dict
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic import BaseModel
from pydantic import field_validator
from pydantic import ValidationError
from dataclasses import dataclass

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.exceptions import RuleTableError


# Unescaped ".*" / ".+" (greedy or lazy)
UNBOUNDED_GAP = re.compile(r"(?<!\\)\.[*+]")


class RiskWeight(Enum):
    LOW    = "low"
    MEDIUM = "medium"
    HIGH   = "high"


@dataclass(frozen = True)
class ClauseRule:
    """
    One entry of the clause rule table: compiled, case-insensitive patterns plus fixed texts

    A two-part rule ("A, later followed by B") keeps B in `follows`: B is searched only after the
    first occurrence of A, so a match costs one pass over the text
    """
    name                  : str
    pattern               : re.Pattern
    risk_weight           : RiskWeight
    issue_description     : str
    suggested_alternative : str
    alternative_clause    : str
    follows               : Optional[re.Pattern] = None


    def matches(self, text: str) -> bool:
        match = self.pattern.search(text)

        if (match is None) or (self.follows is None):
            return match is not None

        return self.follows.search(text, match.end()) is not None


class ClauseRuleRecord(BaseModel):
    """
    Declarative form of a clause rule, as stored in a JSON rule table
    """
    name        : str           = Field(min_length = 1)
    pattern     : str           = Field(min_length = 1)
    follows     : Optional[str] = Field(default = None, min_length = 1)
    risk        : RiskWeight
    issue       : str
    suggestion  : str
    alternative : str


    @field_validator("pattern", "follows")
    @classmethod
    def pattern_must_compile(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        # ".*" between two terms rescans the rest of the text for every occurrence of the first one
        if UNBOUNDED_GAP.search(value):
            raise ValueError("unbounded '.*' / '.+' gap; put the second term in 'follows' instead")

        try:
            re.compile(value, re.IGNORECASE)

        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}")

        return value


    def compile(self) -> ClauseRule:
        return ClauseRule(name                  = self.name,
                          pattern               = re.compile(self.pattern, re.IGNORECASE),
                          follows               = re.compile(self.follows, re.IGNORECASE) if self.follows else None,
                          risk_weight           = self.risk,
                          issue_description     = self.issue,
                          suggested_alternative = self.suggestion,
                          alternative_clause    = self.alternative,
                         )


class ClauseRules:
    """
    Clause rule table and the fixed scoring law applied to it
    """
    BASE_SCORE         = 30

    WEIGHT_INCREMENTS  = {RiskWeight.LOW    : 8,
                          RiskWeight.MEDIUM : 15,
                          RiskWeight.HIGH   : 25,
                         }

    # Lower bounds, checked from the top down
    RISK_THRESHOLDS    = {RiskWeight.HIGH   : 70,
                          RiskWeight.MEDIUM : 45,
                         }

    SCORE_BOUNDS       = (0, 100)

    SUMMARY_FOCUS_SIZE = 2

    NO_RISK_SUMMARY    = "No major risk detected by basic rules. Check financial and IP clauses."

    DEFAULT_RULES      = [{"name"        : "Unilateral Termination",
                           "pattern"     : r"(résiliation|termination)",
                           "follows"     : r"(unilat|sans\s+préavis|without\s+notice)",
                           "risk"        : "high",
                           "issue"       : "Termination is possible for one party only, sometimes without notice.",
                           "suggestion"  : "Require at least 30 days' written notice and a legitimate reason.",
                           "alternative" : "Any termination requires thirty (30) days' prior written notice stating the reasons.",
                          },
                          {"name"        : "Broad Limitation of Liability",
                           "pattern"     : r"(limitation|responsabilit[eé]|liability)",
                           "follows"     : r"(illimit|toutes\s+causes|any\s+cause)",
                           "risk"        : "medium",
                           "issue"       : "Liability is limited for any cause whatsoever.",
                           "suggestion"  : "Carve out gross negligence and wilful misconduct and set a reasonable cap.",
                           "alternative" : "Liability is limited to direct damages; gross negligence remains excluded from any limitation.",
                          },
                          {"name"        : "One-Way Indemnification",
                           "pattern"     : r"(indemn[iy]sation|hold\s+harmless)",
                           "follows"     : r"(uniquement|one\s+way|b[eé]n[eé]fice\s+de)",
                           "risk"        : "medium",
                           "issue"       : "Indemnification benefits one party only.",
                           "suggestion"  : "Make indemnification mutual and proportionate to the risk.",
                           "alternative" : "Indemnification obligations are mutual and proportionate to each party's respective risks.",
                          },
                          {"name"        : "Automatic Renewal",
                           "pattern"     : r"(renouvellement\s+automatique|auto\s*renew|tacite\s+reconduction)",
                           "risk"        : "low",
                           "issue"       : "The contract renews without any explicit action.",
                           "suggestion"  : "Notice 30 days before the term plus a simple right to object.",
                           "alternative" : "Renewal requires a notification received 30 days before the expiry date.",
                          },
                          {"name"        : "Data/Confidentiality",
                           "pattern"     : r"(donn[eé]es|RGPD|GDPR|confidentialit[eé]|confidentiality)",
                           "risk"        : "medium",
                           "issue"       : "Sensitive data or confidentiality mentions need a proper framework.",
                           "suggestion"  : "Add a GDPR DPA covering purposes, sub-processors and security measures.",
                           "alternative" : "Data processing is governed by a GDPR-compliant DPA specifying purposes and security measures.",
                          },
                         ]


    @classmethod
    def parse_rules(cls, records: List[Dict]) -> Tuple[ClauseRule, ...]:
        """
        Validate and compile a list of rule records

        Arguments:
        ----------
            records { list } : Rule records with name, pattern, risk, issue, suggestion, alternative

        Returns:
        --------
            { tuple }        : Compiled rules, in table order
        """
        if not isinstance(records, list) or not records:
            raise RuleTableError("Rule table must be a non-empty list of rule records")

        rules = list()
        seen  = set()

        for index, record in enumerate(records):
            try:
                parsed = ClauseRuleRecord.model_validate(record)

            except ValidationError as e:
                raise RuleTableError(f"Invalid rule #{index + 1}: {e}") from e

            if parsed.name in seen:
                raise RuleTableError(f"Duplicate rule name: {parsed.name!r}")

            seen.add(parsed.name)
            rules.append(parsed.compile())

        return tuple(rules)


    @classmethod
    def load_rules(cls, path: Path) -> Tuple[ClauseRule, ...]:
        """
        Load a rule table from a JSON file
        """
        try:
            with open(path, "r", encoding = "utf-8") as fh:
                records = json.load(fh)

        except OSError as e:
            raise RuleTableError(f"Cannot read rule table {path}: {e}") from e

        except json.JSONDecodeError as e:
            raise RuleTableError(f"Rule table {path} is not valid JSON: {e}") from e

        return cls.parse_rules(records)


    @classmethod
    def get_rules(cls, path: Optional[Path] = None) -> Tuple[ClauseRule, ...]:
        """
        Rules from `path` when given, the built-in table otherwise
        """
        if path is not None:
            return cls.load_rules(path)

        return cls.parse_rules(cls.DEFAULT_RULES)


    @classmethod
    def get_risk_level(cls, score: int) -> RiskWeight:
        if (score >= cls.RISK_THRESHOLDS[RiskWeight.HIGH]):
            return RiskWeight.HIGH

        elif (score >= cls.RISK_THRESHOLDS[RiskWeight.MEDIUM]):
            return RiskWeight.MEDIUM

        else:
            return RiskWeight.LOW


    @classmethod
    def clamp_score(cls, score: int) -> int:
        lower, upper = cls.SCORE_BOUNDS

        return max(lower, min(upper, score))
