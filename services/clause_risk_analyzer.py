# DEPENDENCIES
import sys
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional
from typing import Sequence

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_debug
from config.clause_rules import ClauseRule
from config.clause_rules import ClauseRules
from utils.logger import ContraScopeLogger
from services.data_models import ClauseIssue
from utils.text_processor import TextProcessor
from services.data_models import AnalysisResult
from services.summary_generator import SummaryGenerator
from services.negotiation_engine import NegotiationEngine


class ClauseRiskAnalyzer:
    """
    Scans normalized contract text against an ordered clause rule table

    Analysis Pipeline:
    1. Whitespace normalization
    2. Rule matching (at most one issue per rule)
    3. Scoring and risk level
    4. Negotiation points
    5. Summary
    """
    def __init__(self, rules: Optional[Sequence[ClauseRule]] = None):
        """
        Initialize the analyzer

        Arguments:
        ----------
            rules { Sequence[ClauseRule] } : Ordered rule table; the built-in table when omitted
        """
        self.rules              : Tuple[ClauseRule, ...] = tuple(rules) if rules is not None else ClauseRules.get_rules()
        self.negotiation_engine                          = NegotiationEngine(rules = self.rules)
        self.summary_generator                           = SummaryGenerator()


    @ContraScopeLogger.log_execution_time("clause_risk_analysis")
    def analyze(self, raw_text: str) -> AnalysisResult:
        """
        Analyze contract text; never raises for string input

        Arguments:
        ----------
            raw_text { str } : Raw contract text, as pasted or extracted

        Returns:
        --------
            { AnalysisResult } : Result without source identifier or timestamp
        """
        source_text        = TextProcessor.normalize_text(raw_text or "")

        clause_issues      = tuple(self.match_rules(source_text))
        global_score       = self.calculate_score(clause_issues)
        risk_level         = ClauseRules.get_risk_level(global_score)

        negotiation_points = self.negotiation_engine.generate_negotiation_points(clause_issues)
        summary            = self.summary_generator.generate_summary(clause_issues)

        log_debug("Clause risk analysis done",
                  characters   = len(source_text),
                  issues       = [issue.clause_name for issue in clause_issues],
                  global_score = global_score,
                  risk_level   = risk_level.value,
                 )

        return AnalysisResult(global_score       = global_score,
                              risk_level         = risk_level,
                              clause_issues      = clause_issues,
                              negotiation_points = negotiation_points,
                              summary            = summary,
                              source_text        = source_text,
                             )


    def match_rules(self, source_text: str) -> List[ClauseIssue]:
        """
        Evaluate every rule independently against the full text, in table order
        """
        return [ClauseIssue(clause_name           = rule.name,
                            risk_weight           = rule.risk_weight,
                            issue_description     = rule.issue_description,
                            suggested_alternative = rule.suggested_alternative,
                           )
                for rule in self.rules if rule.matches(source_text)]


    @staticmethod
    def calculate_score(clause_issues: Sequence[ClauseIssue]) -> int:
        """
        Base score plus one fixed increment per matched rule, clamped to [0, 100]
        """
        score = ClauseRules.BASE_SCORE

        for issue in clause_issues:
            score += ClauseRules.WEIGHT_INCREMENTS[issue.risk_weight]

        return ClauseRules.clamp_score(score)


    def describe_rules(self) -> List[dict]:
        """
        Rule table as plain records, for display
        """
        return [{"name"    : rule.name,
                 "risk"    : rule.risk_weight.value,
                 "pattern" : rule.pattern.pattern,
                 "follows" : rule.follows.pattern if rule.follows is not None else None,
                 "issue"   : rule.issue_description,
                }
                for rule in self.rules]

