# DEPENDENCIES
import sys
from pathlib import Path
from typing import Sequence

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.clause_rules import ClauseRules
from services.data_models import ClauseIssue


class SummaryGenerator:
    """
    Template summary of an analysis run
    """
    def __init__(self, focus_size: int = ClauseRules.SUMMARY_FOCUS_SIZE, no_risk_message: str = ClauseRules.NO_RISK_SUMMARY):
        self.focus_size      = focus_size
        self.no_risk_message = no_risk_message


    def generate_summary(self, clause_issues: Sequence[ClauseIssue]) -> str:
        """
        Fixed message when nothing matched, otherwise the issue count and the first matched clause names

        Arguments:
        ----------
            clause_issues { Sequence[ClauseIssue] } : Issues in rule-match order

        Returns:
        --------
                { str }                             : Summary text
        """
        if not clause_issues:
            return self.no_risk_message

        focus   = ", ".join(issue.clause_name for issue in clause_issues[:self.focus_size])
        summary = f"{len(clause_issues)} sensitive clause(s) detected. Focus: {focus}"

        if (len(clause_issues) > self.focus_size):
            summary += " …"

        return summary
