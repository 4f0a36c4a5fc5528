# DEPENDENCIES
import sys
from typing import Dict
from typing import Tuple
from pathlib import Path
from typing import Sequence

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.clause_rules import ClauseRule
from services.data_models import ClauseIssue
from services.data_models import NegotiationPoint


class NegotiationEngine:
    """
    Pairs every detected clause issue with the canned replacement clause owned by its rule
    """
    def __init__(self, rules: Sequence[ClauseRule]):
        """
        Initialize negotiation engine

        Arguments:
        ----------
            rules { Sequence[ClauseRule] } : Rule table the issues were produced from
        """
        self.alternatives : Dict[str, str] = {rule.name: rule.alternative_clause for rule in rules}


    def generate_negotiation_points(self, clause_issues: Sequence[ClauseIssue]) -> Tuple[NegotiationPoint, ...]:
        """
        One negotiation point per issue, same order

        Arguments:
        ----------
            clause_issues { Sequence[ClauseIssue] } : Issues in rule-match order

        Returns:
        --------
            { tuple }                               : Negotiation points index-aligned with `clause_issues`
        """
        return tuple(NegotiationPoint(point       = issue.clause_name,
                                      priority    = issue.risk_weight,
                                      alternative = self._alternative_for(issue),
                                     )
                     for issue in clause_issues)


    def _alternative_for(self, issue: ClauseIssue) -> str:
        # Issues built outside this rule table still get a usable counter-proposal
        return self.alternatives.get(issue.clause_name, issue.suggested_alternative)
