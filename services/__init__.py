# DEPENDENCIES
from .data_models import DiffToken
from .data_models import SearchHit
from .data_models import DiffStatus
from .data_models import ClauseIssue
from .data_models import DiffSummary
from .data_models import TaskOutcome
from .data_models import AnalysisResult
from .data_models import SignatureRecord
from .data_models import NegotiationPoint
from .word_diff_engine import WordDiffEngine
from .signature_ledger import SignatureLedger
from .signature_ledger import compute_fingerprint
from .summary_generator import SummaryGenerator
from .remote_client import ContraScopeAPIClient
from .negotiation_engine import NegotiationEngine
from .review_service import ContractReviewService
from .keyword_search import KeywordSpotlightSearch
from .clause_risk_analyzer import ClauseRiskAnalyzer



__all__ = ['DiffToken',
           'SearchHit',
           'DiffStatus',
           'ClauseIssue',
           'DiffSummary',
           'TaskOutcome',
           'AnalysisResult',
           'WordDiffEngine',
           'SignatureRecord',
           'SignatureLedger',
           'NegotiationPoint',
           'SummaryGenerator',
           'NegotiationEngine',
           'ClauseRiskAnalyzer',
           'compute_fingerprint',
           'ContraScopeAPIClient',
           'ContractReviewService',
           'KeywordSpotlightSearch',
          ]
