# DEPENDENCIES
import sys
import time
import requests
from typing import Any
from typing import Dict
from typing import List
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from config.settings import settings
from config.clause_rules import RiskWeight
from config.clause_rules import ClauseRules
from services.data_models import SearchHit
from services.data_models import ClauseIssue
from utils.text_processor import TextProcessor
from services.data_models import AnalysisResult
from services.data_models import NegotiationPoint
from utils.exceptions import RemoteEndpointUnavailable


class ContraScopeAPIClient:
    """
    Thin JSON client for the optional remote analysis / QA / signature endpoints

    Every failure surfaces as RemoteEndpointUnavailable so callers can fall back to local computation
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client

        Arguments:
        ----------
            base_url { str }     : Endpoint root, e.g. http://localhost:8000/api/v1 (settings.REMOTE_API_BASE when omitted)

            timeout  { float }   : Per-request timeout in seconds

            session  { Session } : requests session to reuse
        """
        self.base_url = (base_url if base_url is not None else settings.REMOTE_API_BASE or "").rstrip("/")
        self.timeout  = timeout or settings.REMOTE_TIMEOUT
        self.session  = session or requests.Session()


    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)


    def _post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        if not self.is_configured:
            raise RemoteEndpointUnavailable("Remote API base URL not set")

        url        = f"{self.base_url}{path}"
        start_time = time.perf_counter()

        try:
            response = self.session.post(url,
                                         json    = payload,
                                         headers = {"Content-Type": "application/json"},
                                         timeout = self.timeout,
                                        )

        except requests.RequestException as e:
            raise RemoteEndpointUnavailable(f"POST {url} failed: {e}") from e

        if not response.ok:
            raise RemoteEndpointUnavailable(f"HTTP {response.status_code}: {response.text or response.reason}",
                                            status_code = response.status_code,
                                           )

        try:
            body = response.json()

        except ValueError as e:
            raise RemoteEndpointUnavailable(f"POST {url} returned a non-JSON body", status_code = response.status_code) from e

        log_info("Remote call succeeded", url = url, latency_seconds = round(time.perf_counter() - start_time, 3))

        return body


    def analyze(self, text: str) -> AnalysisResult:
        """
        Remote clause-risk analysis, converted to an AnalysisResult without provenance
        """
        body = self._post_json("/analyze", {"text": text})

        try:
            return self._parse_analysis(body, text)

        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RemoteEndpointUnavailable(f"Unexpected /analyze payload: {e}") from e


    def ask(self, text: str, question: str) -> List[SearchHit]:
        """
        Remote question answering over the analyzed text
        """
        body = self._post_json("/qa", {"text": text, "question": question})

        try:
            return [SearchHit(context_snippet = str(item["clause"]),
                              label           = str(item["summary"]),
                              keyword         = question,
                              leading_context = str(item.get("leadingContext") or ""),
                             )
                    for item in body]

        except (AttributeError, KeyError, TypeError) as e:
            raise RemoteEndpointUnavailable(f"Unexpected /qa payload: {e}") from e


    def sign(self, file_name: Optional[str], analyzed_at: Optional[str], signer: str, email: str) -> Dict[str, str]:
        body = self._post_json("/sign", {"fileName"   : file_name,
                                         "analyzedAt" : analyzed_at,
                                         "signer"     : signer,
                                         "email"      : email,
                                        })

        if not isinstance(body, dict) or "id" not in body or "at" not in body:
            raise RemoteEndpointUnavailable("Unexpected /sign payload")

        return {"id": str(body["id"]), "at": str(body["at"])}


    @staticmethod
    def _parse_analysis(body: Dict[str, Any], text: str) -> AnalysisResult:
        clauses            = body.get("clauses") or []
        suggestions        = body.get("suggestions") or []

        clause_issues      = tuple(ClauseIssue(clause_name           = str(clause["title"]),
                                               risk_weight           = RiskWeight(clause["risk"]),
                                               issue_description     = str(clause.get("issue", "")),
                                               suggested_alternative = str(clause.get("suggestion", "")),
                                              )
                                   for clause in clauses)

        negotiation_points = tuple(NegotiationPoint(point       = issue.clause_name,
                                                    priority    = issue.risk_weight,
                                                    alternative = str(suggestions[index]) if index < len(suggestions) else issue.suggested_alternative,
                                                   )
                                   for index, issue in enumerate(clause_issues))

        return AnalysisResult(global_score       = ClauseRules.clamp_score(int(body["score"])),
                              risk_level         = RiskWeight(body["risk"]),
                              clause_issues      = clause_issues,
                              negotiation_points = negotiation_points,
                              summary            = str(body["summary"]),
                              source_text        = TextProcessor.normalize_text(text),
                             )


def analysis_to_remote_payload(result: AnalysisResult) -> Dict[str, Any]:
    """
    AnalysisResult in the shape the remote /analyze endpoint answers with
    """
    return {"summary"     : result.summary,
            "score"       : result.global_score,
            "risk"        : result.risk_level.value,
            "clauses"     : [{"title"      : issue.clause_name,
                              "risk"       : issue.risk_weight.value,
                              "issue"      : issue.issue_description,
                              "suggestion" : issue.suggested_alternative,
                             }
                             for issue in result.clause_issues],
            "suggestions" : [point.alternative for point in result.negotiation_points],
           }
