# DEPENDENCIES
import pytest
import requests

from config.clause_rules import RiskWeight
from services.remote_client import ContraScopeAPIClient
from utils.exceptions import RemoteEndpointUnavailable
from services.clause_risk_analyzer import ClauseRiskAnalyzer
from services.remote_client import analysis_to_remote_payload


class FakeResponse:
    def __init__(self, status_code = 200, body = None, text = ""):
        self.status_code = status_code
        self.ok          = 200 <= status_code < 400
        self.reason      = "Not Found" if status_code == 404 else "OK"
        self.text        = text
        self._body       = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")

        return self._body


@pytest.fixture
def calls(monkeypatch):
    """
    Records every POST and answers with the queued FakeResponse
    """
    recorded = {"requests": list(), "response": FakeResponse(body = {})}

    def fake_post(session, url, json = None, headers = None, timeout = None):
        recorded["requests"].append({"url": url, "json": json, "headers": headers, "timeout": timeout})

        if isinstance(recorded["response"], Exception):
            raise recorded["response"]

        return recorded["response"]

    monkeypatch.setattr(requests.Session, "post", fake_post)

    return recorded


def test_unconfigured_client_raises_without_calling(calls):
    client = ContraScopeAPIClient(base_url = "")

    assert not client.is_configured

    with pytest.raises(RemoteEndpointUnavailable):
        client.analyze("text")

    assert calls["requests"] == []


def test_analyze_parses_remote_payload(calls):
    calls["response"] = FakeResponse(body = {"summary"     : "1 sensitive clause(s) detected.",
                                             "score"       : 55,
                                             "risk"        : "medium",
                                             "clauses"     : [{"title"      : "Unilateral Termination",
                                                               "risk"       : "high",
                                                               "issue"      : "One-sided termination.",
                                                               "suggestion" : "Require notice.",
                                                              }],
                                             "suggestions" : ["Thirty days' notice."],
                                            })

    client = ContraScopeAPIClient(base_url = "http://remote/api/v1/", timeout = 3)
    result = client.analyze("  Termination   without notice ")

    request = calls["requests"][0]

    assert request["url"] == "http://remote/api/v1/analyze"
    assert request["json"] == {"text": "  Termination   without notice "}
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["timeout"] == 3

    assert result.global_score == 55
    assert result.risk_level is RiskWeight.MEDIUM
    assert result.clause_issues[0].risk_weight is RiskWeight.HIGH
    assert result.negotiation_points[0].alternative == "Thirty days' notice."
    assert result.source_text == "Termination without notice"


def test_default_timeout_is_twelve_seconds(calls):
    ContraScopeAPIClient(base_url = "http://remote").ask("text", "question")

    assert calls["requests"][0]["timeout"] == 12.0


@pytest.mark.parametrize("response, status_code", [(FakeResponse(status_code = 404, text = "Not Found"), 404),
                                                   (FakeResponse(status_code = 500, text = "boom"), 500),
                                                   (FakeResponse(body = None), 200),
                                                   (FakeResponse(body = {"score": 10}), None),
                                                   (requests.ConnectionError("refused"), None),
                                                   (requests.Timeout("slow"), None),
                                                  ])
def test_failures_become_remote_unavailable(calls, response, status_code):
    calls["response"] = response

    with pytest.raises(RemoteEndpointUnavailable) as error:
        ContraScopeAPIClient(base_url = "http://remote").analyze("text")

    assert error.value.status_code == status_code


def test_missing_endpoint_is_flagged(calls):
    calls["response"] = FakeResponse(status_code = 404)

    with pytest.raises(RemoteEndpointUnavailable) as error:
        ContraScopeAPIClient(base_url = "http://remote").sign("a.txt", None, "Jane", "jane@example.com")

    assert error.value.is_missing_endpoint


def test_ask_and_sign(calls):
    client            = ContraScopeAPIClient(base_url = "http://remote")

    calls["response"] = FakeResponse(body = [{"clause": "Termination requires notice.", "summary": "Found", "leadingContext": "Article 3. "}])
    hits              = client.ask("Termination requires notice.", "termination")

    assert hits[0].context_snippet == "Termination requires notice."
    assert hits[0].label == "Found"
    assert hits[0].leading_context == "Article 3. "

    calls["response"] = FakeResponse(body = {"id": "abc12345", "at": "2026-10-19T09:00:00.000Z"})

    assert client.sign("a.txt", None, "Jane", "jane@example.com") == {"id": "abc12345", "at": "2026-10-19T09:00:00.000Z"}
    assert calls["requests"][-1]["json"] == {"fileName": "a.txt", "analyzedAt": None, "signer": "Jane", "email": "jane@example.com"}


def test_remote_payload_shape():
    payload = analysis_to_remote_payload(ClauseRiskAnalyzer().analyze("auto renew"))

    assert set(payload) == {"summary", "score", "risk", "clauses", "suggestions"}
    assert payload["score"] == 38
    assert payload["clauses"][0]["title"] == "Automatic Renewal"
    assert len(payload["suggestions"]) == 1
