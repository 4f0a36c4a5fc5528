# DEPENDENCIES
import anyio
import pytest
import requests
from functools import partial

from config.clause_rules import RiskWeight
from services.data_models import DiffStatus
from utils.exceptions import ExtractionFailure
from utils.exceptions import ComparisonMissingFile
from utils.exceptions import ComparisonTooLarge
from services.remote_client import ContraScopeAPIClient
from services.review_service import ContractReviewService


class FakeResponse:
    def __init__(self, status_code, body = None):
        self.status_code = status_code
        self.ok          = 200 <= status_code < 400
        self.reason      = ""
        self.text        = ""
        self._body       = body

    def json(self):
        return self._body


def remote_answering(monkeypatch, response):
    posted = list()

    def fake_post(session, url, **kwargs):
        posted.append(url)

        if isinstance(response, Exception):
            raise response

        return response

    monkeypatch.setattr(requests.Session, "post", fake_post)

    return posted


@pytest.fixture
def local_service():
    return ContractReviewService(client = ContraScopeAPIClient(base_url = ""))


@pytest.fixture
def remote_service():
    return ContractReviewService(client = ContraScopeAPIClient(base_url = "http://remote/api/v1"))


def test_analyze_text_attaches_provenance(local_service):
    result = anyio.run(local_service.analyze_text, "Tacite reconduction.")

    assert result.source_identifier == "Pasted text"
    assert result.analyzed_at.endswith("Z")
    assert result.file_size_bytes is None
    assert result.global_score == 38


@pytest.mark.parametrize("failure", [FakeResponse(404), requests.ConnectionError("refused")])
def test_analysis_falls_back_to_local_rules(monkeypatch, remote_service, failure):
    posted = remote_answering(monkeypatch, failure)
    result = anyio.run(remote_service.analyze_text, "Résiliation unilatérale.")

    assert posted == ["http://remote/api/v1/analyze"]
    assert result.global_score == 55
    assert result.risk_level is RiskWeight.MEDIUM


def test_analysis_uses_remote_answer(monkeypatch, remote_service):
    remote_answering(monkeypatch, FakeResponse(200, {"summary"     : "Remote summary",
                                                     "score"       : 90,
                                                     "risk"        : "high",
                                                     "clauses"     : [],
                                                     "suggestions" : [],
                                                    }))

    result = anyio.run(partial(remote_service.analyze_text, "anything", source_identifier = "a.txt", file_size = 8))

    assert result.summary == "Remote summary"
    assert result.global_score == 90
    assert result.source_identifier == "a.txt"
    assert result.file_size_bytes == 8


def test_analyze_document(local_service):
    outcome = anyio.run(local_service.analyze_document, "terms.txt", b"GDPR applies.")

    assert outcome.ok
    assert outcome.value.source_identifier == "terms.txt"
    assert outcome.value.file_size_bytes == 13
    assert outcome.value.clause_issues[0].clause_name == "Data/Confidentiality"


def test_analyze_document_reports_extraction_failure(local_service):
    outcome = anyio.run(local_service.analyze_document, "terms.pdf", b"%PDF-1.7")

    assert not outcome.ok
    assert isinstance(outcome.error, ExtractionFailure)

    with pytest.raises(ExtractionFailure):
        outcome.unwrap()


def test_compare_documents(local_service):
    outcome = anyio.run(local_service.compare_documents, ("v1.txt", b"pay within 30 days"), ("v2.txt", b"pay within 60 days"))

    assert outcome.ok
    assert [token.status for token in outcome.value].count(DiffStatus.EQUAL) == 3


def test_compare_documents_requires_both_files(local_service):
    outcome = anyio.run(local_service.compare_documents, ("v1.txt", b"text"), None)

    assert isinstance(outcome.error, ComparisonMissingFile)
    assert outcome.error.user_message == "Choose two files to see the differences."


def test_compare_documents_reports_unreadable_side(local_service):
    outcome = anyio.run(local_service.compare_documents, ("v1.txt", b"text"), ("v2.docx", b"PK"))

    assert isinstance(outcome.error, ExtractionFailure)


def test_ask_without_text_never_calls_remote(monkeypatch, remote_service):
    posted = remote_answering(monkeypatch, FakeResponse(200, []))
    hits   = anyio.run(remote_service.ask, "", "termination")

    assert posted == []
    assert hits[0].label == "Analyze a contract first."


def test_ask_falls_back_to_keyword_search(monkeypatch, remote_service):
    remote_answering(monkeypatch, FakeResponse(404))
    hits = anyio.run(remote_service.ask, "Termination requires notice.", "termination")

    assert hits[0].label == 'Clause found: "termination"'


def test_sign_locally(local_service):
    result = anyio.run(local_service.analyze_text, "auto renew")
    record = anyio.run(local_service.sign, result, "Jane", "jane@example.com")

    assert len(record.id) == 8
    assert record.source_identifier == "Pasted text"
    assert record.analyzed_at == result.analyzed_at
    assert local_service.signature_history() == [record]


def test_sign_with_remote_id(monkeypatch, remote_service):
    remote_answering(monkeypatch, FakeResponse(200, {"id": "r-42", "at": "2026-10-19T09:00:00.000Z"}))
    record = anyio.run(remote_service.sign, None, "Jane", "jane@example.com")

    assert record.id == "r-42"
    assert record.signed_at == "2026-10-19T09:00:00.000Z"
    assert remote_service.signature_history() == [record]


def test_sign_falls_back_on_missing_endpoint(monkeypatch, remote_service):
    remote_answering(monkeypatch, FakeResponse(404))
    record = anyio.run(remote_service.sign, None, "", "")

    assert record.signer == "—"
    assert len(remote_service.signature_history()) == 1


def test_fallback_warning_flags_missing_endpoint(monkeypatch, remote_service):
    warnings = list()

    monkeypatch.setattr("services.review_service.log_warning", lambda message, **fields: warnings.append(fields))
    remote_answering(monkeypatch, FakeResponse(404))

    anyio.run(remote_service.analyze_text, "auto renew")

    assert warnings[0]["status_code"] == 404
    assert warnings[0]["missing_endpoint"] is True


def test_oversized_comparison_is_rejected_before_diffing():
    service = ContractReviewService(client = ContraScopeAPIClient(base_url = ""), max_diff_tokens = 3)

    class ExplodingEngine:
        def diff(self, text_a, text_b):
            raise AssertionError("diff engine must not run")

    service.diff_engine = ExplodingEngine()

    with pytest.raises(ComparisonTooLarge):
        anyio.run(service.compare_texts, "one two three four", "one")

    outcome = anyio.run(service.compare_documents, ("v1.txt", b"a b"), ("v2.txt", b"a b c d"))

    assert isinstance(outcome.error, ComparisonTooLarge)
    assert outcome.error.user_message == "These documents are too long to compare word by word. Compare shorter excerpts."


def test_comparison_at_the_limit_runs():
    service = ContractReviewService(client = ContraScopeAPIClient(base_url = ""), max_diff_tokens = 3)
    outcome = anyio.run(service.compare_documents, ("v1.txt", b"a b c"), ("v2.txt", b"a c d"))

    assert outcome.ok
    assert len(outcome.value) == 4
