# DEPENDENCIES
import sys
import anyio
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from utils.logger import log_warning
from config.settings import settings
from config.clause_rules import ClauseRules
from services.data_models import DiffToken
from services.data_models import SearchHit
from services.data_models import TaskOutcome
from utils.exceptions import ExtractionFailure
from services.data_models import AnalysisResult
from utils.document_reader import DocumentReader
from services.data_models import SignatureRecord
from services.data_models import current_timestamp
from services.word_diff_engine import WordDiffEngine
from utils.exceptions import ComparisonMissingFile
from utils.exceptions import ComparisonTooLarge
from utils.text_processor import TextProcessor
from services.signature_ledger import SignatureLedger
from utils.exceptions import RemoteEndpointUnavailable
from services.remote_client import ContraScopeAPIClient
from services.keyword_search import KeywordSpotlightSearch
from services.clause_risk_analyzer import ClauseRiskAnalyzer


# (filename, raw content) of an uploaded document
Upload = Tuple[str, bytes]


class ContractReviewService:
    """
    Asynchronous orchestration of the review workflow

    File reading and remote calls run in worker threads and come back as TaskOutcome values;
    the analyzer, diff engine and search stay synchronous. When a remote endpoint is configured
    it is tried first and any RemoteEndpointUnavailable falls back to the local computation
    """
    PASTED_TEXT_SOURCE = "Pasted text"

    def __init__(self, analyzer: Optional[ClauseRiskAnalyzer] = None, diff_engine: Optional[WordDiffEngine] = None,
                 search: Optional[KeywordSpotlightSearch] = None, reader: Optional[DocumentReader] = None,
                 ledger: Optional[SignatureLedger] = None, client: Optional[ContraScopeAPIClient] = None,
                 max_diff_tokens: Optional[int] = None):
        self.analyzer        = analyzer or ClauseRiskAnalyzer(rules = ClauseRules.get_rules(settings.CLAUSE_RULES_FILE))
        self.diff_engine     = diff_engine or WordDiffEngine()
        self.search          = search or KeywordSpotlightSearch()
        self.reader          = reader or DocumentReader()
        self.ledger          = ledger or SignatureLedger()
        self.client          = client if client is not None else ContraScopeAPIClient()
        self.max_diff_tokens = max_diff_tokens or settings.MAX_DIFF_TOKENS

        log_info("Review service ready",
                 rules         = len(self.analyzer.rules),
                 remote_client = self.client.base_url or None,
                )


    async def read_document(self, filename: str, content: bytes) -> TaskOutcome[str]:
        """
        Extract the text of an uploaded document

        Arguments:
        ----------
            filename { str }   : Client-side file name

            content  { bytes } : Raw upload

        Returns:
        --------
            { TaskOutcome }    : Extracted text, or the ExtractionFailure
        """
        try:
            text = await anyio.to_thread.run_sync(self.reader.read_bytes, filename, content)

        except ExtractionFailure as e:
            return TaskOutcome.failure(e)

        return TaskOutcome.success(text)


    async def analyze_text(self, text: str, source_identifier: str = PASTED_TEXT_SOURCE, file_size: Optional[int] = None) -> AnalysisResult:
        """
        Analyze contract text, stamping the result with its source and the time of this call

        Arguments:
        ----------
            text              { str } : Raw contract text

            source_identifier { str } : File name, or "Pasted text"

            file_size         { int } : Upload size in bytes, when the text came from a file

        Returns:
        --------
            { AnalysisResult }        : Remote analysis when available, local otherwise
        """
        analyzed_at = current_timestamp()
        result      = None

        if self.client.is_configured:
            try:
                result = await anyio.to_thread.run_sync(self.client.analyze, text)

            except RemoteEndpointUnavailable as e:
                log_warning("Remote analysis unavailable, using local rules",
                            reason           = str(e),
                            status_code      = e.status_code,
                            missing_endpoint = e.is_missing_endpoint,
                           )

        if result is None:
            result = self.analyzer.analyze(text)

        result = result.with_provenance(source_identifier = source_identifier,
                                        analyzed_at       = analyzed_at,
                                        file_size_bytes   = file_size,
                                       )

        log_info("Contract analyzed",
                 source       = source_identifier,
                 global_score = result.global_score,
                 risk_level   = result.risk_level.value,
                 issues       = len(result.clause_issues),
                )

        return result


    async def analyze_document(self, filename: str, content: bytes) -> TaskOutcome[AnalysisResult]:
        outcome = await self.read_document(filename, content)

        if not outcome.ok:
            return TaskOutcome.failure(outcome.error)

        result = await self.analyze_text(outcome.value, source_identifier = filename, file_size = len(content))

        return TaskOutcome.success(result)


    async def compare_texts(self, text_a: str, text_b: str) -> List[DiffToken]:
        """
        Word diff of two texts, in a worker thread

        Raises:
        -------
            ComparisonTooLarge : Either text has more than `max_diff_tokens` words
        """
        sizes = (len(TextProcessor.tokenize_words(text_a)), len(TextProcessor.tokenize_words(text_b)))

        # The LCS table is allocated before any comparison starts
        if (max(sizes) > self.max_diff_tokens):
            raise ComparisonTooLarge(f"Diff of {sizes[0]} x {sizes[1]} words exceeds the {self.max_diff_tokens}-word limit")

        return await anyio.to_thread.run_sync(self.diff_engine.diff, text_a, text_b)


    async def compare_documents(self, doc_a: Optional[Upload], doc_b: Optional[Upload]) -> TaskOutcome[List[DiffToken]]:
        """
        Word diff of two uploaded versions

        Arguments:
        ----------
            doc_a { tuple } : (filename, content) of version A, or None

            doc_b { tuple } : (filename, content) of version B, or None

        Returns:
        --------
            { TaskOutcome } : Diff tokens, ComparisonMissingFile when a side is missing,
                              the ExtractionFailure of the first unreadable side,
                              or ComparisonTooLarge
        """
        if (doc_a is None) or (doc_b is None):
            return TaskOutcome.failure(ComparisonMissingFile("Both documents are required for a comparison"))

        texts = list()

        for filename, content in (doc_a, doc_b):
            outcome = await self.read_document(filename, content)

            if not outcome.ok:
                return TaskOutcome.failure(outcome.error)

            texts.append(outcome.value)

        try:
            tokens = await self.compare_texts(texts[0], texts[1])

        except ComparisonTooLarge as e:
            log_warning("Comparison rejected", file_a = doc_a[0], file_b = doc_b[0], reason = str(e))
            return TaskOutcome.failure(e)

        log_info("Documents compared",
                 file_a = doc_a[0],
                 file_b = doc_b[0],
                 **self.diff_engine.summarize(tokens).to_dict()
                )

        return TaskOutcome.success(tokens)


    async def ask(self, analysis_text: Optional[str], question: str) -> List[SearchHit]:
        """
        Answer a question about the analyzed text; never raises

        No analyzed text gives the "analyze first" placeholder without contacting the remote endpoint
        """
        if not analysis_text:
            return self.search.search(None, question)

        if self.client.is_configured:
            try:
                hits = await anyio.to_thread.run_sync(self.client.ask, analysis_text, question)

                if hits:
                    return hits

            except RemoteEndpointUnavailable as e:
                log_warning("Remote QA unavailable, using keyword search",
                            reason           = str(e),
                            status_code      = e.status_code,
                            missing_endpoint = e.is_missing_endpoint,
                           )

        return self.search.search(analysis_text, question)


    async def sign(self, result: Optional[AnalysisResult], signer_name: str, signer_email: str) -> SignatureRecord:
        """
        Record a simulated signature of an analysis; the remote endpoint issues the id when reachable
        """
        return await self.sign_source(source_identifier = result.source_identifier if result is not None else None,
                                      analyzed_at       = result.analyzed_at if result is not None else None,
                                      signer_name       = signer_name,
                                      signer_email      = signer_email,
                                     )


    async def sign_source(self, source_identifier: Optional[str], analyzed_at: Optional[str], signer_name: str, signer_email: str) -> SignatureRecord:
        if self.client.is_configured:
            try:
                issued = await anyio.to_thread.run_sync(self.client.sign, source_identifier, analyzed_at, signer_name, signer_email)

                return self.ledger.add(SignatureRecord(id                = issued["id"],
                                                       signed_at         = issued["at"],
                                                       signer            = signer_name or SignatureLedger.EMPTY_FIELD,
                                                       email             = signer_email or SignatureLedger.EMPTY_FIELD,
                                                       source_identifier = source_identifier,
                                                       analyzed_at       = analyzed_at,
                                                      ))

            except RemoteEndpointUnavailable as e:
                log_warning("Remote signature unavailable, signing locally",
                            reason           = str(e),
                            status_code      = e.status_code,
                            missing_endpoint = e.is_missing_endpoint,
                           )

        return self.ledger.sign(source_identifier = source_identifier,
                                analyzed_at       = analyzed_at,
                                signer_name       = signer_name,
                                signer_email      = signer_email,
                               )


    def signature_history(self) -> List[SignatureRecord]:
        return self.ledger.history()
