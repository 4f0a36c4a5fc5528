# DEPENDENCIES
from typing import Optional


class ContraScopeError(Exception):
    """
    Base class for every error raised at the ContraScope I/O boundary
    """
    user_message = "Something went wrong."


class ExtractionFailure(ContraScopeError):
    """
    Text could not be obtained from an uploaded document (unreadable, unsupported, empty or oversized)
    """
    user_message = "Unable to read this file. Try another plain-text document or paste the text."


class ComparisonMissingFile(ContraScopeError):
    """
    A comparison was requested without both documents
    """
    user_message = "Choose two files to see the differences."


class ComparisonTooLarge(ContraScopeError):
    """
    A document exceeds the word count the diff engine is allowed to align
    """
    user_message = "These documents are too long to compare word by word. Compare shorter excerpts."


class RemoteEndpointUnavailable(ContraScopeError):
    """
    The optional remote analysis / QA endpoint failed; callers fall back to local computation
    """
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


    @property
    def is_missing_endpoint(self) -> bool:
        return self.status_code == 404


class RuleTableError(ContraScopeError):
    """
    A clause rule table could not be loaded or validated
    """
