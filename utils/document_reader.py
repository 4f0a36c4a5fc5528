# DEPENDENCIES
import sys
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from utils.logger import log_warning
from utils.validators import UploadValidator
from utils.exceptions import ExtractionFailure


class DocumentReader:
    """
    Plain-text extraction for uploaded contracts

    Binary formats (PDF, DOCX) are rejected: the user is asked to paste the text instead
    """
    ENCODINGS = ("utf-8-sig", "latin-1")

    def __init__(self, validator: Optional[UploadValidator] = None):
        self.validator = validator or UploadValidator()


    def read_bytes(self, filename: str, content: bytes) -> str:
        """
        Decode an uploaded document

        Arguments:
        ----------
            filename { str }   : Client-side file name, used for the extension check

            content  { bytes } : Raw file content

        Returns:
        --------
                { str }        : Extracted text, not yet normalized

        Raises:
        -------
            ExtractionFailure  : Unsupported, empty, oversized or undecodable document
        """
        is_valid, message = self.validator.validate(filename, len(content or b""))

        if not is_valid:
            log_warning("Document rejected", filename = filename, reason = message)
            raise ExtractionFailure(message)

        text = self._decode(content)

        if not text.strip():
            log_warning("Document rejected", filename = filename, reason = "no text content")
            raise ExtractionFailure("Could not extract text from file")

        log_info("Document read", filename = filename, size_bytes = len(content), characters = len(text))

        return text


    def read_file(self, path: Path) -> str:
        """
        Read a document from disk
        """
        path = Path(path)

        try:
            content = path.read_bytes()

        except OSError as e:
            raise ExtractionFailure(f"Cannot read {path.name}: {e}") from e

        return self.read_bytes(path.name, content)


    def _decode(self, content: bytes) -> str:
        for encoding in self.ENCODINGS[:-1]:
            try:
                return content.decode(encoding)

            except UnicodeDecodeError:
                continue

        # latin-1 maps every byte
        return content.decode(self.ENCODINGS[-1])
