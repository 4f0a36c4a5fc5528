# DEPENDENCIES
import sys
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import settings


class UploadValidator:
    """
    Checks an uploaded document before any text extraction is attempted
    """
    def __init__(self, allowed_extensions: Optional[List[str]] = None, max_size: Optional[int] = None):
        self.allowed_extensions = [ext.lower() for ext in (allowed_extensions or settings.ALLOWED_EXTENSIONS)]
        self.max_size           = max_size if max_size is not None else settings.MAX_UPLOAD_SIZE


    def validate(self, filename: Optional[str], size: int) -> Tuple[bool, str]:
        """
        Validate name and size of an upload

        Arguments:
        ----------
            filename { str } : Client-side file name

            size     { int } : Size in bytes

        Returns:
        --------
            { tuple }        : (is_valid, message)
        """
        extension = Path(filename or "").suffix.lower()

        if extension not in self.allowed_extensions:
            return False, f"Invalid file type. Allowed: {', '.join(self.allowed_extensions)}"

        if (size > self.max_size):
            return False, f"File too large. Max size: {self.max_size / (1024 * 1024):.1f}MB"

        if (size == 0):
            return False, "File is empty"

        return True, "OK"
