# DEPENDENCIES
import sys
import struct
import threading
from typing import List
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from services.data_models import SignatureRecord
from services.data_models import current_timestamp


def compute_fingerprint(value: str) -> str:
    """
    Non-cryptographic 32-bit rolling hash (h = 31*h + unit) over the UTF-16 code units of `value`,
    rendered as 8 zero-padded lowercase hex characters

    Arguments:
    ----------
        value { str } : Text to fingerprint

    Returns:
    --------
        { str }       : e.g. "00000c21" for "ab"
    """
    encoded = value.encode("utf-16-le")
    units   = struct.unpack(f"<{len(encoded) // 2}H", encoded)
    h       = 0

    for unit in units:
        h = (h * 31 + unit) & 0xFFFFFFFF

    return f"{h:08x}"


class SignatureLedger:
    """
    In-memory history of simulated signature events, most recent first
    """
    EMPTY_FIELD = "—"

    def __init__(self):
        self._records : List[SignatureRecord] = list()
        self._lock                            = threading.Lock()


    def sign(self, source_identifier: Optional[str], analyzed_at: Optional[str], signer_name: str, signer_email: str, signed_at: Optional[str] = None) -> SignatureRecord:
        """
        Record a signature event

        Arguments:
        ----------
            source_identifier { str } : File name of the signed analysis, if any

            analyzed_at       { str } : Timestamp of the signed analysis, if any

            signer_name       { str } : Signer display name

            signer_email      { str } : Signer email

            signed_at         { str } : Signature time; now when omitted

        Returns:
        --------
            { SignatureRecord }       : The new record, already at the head of the history
        """
        signed_at   = signed_at or current_timestamp()
        fingerprint = compute_fingerprint((source_identifier or "") + (analyzed_at or "") + (signer_name or "") + (signer_email or "") + signed_at)

        record      = SignatureRecord(id                = fingerprint,
                                      signed_at         = signed_at,
                                      signer            = signer_name or self.EMPTY_FIELD,
                                      email             = signer_email or self.EMPTY_FIELD,
                                      source_identifier = source_identifier,
                                      analyzed_at       = analyzed_at,
                                     )

        return self.add(record)


    def add(self, record: SignatureRecord) -> SignatureRecord:
        """
        Prepend an already-built record, e.g. one issued by the remote endpoint
        """
        with self._lock:
            self._records.insert(0, record)

        log_info("Signature recorded", signature_id = record.id, source = record.source_identifier)

        return record


    def history(self) -> List[SignatureRecord]:
        with self._lock:
            return list(self._records)


    def clear(self):
        with self._lock:
            self._records.clear()


    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
