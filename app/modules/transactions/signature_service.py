# app/modules/transactions/signature_service.py
import base64
import hashlib
import hmac
import logging
from typing import Optional

from .schemas import TransactionRequest
from .validation_service import is_blank, parse_timestamp

logger = logging.getLogger(__name__)

SIGNATURE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def normalize_timestamp(value: Optional[str]) -> Optional[str]:
    """Render an ISO 8601 timestamp as ``yyyyMMddHHmmss``.

    The wall-clock fields are taken as written; no conversion to UTC.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.strftime(SIGNATURE_TIMESTAMP_FORMAT)


class SignatureService:
    """Signature generation and verification for partner requests.

    sig = base64( sha256_hex( timestamp + partnerkey + partnerrefno + totalamount + partnerpassword ) )

    The base64 step encodes the lowercase hex digest text, not the raw digest
    bytes. Partners depend on this exact form.
    """

    @staticmethod
    def generate_signature(
        timestamp: str,
        partner_key: str,
        partner_ref_no: str,
        total_amount: int,
        encoded_password: str
    ) -> str:
        signature_string = f"{timestamp}{partner_key}{partner_ref_no}{total_amount}{encoded_password}"
        hex_hash = hashlib.sha256(signature_string.encode("utf-8")).hexdigest()
        return base64.b64encode(hex_hash.encode("utf-8")).decode("ascii")

    def validate_signature(self, request: TransactionRequest) -> bool:
        if request is None or is_blank(request.sig):
            return False

        try:
            timestamp = normalize_timestamp(request.timestamp)
            if timestamp is None:
                return False

            expected = self.generate_signature(
                timestamp,
                request.partner_key,
                request.partner_ref_no,
                request.total_amount,
                request.partner_password
            )
            return hmac.compare_digest(request.sig.strip().encode("utf-8"), expected.encode("utf-8"))
        except Exception:
            logger.warning("Signature verification raised; treating as invalid", exc_info=True)
            return False
