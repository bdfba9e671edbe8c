# app/modules/transactions/partner_auth_service.py
import base64
import binascii
import hmac
import logging
from typing import Optional

from .repository import PartnerDirectory
from .validation_service import is_blank

logger = logging.getLogger(__name__)


def _equals(left: str, right: str) -> bool:
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))


def decode_password(encoded_password: str) -> Optional[str]:
    """Decode a base64 (UTF-8) partner password, ``None`` if it is not valid"""
    try:
        return base64.b64decode(encoded_password, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None


class PartnerAuthService:
    """Authenticates partners against the partner directory"""

    def __init__(self, directory: PartnerDirectory):
        self.directory = directory

    def validate_partner(
        self,
        partner_key: Optional[str],
        partner_ref_no: Optional[str],
        encoded_password: Optional[str]
    ) -> bool:
        if is_blank(partner_key) or is_blank(partner_ref_no) or is_blank(encoded_password):
            return False

        partner = self.directory.get_by_ref_no(partner_ref_no)
        if partner is None:
            return False

        if not _equals(partner.partner_key, partner_key):
            return False

        decoded_password = decode_password(encoded_password)
        if decoded_password is None:
            logger.debug(f"Password for partner {partner_ref_no} is not valid base64")
            return False

        return _equals(decoded_password, partner.password)
