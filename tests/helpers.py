import base64
import hashlib
from datetime import datetime, timezone
from typing import Optional

from app.modules.transactions.schemas import TransactionRequest

FIXED_NOW = datetime(2024, 8, 15, 2, 11, 22, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "2024-08-15T02:11:22.0000000Z"

PARTNER_KEY = "FAKEGOOGLE"
PARTNER_REF_NO = "FG-00001"
PARTNER_PASSWORD = "FAKEPASSWORD1234"


def encode_password(password: str) -> str:
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


def sign(timestamp: str, partner_key: str, partner_ref_no: str, total_amount: int, encoded_password: str) -> str:
    """Reference signature: base64 of the lowercase SHA-256 hex digest"""
    raw = f"{timestamp}{partner_key}{partner_ref_no}{total_amount}{encoded_password}"
    hex_digest = hashlib.sha256(raw.encode("utf-8")).hexdigest()
    return base64.b64encode(hex_digest.encode("utf-8")).decode("ascii")


def wall_clock(timestamp: Optional[str]) -> str:
    """yyyyMMddHHmmss from the fields as written, empty if unparseable"""
    try:
        return datetime.fromisoformat(timestamp[:19]).strftime("%Y%m%d%H%M%S")
    except (TypeError, ValueError):
        return ""


def build_payload(timestamp: Optional[str] = FIXED_TIMESTAMP, signed_timestamp: Optional[str] = None, **overrides) -> dict:
    """Wire payload for a valid, signed request; ``overrides`` replace wire fields"""
    payload = {
        "partnerkey": PARTNER_KEY,
        "partnerrefno": PARTNER_REF_NO,
        "partnerpassword": encode_password(PARTNER_PASSWORD),
        "totalamount": 1000,
        "items": [
            {"partneritemref": "i-00001", "name": "Pen", "qty": 4, "unitprice": 200},
            {"partneritemref": "i-00002", "name": "Ruler", "qty": 2, "unitprice": 100},
        ],
        "timestamp": timestamp,
    }
    payload.update({key: value for key, value in overrides.items() if key != "sig"})

    if "sig" in overrides:
        payload["sig"] = overrides["sig"]
    else:
        payload["sig"] = sign(
            signed_timestamp or wall_clock(timestamp),
            payload["partnerkey"],
            payload["partnerrefno"],
            payload["totalamount"],
            payload["partnerpassword"],
        )
    return payload


def build_request(**overrides) -> TransactionRequest:
    return TransactionRequest(**build_payload(**overrides))
