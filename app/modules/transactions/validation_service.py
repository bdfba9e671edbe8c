# app/modules/transactions/validation_service.py
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from dateutil.parser import isoparse

from .schemas import ItemDetail, TransactionRequest, ValidationResult

Clock = Callable[[], datetime]

MAX_ITEM_REF_LENGTH = 50
MAX_ITEM_NAME_LENGTH = 100
MAX_ITEM_QTY = 5

# (attribute, wire name) in the order they are checked
REQUIRED_FIELDS = (
    ("partner_key", "partnerkey"),
    ("partner_ref_no", "partnerrefno"),
    ("partner_password", "partnerpassword"),
    ("timestamp", "timestamp"),
    ("sig", "sig"),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 date-time, ``None`` when it is missing or malformed"""
    if is_blank(value):
        return None
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


class TransactionValidationService:
    """Structural and business validation of a partner transaction.

    Checks run in a fixed order and the first failure is returned; nothing is
    aggregated.
    """

    def __init__(self, tolerance_minutes: int = 5, clock: Clock = utc_now):
        self.tolerance = timedelta(minutes=tolerance_minutes)
        self.clock = clock

    def validate_transaction(self, request: Optional[TransactionRequest]) -> ValidationResult:
        if request is None:
            return ValidationResult.fail("Request is Required.")

        for attribute, wire_name in REQUIRED_FIELDS:
            if is_blank(getattr(request, attribute)):
                return ValidationResult.fail(f"{wire_name} is Required.")

        if request.total_amount <= 0:
            return ValidationResult.fail("totalamount must be a positive value.")

        request_time = parse_timestamp(request.timestamp)
        if request_time is None:
            return ValidationResult.fail("timestamp must be in valid ISO 8601 format.")

        if self._is_expired(request_time):
            return ValidationResult.fail("Expired.")

        if request.items:
            for item in request.items:
                item_result = self.validate_item(item)
                if not item_result.is_valid:
                    return item_result

            calculated_total = sum(item.qty * item.unit_price for item in request.items)
            if calculated_total != request.total_amount:
                return ValidationResult.fail("Invalid Total Amount.")

        return ValidationResult.ok()

    def validate_item(self, item: Optional[ItemDetail]) -> ValidationResult:
        if item is None:
            return ValidationResult.fail("Item is Required.")

        if is_blank(item.partner_item_ref):
            return ValidationResult.fail("partneritemref is Required.")
        if len(item.partner_item_ref) > MAX_ITEM_REF_LENGTH:
            return ValidationResult.fail(
                f"partneritemref exceeds maximum length of {MAX_ITEM_REF_LENGTH} characters."
            )

        if is_blank(item.name):
            return ValidationResult.fail("name is Required.")
        if len(item.name) > MAX_ITEM_NAME_LENGTH:
            return ValidationResult.fail(
                f"name exceeds maximum length of {MAX_ITEM_NAME_LENGTH} characters."
            )

        if item.qty <= 0:
            return ValidationResult.fail("qty must be a positive value.")
        if item.qty > MAX_ITEM_QTY:
            return ValidationResult.fail(f"qty must not exceed {MAX_ITEM_QTY}.")

        if item.unit_price <= 0:
            return ValidationResult.fail("unitprice must be a positive value.")

        return ValidationResult.ok()

    def _is_expired(self, request_time: datetime) -> bool:
        # Naive timestamps are taken as server local time
        try:
            request_utc = request_time.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            # year 1 / year 9999 with an offset falls outside datetime's range
            return True
        return abs(self.clock() - request_utc) > self.tolerance
