# app/modules/transactions/service.py
import logging
import uuid
from typing import Optional

from .schemas import TransactionRequest, TransactionResponse
from .validation_service import TransactionValidationService
from .partner_auth_service import PartnerAuthService
from .signature_service import SignatureService
from .discount_service import DiscountCalculatorService

logger = logging.getLogger(__name__)

ACCESS_DENIED = "Access Denied!"
INVALID_SIGNATURE = "Invalid signature!"
INTERNAL_ERROR = "Internal server error occurred"


class TransactionsService:
    """Runs a partner transaction through validation, authentication,
    signature verification and discount calculation, in that order.

    ``process_transaction`` never raises: every outcome, including unexpected
    errors, is returned as a ``TransactionResponse``.
    """

    def __init__(
        self,
        validation_service: TransactionValidationService,
        partner_auth_service: PartnerAuthService,
        signature_service: SignatureService,
        discount_service: DiscountCalculatorService
    ):
        self.validation_service = validation_service
        self.partner_auth_service = partner_auth_service
        self.signature_service = signature_service
        self.discount_service = discount_service

    def process_transaction(
        self,
        request: Optional[TransactionRequest],
        request_id: Optional[str] = None
    ) -> TransactionResponse:
        request_id = request_id or str(uuid.uuid4())
        try:
            return self._process(request, request_id)
        except Exception:
            logger.exception(f"[RequestId: {request_id}] Error processing transaction request")
            return TransactionResponse.failure(INTERNAL_ERROR)

    def _process(self, request: Optional[TransactionRequest], request_id: str) -> TransactionResponse:
        logger.info(
            f"[RequestId: {request_id}] Received transaction request from partner: "
            f"{request.partner_key if request else None}"
        )

        # 1. Structure and business rules
        if request is not None:
            logger.info(
                f"[RequestId: {request_id}] Starting validation for partner: {request.partner_key}, "
                f"RefNo: {request.partner_ref_no}, Amount: {request.total_amount} cents"
            )
        validation = self.validation_service.validate_transaction(request)
        if not validation.is_valid:
            logger.warning(f"[RequestId: {request_id}] Validation failed: {validation.message}")
            return TransactionResponse.failure(validation.message)

        # 2. Partner credentials
        if not self.partner_auth_service.validate_partner(
            request.partner_key, request.partner_ref_no, request.partner_password
        ):
            logger.warning(
                f"[RequestId: {request_id}] Partner authentication failed for: "
                f"{request.partner_key} - {request.partner_ref_no}"
            )
            return TransactionResponse.failure(ACCESS_DENIED)

        # 3. Signature
        if not self.signature_service.validate_signature(request):
            logger.warning(
                f"[RequestId: {request_id}] Signature validation failed for partner: {request.partner_key}"
            )
            return TransactionResponse.failure(INVALID_SIGNATURE)

        logger.info(
            f"[RequestId: {request_id}] Transaction validated successfully for partner: {request.partner_key}"
        )

        # 4. Discount
        discount = self.discount_service.calculate_discount(request.total_amount)
        logger.info(
            f"[RequestId: {request_id}] Discount calculated for amount {request.total_amount} cents: "
            f"{discount.percentage}% = {discount.discount_amount} cents, Final: {discount.final_amount} cents"
        )

        if request.items:
            logger.info(f"[RequestId: {request_id}] Transaction contains {len(request.items)} items")

        logger.info(f"[RequestId: {request_id}] Transaction processed successfully")
        return TransactionResponse.success(
            total_amount=request.total_amount,
            total_discount=discount.discount_amount,
            final_amount=discount.final_amount
        )
