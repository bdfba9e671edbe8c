# app/modules/transactions/dependencies.py
from functools import lru_cache

from app.config.settings import settings
from .repository import PartnerDirectory
from .validation_service import TransactionValidationService
from .partner_auth_service import PartnerAuthService
from .signature_service import SignatureService
from .discount_service import DiscountCalculatorService
from .service import TransactionsService


@lru_cache()
def get_partner_directory() -> PartnerDirectory:
    """Partner directory loaded once per process from settings"""
    return PartnerDirectory.from_config(settings.partners)


@lru_cache()
def get_transactions_service() -> TransactionsService:
    """Dependency for the transaction pipeline (stateless, shared)"""
    return TransactionsService(
        validation_service=TransactionValidationService(
            tolerance_minutes=settings.timestamp_tolerance_minutes
        ),
        partner_auth_service=PartnerAuthService(get_partner_directory()),
        signature_service=SignatureService(),
        discount_service=DiscountCalculatorService(
            max_discount=settings.max_discount_percentage
        )
    )
