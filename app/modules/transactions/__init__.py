# app/modules/transactions/__init__.py
"""
Transactions module - partner transaction submission

Handles signed transaction requests from partners:
- Request validation (required fields, amount, timestamp freshness, items)
- Partner authentication against the partner directory
- Signature verification (SHA-256, base64 of the hex digest)
- Tiered discount calculation with conditional bonuses

Architecture:
- router.py: transaction endpoints
- service.py: pipeline orchestration
- validation_service.py, partner_auth_service.py, signature_service.py,
  discount_service.py: the pipeline stages
- repository.py: partner directory
- schemas.py: request/response models and result types
"""

from .router import router
from .service import TransactionsService
from .repository import PartnerDirectory, PartnerRecord

__all__ = [
    "router",
    "TransactionsService",
    "PartnerDirectory",
    "PartnerRecord"
]
