# app/modules/transactions/router.py
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from app.core.middleware import get_request_id
from .dependencies import get_transactions_service
from .schemas import TransactionRequest, TransactionResponse
from .service import TransactionsService

router = APIRouter()


@router.post(
    "/submittrxmessage",
    response_model=TransactionResponse,
    response_model_exclude_none=True
)
async def submit_transaction(
    http_request: Request,
    transaction: Optional[TransactionRequest] = Body(None),
    service: TransactionsService = Depends(get_transactions_service)
):
    """
    Submit a signed partner transaction

    **Pipeline (first failure wins):**
    - Request validation (required fields, amount, timestamp, items)
    - Partner authentication → `Access Denied!`
    - Signature verification → `Invalid signature!`
    - Discount calculation

    **Signature:**
    `base64(sha256_hex(yyyyMMddHHmmss + partnerkey + partnerrefno + totalamount + partnerpassword))`

    Always answers HTTP 200; `result` is 1 on success and 0 on failure with
    `resultmessage` explaining why.
    """
    return service.process_transaction(transaction, request_id=get_request_id(http_request))


@router.get("/transactions/health")
async def transactions_health():
    """Health check of the transactions module"""
    return {
        "service": "transactions",
        "status": "healthy",
        "features": [
            "Request validation",
            "Partner authentication",
            "Signature verification",
            "Tiered discount calculation"
        ],
        "limits": {
            "max_item_qty": 5,
            "currency": "MYR"
        }
    }
