# app/core/exception_handlers.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.middleware import get_request_id

logger = logging.getLogger(__name__)

INVALID_FORMAT = "Invalid request format."

# Schema attribute -> name partners send on the wire
WIRE_NAMES = {
    "partner_key": "partnerkey",
    "partner_ref_no": "partnerrefno",
    "partner_password": "partnerpassword",
    "total_amount": "totalamount",
    "partner_item_ref": "partneritemref",
    "unit_price": "unitprice",
}


def describe_validation_error(exc: RequestValidationError) -> str:
    """Message for a body the transaction schema could not accept"""
    for error in exc.errors():
        if error.get("type") == "string_too_long":
            field = WIRE_NAMES.get(str(error["loc"][-1]), str(error["loc"][-1]))
            max_length = error.get("ctx", {}).get("max_length")
            return f"{field} exceeds maximum length of {max_length} characters."
    return INVALID_FORMAT


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.warning(f"[RequestId: {get_request_id(request)}] Rejected request body: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"result": 0, "resultmessage": message}
        )
