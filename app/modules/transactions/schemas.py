# app/modules/transactions/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal
from dataclasses import dataclass

# Widths partners are held to (64-bit amounts, 32-bit quantities)
MAX_AMOUNT = 9223372036854775807
MAX_QTY = 2147483647


class ItemDetail(BaseModel):
    """Line item of a partner transaction. Amounts are in cents."""
    partner_item_ref: Optional[str] = Field(None, alias="partneritemref", description="Partner item reference (max 50)")
    name: Optional[str] = Field(None, description="Item name (max 100)")
    qty: int = Field(0, strict=True, le=MAX_QTY, description="Quantity, 1 to 5")
    unit_price: int = Field(0, alias="unitprice", strict=True, le=MAX_AMOUNT, description="Unit price in cents")

    class Config:
        populate_by_name = True
        frozen = True


class TransactionRequest(BaseModel):
    """Signed transaction submitted by a partner.

    Required fields are optional at the schema level so that a missing or
    blank field reaches the validator and gets its fixed message.
    """
    partner_key: Optional[str] = Field(None, alias="partnerkey", max_length=50)
    partner_ref_no: Optional[str] = Field(None, alias="partnerrefno", max_length=50)
    partner_password: Optional[str] = Field(None, alias="partnerpassword", max_length=50, description="Base64 encoded password")
    total_amount: int = Field(0, alias="totalamount", strict=True, le=MAX_AMOUNT, description="Total amount in cents")
    items: Optional[List[Optional[ItemDetail]]] = None
    timestamp: Optional[str] = Field(None, description="ISO 8601 date-time")
    sig: Optional[str] = Field(None, description="Request signature")

    class Config:
        populate_by_name = True
        frozen = True
        json_schema_extra = {
            "example": {
                "partnerkey": "FAKEGOOGLE",
                "partnerrefno": "FG-00001",
                "partnerpassword": "RkFLRVBBU1NXT1JEMTIzNA==",
                "totalamount": 1000,
                "items": [
                    {"partneritemref": "i-00001", "name": "Pen", "qty": 4, "unitprice": 200},
                    {"partneritemref": "i-00002", "name": "Ruler", "qty": 2, "unitprice": 100}
                ],
                "timestamp": "2024-08-15T02:11:22.0000000Z",
                "sig": "MDE3ZTBkODg4ZDNhYzU0ZDBlZWRmNmU2NmUy..."
            }
        }


class TransactionResponse(BaseModel):
    """Pipeline outcome. Failure carries ``resultmessage``; success carries the amounts."""
    result: int
    resultmessage: Optional[str] = None
    totalamount: Optional[int] = None
    totaldiscount: Optional[int] = None
    finalamount: Optional[int] = None

    @classmethod
    def failure(cls, message: str) -> "TransactionResponse":
        return cls(result=0, resultmessage=message)

    @classmethod
    def success(cls, total_amount: int, total_discount: int, final_amount: int) -> "TransactionResponse":
        return cls(
            result=1,
            totalamount=total_amount,
            totaldiscount=total_discount,
            finalamount=final_amount
        )


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(False, message)


@dataclass(frozen=True)
class DiscountResult:
    percentage: Decimal
    discount_amount: int
    final_amount: int
