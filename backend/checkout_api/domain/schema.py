from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

MIN_QUANTITY = 1
MAX_QUANTITY = 99
MIN_UNIT_AMOUNT = 50  # minor currency units
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 200
PRICE_ID_PREFIX = "price_"
SESSION_ID_PREFIX = "cs_"


class PricingMode(str, Enum):
    REFERENCE = "reference"
    INLINE = "inline"


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ----------------------------
# Requests
# ----------------------------


class CheckoutRequest(BaseModel):
    # items stay untyped so a non-array reaches the normalizer as a 400
    model_config = ConfigDict(extra="ignore")

    items: Any = None


# ----------------------------
# Provider line items
# ----------------------------


class PriceLineItem(StrictBaseModel):
    price: str
    quantity: int = Field(ge=MIN_QUANTITY, le=MAX_QUANTITY)


class ProductData(StrictBaseModel):
    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)


class PriceData(StrictBaseModel):
    currency: str = Field(min_length=1)
    unit_amount: int = Field(ge=MIN_UNIT_AMOUNT)
    product_data: ProductData


class InlineLineItem(StrictBaseModel):
    price_data: PriceData
    quantity: int = Field(ge=MIN_QUANTITY, le=MAX_QUANTITY)


# ----------------------------
# Responses
# ----------------------------


class CheckoutSessionResponse(StrictBaseModel):
    url: str


class SessionStatusResponse(StrictBaseModel):
    status: Optional[str] = None
    payment_status: Optional[str] = None
    customer_email: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None


class HealthResponse(StrictBaseModel):
    ok: bool = True


class ErrorResponse(StrictBaseModel):
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed request"},
    500: {"model": ErrorResponse, "description": "Payment provider failure"},
}
