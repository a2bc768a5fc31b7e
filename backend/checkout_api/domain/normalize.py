from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from checkout_api.core.errors import ValidationError
from checkout_api.domain.schema import (
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_QUANTITY,
    MIN_QUANTITY,
    MIN_UNIT_AMOUNT,
    PRICE_ID_PREFIX,
    InlineLineItem,
    PriceData,
    PriceLineItem,
    PricingMode,
    ProductData,
)

LineItem = Union[PriceLineItem, InlineLineItem]


@dataclass(frozen=True)
class NormalizeResult:
    line_items: Optional[List[LineItem]] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[LineItem]:
        if self.error is not None:
            raise self.error
        return self.line_items or []

    def payload(self) -> List[dict]:
        """Line items as plain dicts, ready for the provider call."""
        return [li.model_dump(exclude_none=True) for li in self.unwrap()]


def normalize_items(
    items: Any,
    pricing_mode: PricingMode = PricingMode.REFERENCE,
    currency: str = "gbp",
) -> NormalizeResult:
    """
    Turn raw cart items into provider line items.

    - items must be a non-empty list
    - stops at the first invalid item; no partial results
    - quantities are clamped into [1, 99], never rejected
    """
    if not isinstance(items, list) or not items:
        return NormalizeResult(error=ValidationError("Missing items[]"))

    out: List[LineItem] = []
    for raw in items:
        item = raw if isinstance(raw, dict) else {}
        try:
            if pricing_mode == PricingMode.INLINE:
                out.append(_inline_line_item(item, currency))
            else:
                out.append(_price_line_item(item))
        except ValidationError as exc:
            return NormalizeResult(error=exc)

    return NormalizeResult(line_items=out)


def clamp_quantity(value: Any) -> int:
    n = _to_number(value) if value else None
    if n is None or math.isnan(n):
        return MIN_QUANTITY
    return int(max(MIN_QUANTITY, min(MAX_QUANTITY, n)))


def _price_line_item(item: dict) -> PriceLineItem:
    price_id = item.get("priceId")
    if not isinstance(price_id, str) or not price_id.startswith(PRICE_ID_PREFIX):
        raise ValidationError("Invalid priceId")
    return PriceLineItem(price=price_id, quantity=clamp_quantity(item.get("quantity")))


def _inline_line_item(item: dict, currency: str) -> InlineLineItem:
    amount = _to_amount(item.get("unit_amount"))
    if amount is None or amount < MIN_UNIT_AMOUNT:
        raise ValidationError("Invalid unit_amount")

    name = _to_text(item.get("name"))[:MAX_NAME_LENGTH]
    description = _to_text(item.get("description"))[:MAX_DESCRIPTION_LENGTH]

    return InlineLineItem(
        price_data=PriceData(
            currency=currency,
            unit_amount=amount,
            # the provider rejects empty descriptions, so omit them
            product_data=ProductData(name=name, description=description or None),
        ),
        quantity=clamp_quantity(item.get("quantity")),
    )


def _to_amount(value: Any) -> Optional[int]:
    # ints are kept exact; floats and strings must be integral
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    n = _to_number(value)
    if n is None or not math.isfinite(n) or n != int(n):
        return None
    return int(n)


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _to_text(value: Any) -> str:
    if value is None or value is False:
        return ""
    return str(value)
