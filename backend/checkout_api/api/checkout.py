import logging

from fastapi import APIRouter, Depends

from checkout_api.api.deps import get_provider, get_settings
from checkout_api.core.config import Settings
from checkout_api.core.errors import ProviderError
from checkout_api.domain.normalize import normalize_items
from checkout_api.domain.schema import (
    ERROR_RESPONSES,
    CheckoutRequest,
    CheckoutSessionResponse,
)
from checkout_api.provider.stripe_client import CheckoutProvider, build_session_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses=ERROR_RESPONSES,
)
def create_checkout_session(
    req: CheckoutRequest,
    settings: Settings = Depends(get_settings),
    provider: CheckoutProvider = Depends(get_provider),
) -> CheckoutSessionResponse:
    result = normalize_items(
        req.items, pricing_mode=settings.pricing_mode, currency=settings.currency
    )
    if not result.ok:
        logger.info("Rejected checkout request: %s", result.error)

    params = build_session_params(settings, result.payload())

    try:
        session = provider.create_checkout_session(params)
    except ProviderError as exc:
        logger.error("Checkout session creation failed: %s", exc)
        raise

    logger.info("Created checkout session %s", session.get("id"))
    return CheckoutSessionResponse(url=session["url"])
