import logging
from typing import Optional

from fastapi import APIRouter, Depends

from checkout_api.api.deps import get_provider
from checkout_api.core.errors import ProviderError
from checkout_api.domain.schema import ERROR_RESPONSES, SessionStatusResponse
from checkout_api.domain.validate import validate_session_id
from checkout_api.provider.stripe_client import CheckoutProvider, session_status

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.get(
    "/session-status",
    response_model=SessionStatusResponse,
    responses=ERROR_RESPONSES,
)
def get_session_status(
    session_id: Optional[str] = None,
    provider: CheckoutProvider = Depends(get_provider),
) -> SessionStatusResponse:
    sid = validate_session_id(session_id)

    try:
        session = provider.retrieve_checkout_session(sid)
    except ProviderError as exc:
        logger.error("Session lookup for %s failed: %s", sid, exc)
        raise

    return session_status(session)
