from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import stripe

from checkout_api.core.config import Settings
from checkout_api.core.errors import ProviderError
from checkout_api.domain.schema import SessionStatusResponse

logger = logging.getLogger(__name__)

# sessions cross the provider boundary as plain dicts, never SDK objects
Session = Dict[str, Any]


class CheckoutProvider(Protocol):
    def create_checkout_session(self, params: Dict[str, Any]) -> Session: ...

    def retrieve_checkout_session(self, session_id: str) -> Session: ...


class StripeCheckoutProvider:
    """Thin wrapper over ``stripe.StripeClient`` checkout sessions.

    Every ``stripe.StripeError`` (API, auth, connection) is re-raised as
    ProviderError carrying the provider's message. No retries.
    """

    def __init__(self, secret_key: str, client: Optional[stripe.StripeClient] = None):
        self._client = client or stripe.StripeClient(secret_key, max_network_retries=0)

    def create_checkout_session(self, params: Dict[str, Any]) -> Session:
        logger.debug("Creating checkout session (%d line items)", len(params.get("line_items", [])))
        try:
            session = self._client.checkout.sessions.create(params=params)
        except stripe.StripeError as exc:
            raise ProviderError(_message(exc)) from exc
        return _plain(session)

    def retrieve_checkout_session(self, session_id: str) -> Session:
        logger.debug("Retrieving checkout session %s", session_id)
        try:
            session = self._client.checkout.sessions.retrieve(session_id)
        except stripe.StripeError as exc:
            raise ProviderError(_message(exc)) from exc
        return _plain(session)


def build_session_params(settings: Settings, line_items: List[dict]) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "mode": "payment",
        "line_items": line_items,
        "success_url": settings.success_url,
        "cancel_url": settings.cancel_url,
    }
    if settings.allowed_countries:
        params["shipping_address_collection"] = {
            "allowed_countries": list(settings.allowed_countries)
        }
    return params


def session_status(session: Session) -> SessionStatusResponse:
    details = session.get("customer_details") or {}
    return SessionStatusResponse(
        status=session.get("status"),
        payment_status=session.get("payment_status"),
        customer_email=details.get("email") or None,
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
    )


def _message(exc: stripe.StripeError) -> str:
    # user_message is the provider's human readable text; str(exc) may prefix a request id
    return getattr(exc, "user_message", None) or str(exc) or "Server error"


def _plain(value: Any) -> Any:
    """Recursively turn ``StripeObject`` values into dicts and lists."""
    if isinstance(value, stripe.StripeObject):
        value = value.to_dict()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
