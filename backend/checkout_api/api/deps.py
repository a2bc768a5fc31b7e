from fastapi import Request

from checkout_api.core.config import Settings
from checkout_api.provider.stripe_client import CheckoutProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_provider(request: Request) -> CheckoutProvider:
    return request.app.state.provider
