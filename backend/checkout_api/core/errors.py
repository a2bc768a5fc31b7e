from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    PROVIDER = "provider"


class CheckoutError(ValueError):
    """Base for errors that surface to the HTTP caller as ``{"error": ...}``."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CheckoutError):
    """Malformed client request (missing items, bad priceId/amount/session id)."""

    kind = ErrorKind.VALIDATION


class ProviderError(CheckoutError):
    """Any failure from the payment provider, network failures included."""

    kind = ErrorKind.PROVIDER

    def __init__(self, message: str):
        super().__init__(message or "Server error")


class ConfigError(RuntimeError):
    """Invalid startup configuration. Fatal, never reaches a request."""


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PROVIDER: 500,
}
