from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from checkout_api.core.errors import ConfigError
from checkout_api.domain.schema import PricingMode

DEFAULT_PORT = 4242
DEFAULT_CURRENCY = "gbp"
DEFAULT_ALLOWED_COUNTRIES = "GB,IE"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _split_csv(raw: Optional[str]) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    domain: str

    frontend_origins: List[str] = field(default_factory=list)
    pricing_mode: PricingMode = PricingMode.REFERENCE
    currency: str = DEFAULT_CURRENCY
    allowed_countries: List[str] = field(
        default_factory=lambda: _split_csv(DEFAULT_ALLOWED_COUNTRIES)
    )
    static_dir: Optional[str] = None
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def success_url(self) -> str:
        return f"{self.domain}/success.html?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.domain}/cancel.html"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the process environment (after loading ``.env``)
        or from an explicit mapping.

        Raises ConfigError when STRIPE_SECRET_KEY or DOMAIN is missing, or
        when an optional value (PRICING_MODE, PORT, STATIC_DIR, LOG_LEVEL)
        is malformed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        secret = (environ.get("STRIPE_SECRET_KEY") or "").strip()
        if not secret:
            raise ConfigError("Missing STRIPE_SECRET_KEY")

        # DOMAIN is the frontend base URL, e.g. https://USERNAME.github.io/REPO
        domain = (environ.get("DOMAIN") or "").strip().rstrip("/")
        if not domain:
            raise ConfigError("Missing DOMAIN (e.g. https://USERNAME.github.io/REPO)")

        raw_mode = (environ.get("PRICING_MODE") or PricingMode.REFERENCE.value).strip()
        try:
            mode = PricingMode(raw_mode.lower())
        except ValueError:
            raise ConfigError(
                f"Invalid PRICING_MODE '{raw_mode}'. "
                f"Expected one of: {[m.value for m in PricingMode]}"
            ) from None

        raw_port = environ.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"Invalid PORT '{raw_port}'") from None

        static_dir = (environ.get("STATIC_DIR") or "").strip() or None
        if static_dir and not os.path.isdir(static_dir):
            raise ConfigError(f"STATIC_DIR '{static_dir}' is not a directory")

        log_level = (environ.get("LOG_LEVEL") or "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid LOG_LEVEL '{log_level}'")

        countries = environ.get("ALLOWED_COUNTRIES")
        if countries is None:
            countries = DEFAULT_ALLOWED_COUNTRIES

        return cls(
            stripe_secret_key=secret,
            domain=domain,
            frontend_origins=_split_csv(environ.get("FRONTEND_ORIGIN")),
            pricing_mode=mode,
            currency=(environ.get("CURRENCY") or DEFAULT_CURRENCY).strip().lower(),
            allowed_countries=[c.upper() for c in _split_csv(countries)],
            static_dir=static_dir,
            port=port,
            log_level=log_level,
        )
