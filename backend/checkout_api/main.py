import logging
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from checkout_api.api.router import router as api_router
from checkout_api.core.config import Settings
from checkout_api.core.errors import STATUS_BY_KIND, CheckoutError, ConfigError
from checkout_api.provider.stripe_client import CheckoutProvider, StripeCheckoutProvider

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings, provider: Optional[CheckoutProvider] = None
) -> FastAPI:
    app = FastAPI(title="Checkout API", version="0.1.0")
    app.state.settings = settings
    app.state.provider = provider or StripeCheckoutProvider(settings.stripe_secret_key)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_origins or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(CheckoutError)
    def checkout_error_handler(_, exc: CheckoutError):
        return JSONResponse(
            status_code=STATUS_BY_KIND[exc.kind], content={"error": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    def request_validation_handler(_, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    def unhandled_error_handler(_, exc: Exception):
        logger.error("Unhandled error: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=500, content={"error": str(exc) or "Server error"}
        )

    app.include_router(api_router)

    # mounted last so API routes win over same-named files
    if settings.static_dir:
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True), name="static"
        )

    return app


def run() -> None:
    import uvicorn

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.error("%s", exc)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    logger.info("API listening on port %d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":  # pragma: no cover
    run()
