"""FastAPI application factory for the price API."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from satrates.api import routes
from satrates.exceptions import RateServiceError
from satrates.logging import get_logger

logger = get_logger(__name__)


async def _rate_service_error_handler(
    request: Request, exc: RateServiceError
) -> PlainTextResponse:
    """Translate request-level errors into 400 plain-text responses."""
    logger.info("request_rejected", path=request.url.path, reason=str(exc))
    return PlainTextResponse(str(exc), status_code=400)


def create_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to inject startup/shutdown logic.

    Returns:
        FastAPI application with routes and error handlers registered.
        Route handlers expect ``rate_service`` and ``cache`` on app.state.
    """
    app = FastAPI(
        title="Sat Rates",
        lifespan=lifespan,
    )

    app.state.default_limit = 10

    app.add_exception_handler(RateServiceError, _rate_service_error_handler)  # type: ignore[arg-type]
    app.include_router(routes.router)

    return app
