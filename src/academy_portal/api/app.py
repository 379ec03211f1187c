"""
academy_portal.api.app

FastAPI app factory for the academy portal backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Bind settings and the payment processor to app.state.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from academy_portal import __version__
from academy_portal.api.error_handlers import register_error_handlers
from academy_portal.api.routers.dev_auth import router as dev_auth_router
from academy_portal.api.routers.health import router as health_router
from academy_portal.api.routers.landing import router as landing_router
from academy_portal.api.routers.payments import router as payments_router
from academy_portal.api.routers.payments import verify_router as verify_payment_router
from academy_portal.observability.logging import configure_logging, get_logger
from academy_portal.observability.middleware import RequestContextMiddleware
from academy_portal.payments.config_gate import evaluate
from academy_portal.payments.processor import CheckoutSessionProvider, StripeCheckoutProvider
from academy_portal.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    checkout_provider: CheckoutSessionProvider | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        gate = evaluate()
        if not gate.is_configured:
            # Checkout stays disabled until the environment is fixed; no restart needed.
            log.warning("payments_not_configured", reason=gate.error)
        yield
        log.info("shutdown")

    app = FastAPI(
        title="Racing Academy Portal",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.checkout_provider = checkout_provider or StripeCheckoutProvider()

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(landing_router)
    app.include_router(payments_router)
    app.include_router(verify_payment_router)
    app.include_router(dev_auth_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business logic stays in the payments/routing packages.
