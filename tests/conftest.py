"""
tests.conftest

Shared fixtures: clean Stripe environment, stub processor, app + HTTP client.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from academy_portal.api.app import create_app
from academy_portal.observability.logging import configure_logging
from academy_portal.payments.processor import CheckoutSessionProjection, CreatedCheckoutSession
from academy_portal.settings import Settings

STRIPE_ENV_VARS = (
    "STRIPE_PUBLISHABLE_KEY",
    "NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY",
    "STRIPE_SECRET_KEY",
)

VALID_PUBLISHABLE_KEY = "pk_test_51HxAcademyPortal"
VALID_SECRET_KEY = "sk_test_51HxAcademyPortal"

PAID = CheckoutSessionProjection(
    payment_status="paid",
    customer_email="a@b.com",
    amount_total=5000,
    currency="usd",
)


class StubCheckoutProvider:
    """
    In-memory processor. `responses` are consumed in order; the last one repeats.
    An Exception instance in `responses` is raised instead of returned.
    """

    def __init__(
        self,
        *responses: CheckoutSessionProjection | Exception,
        created_id: str = "cs_test_123",
        create_error: Exception | None = None,
    ) -> None:
        self._responses: list[CheckoutSessionProjection | Exception] = list(responses) or [PAID]
        self._created_id = created_id
        self._create_error = create_error
        self.retrieve_calls: list[str] = []
        self.create_calls: list[dict[str, Any]] = []

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionProjection:
        self.retrieve_calls.append(session_id)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    async def create_checkout_session(self, params: dict[str, Any]) -> CreatedCheckoutSession:
        self.create_calls.append(params)
        if self._create_error is not None:
            raise self._create_error
        return CreatedCheckoutSession(id=self._created_id, url=f"https://checkout.test/{self._created_id}")


@pytest.fixture(scope="session", autouse=True)
def _structured_logging() -> None:
    configure_logging(service_name="academy-portal", level="INFO")


@pytest.fixture(autouse=True)
def _clean_stripe_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in STRIPE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stripe_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", VALID_PUBLISHABLE_KEY)
    monkeypatch.setenv("STRIPE_SECRET_KEY", VALID_SECRET_KEY)


@pytest.fixture
def caplog_info(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        jwt_secret="test-secret-0123456789abcdef0123456789",
        site_origin="https://portal.test",
    )


@pytest.fixture
def provider() -> StubCheckoutProvider:
    return StubCheckoutProvider()


@pytest_asyncio.fixture
async def client(
    settings: Settings, provider: StubCheckoutProvider
) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, checkout_provider=provider)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
