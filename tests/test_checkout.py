from __future__ import annotations

import pytest
from conftest import StubCheckoutProvider

from academy_portal.errors import (
    CheckoutCreationError,
    PaymentConfigurationError,
    UnsupportedPlanError,
    UnsupportedRegionError,
)
from academy_portal.payments.checkout import CheckoutCreator, build_session_params, quote


def test_quote_uses_aud_pricing_for_australia() -> None:
    q = quote(plan_name="Lite", country="au")
    assert (q.currency, q.amount, q.country) == ("aud", 9, "AU")


def test_quote_uses_usd_pricing_worldwide() -> None:
    q = quote(plan_name="Rising Star", country="NZ")
    assert (q.currency, q.amount, q.country) == ("usd", 50, "NZ")


def test_quote_without_country_is_worldwide() -> None:
    q = quote(plan_name="Pro", country=None)
    assert (q.currency, q.amount, q.country) == ("usd", 23, "WW")


def test_client_amount_never_overrides_plan_price(caplog_info: pytest.LogCaptureFixture) -> None:
    assert quote(plan_name="Plus", country="US", amount=1).amount == 10
    assert "checkout_amount_ignored" in caplog_info.text


@pytest.mark.parametrize("country", ["", "  "])
def test_blank_country_is_worldwide(country: str) -> None:
    q = quote(plan_name="Lite", country=country)
    assert (q.currency, q.amount, q.country) == ("usd", 6, "WW")


def test_bangladesh_is_refused() -> None:
    with pytest.raises(UnsupportedRegionError):
        quote(plan_name="Lite", country="BD")


def test_unknown_plan_is_refused() -> None:
    with pytest.raises(UnsupportedPlanError) as exc_info:
        quote(plan_name="Platinum", country="US")
    assert exc_info.value.to_response() == {"error": 'Plan "Platinum" is not supported'}


def test_session_params_describe_monthly_subscription() -> None:
    params = build_session_params(
        quote(plan_name="Startup", country="AU"), origin="https://portal.test"
    )

    item = params["line_items"][0]["price_data"]
    assert params["mode"] == "subscription"
    assert item["unit_amount"] == 4500
    assert item["currency"] == "aud"
    assert item["recurring"] == {"interval": "month", "interval_count": 1}
    assert params["success_url"] == (
        "https://portal.test/payment/success?session_id={CHECKOUT_SESSION_ID}"
        "&plan=startup&amount=45"
    )
    assert params["cancel_url"] == "https://portal.test/dashboard?cancelled=true"
    assert params["metadata"]["billing_cycle"] == "monthly"


@pytest.mark.asyncio
async def test_checkout_requires_configured_gate() -> None:
    provider = StubCheckoutProvider()
    with pytest.raises(PaymentConfigurationError):
        await CheckoutCreator(provider=provider).create(
            plan_name="Lite", country="US", amount=None, origin="https://portal.test"
        )
    assert provider.create_calls == []


@pytest.mark.asyncio
async def test_checkout_requires_secret_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_abc")
    provider = StubCheckoutProvider()
    with pytest.raises(PaymentConfigurationError):
        await CheckoutCreator(provider=provider).create(
            plan_name="Lite", country="US", amount=None, origin="https://portal.test"
        )
    assert provider.create_calls == []


@pytest.mark.asyncio
async def test_checkout_returns_processor_session_id(stripe_env: None) -> None:
    provider = StubCheckoutProvider(created_id="cs_test_abc")
    session_id = await CheckoutCreator(provider=provider).create(
        plan_name="Lite", country="US", amount=None, origin="https://portal.test/"
    )
    assert session_id == "cs_test_abc"
    assert len(provider.create_calls) == 1
    assert provider.create_calls[0]["cancel_url"] == "https://portal.test/dashboard?cancelled=true"


@pytest.mark.asyncio
async def test_processor_failure_becomes_checkout_error(stripe_env: None) -> None:
    provider = StubCheckoutProvider(create_error=RuntimeError("card_declined"))
    with pytest.raises(CheckoutCreationError) as exc_info:
        await CheckoutCreator(provider=provider).create(
            plan_name="Lite", country="US", amount=None, origin="https://portal.test"
        )
    assert exc_info.value.to_response() == {"error": "Failed to create checkout session"}


@pytest.mark.asyncio
async def test_checkout_failure_logs_mask_secret_keys(
    stripe_env: None, caplog_info: pytest.LogCaptureFixture
) -> None:
    provider = StubCheckoutProvider(
        create_error=RuntimeError("Invalid API Key provided: sk_test_leak987")
    )
    with pytest.raises(CheckoutCreationError):
        await CheckoutCreator(provider=provider).create(
            plan_name="Lite", country="US", amount=None, origin="https://portal.test"
        )
    assert "checkout_session_failed" in caplog_info.text
    assert "sk_test_leak987" not in caplog_info.text
    assert "Traceback (most recent call last)" not in caplog_info.text
