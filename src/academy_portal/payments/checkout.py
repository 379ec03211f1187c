"""
academy_portal.payments.checkout

Subscription checkout creation.

Responsibilities:
- Refuse to start a checkout unless the payment gate and secret key are valid.
- Resolve plan price and currency from the visitor's country.
- Build the processor request (monthly subscription, redirect URLs, metadata).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from academy_portal.errors import (
    CheckoutCreationError,
    PaymentConfigurationError,
    UnsupportedPlanError,
    UnsupportedRegionError,
)
from academy_portal.observability.logging import get_logger
from academy_portal.payments.config_gate import check_secret_key, evaluate
from academy_portal.payments.processor import CheckoutSessionProvider

log = get_logger(__name__)

UNSUPPORTED_COUNTRIES = frozenset({"BD"})


@dataclass(frozen=True, slots=True)
class PlanConfig:
    # Monthly price in whole currency units: AUD for Australia, USD worldwide.
    au: int
    ww: int
    description: str


PLANS: dict[str, PlanConfig] = {
    "Lite": PlanConfig(au=9, ww=6, description="Perfect for getting started - Interactive Blog + 1 Page"),
    "Plus": PlanConfig(
        au=15, ww=10, description="Best for small businesses - Everything in Lite + Enhanced Features"
    ),
    "Pro": PlanConfig(
        au=35, ww=23, description="For growing businesses - Everything in Plus + Premium Support"
    ),
    "Startup": PlanConfig(au=45, ww=30, description="Perfect for startups - 4 Pages + Ecommerce"),
    "Rising Star": PlanConfig(
        au=75, ww=50, description="Best for growing businesses - 10 Pages + 1 Bonus + Ecommerce"
    ),
}


@dataclass(frozen=True, slots=True)
class CheckoutQuote:
    plan_name: str
    country: str
    currency: str
    amount: int
    description: str


def quote(*, plan_name: str, country: str | None, amount: int | None = None) -> CheckoutQuote:
    country_code = (country or "").strip().upper()
    if country_code in UNSUPPORTED_COUNTRIES:
        raise UnsupportedRegionError(f"checkout refused for country {country_code}")

    plan = PLANS.get(plan_name)
    if plan is None:
        raise UnsupportedPlanError(plan_name)

    is_australia = country_code == "AU"
    price = plan.au if is_australia else plan.ww
    if amount is not None and amount != price:
        # The charge always comes from PLANS; a client-sent amount is never trusted.
        log.warning("checkout_amount_ignored", plan=plan_name, requested=amount, price=price)
    return CheckoutQuote(
        plan_name=plan_name,
        country=country_code or "WW",
        currency="aud" if is_australia else "usd",
        amount=price,
        description=plan.description,
    )


def build_session_params(q: CheckoutQuote, *, origin: str) -> dict[str, Any]:
    plan_type = q.plan_name.lower()
    return {
        "payment_method_types": ["card"],
        "line_items": [
            {
                "price_data": {
                    "currency": q.currency,
                    "product_data": {
                        "name": f"{q.plan_name} Plan",
                        "description": q.description,
                    },
                    "unit_amount": q.amount * 100,
                    "recurring": {"interval": "month", "interval_count": 1},
                },
                "quantity": 1,
            }
        ],
        "mode": "subscription",
        "success_url": (
            f"{origin}/payment/success?session_id={{CHECKOUT_SESSION_ID}}"
            f"&plan={plan_type}&amount={q.amount}"
        ),
        "cancel_url": f"{origin}/dashboard?cancelled=true",
        "allow_promotion_codes": True,
        "metadata": {
            "plan_name": q.plan_name,
            "plan_type": plan_type,
            "amount": str(q.amount),
            "currency": q.currency,
            "country": q.country,
            "billing_cycle": "monthly",
        },
    }


class CheckoutCreator:
    def __init__(self, *, provider: CheckoutSessionProvider) -> None:
        self._provider = provider

    async def create(
        self,
        *,
        plan_name: str,
        country: str | None,
        amount: int | None,
        origin: str,
    ) -> str:
        state = evaluate()
        if not state.is_configured:
            raise PaymentConfigurationError(state.error)
        check_secret_key()

        q = quote(plan_name=plan_name, country=country, amount=amount)
        params = build_session_params(q, origin=origin.rstrip("/"))
        log.info(
            "checkout_session_requested",
            plan=q.plan_name,
            country=q.country,
            currency=q.currency,
            amount=q.amount,
        )

        try:
            created = await self._provider.create_checkout_session(params)
        except Exception as e:
            log.error(
                "checkout_session_failed",
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            raise CheckoutCreationError(str(e)) from e

        log.info("checkout_session_created", checkout_session_id=created.id)
        return created.id
