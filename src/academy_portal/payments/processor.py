"""
academy_portal.payments.processor

Payment processor boundary.

Responsibilities:
- Define the narrow capability the portal needs from a processor
  (retrieve / create checkout sessions).
- Provide the Stripe-backed implementation.
- Project processor objects into portal-owned, immutable types.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import stripe

from academy_portal.payments.config_gate import check_secret_key


@dataclass(frozen=True, slots=True)
class CheckoutSessionProjection:
    # payment_status is the processor's own value: "paid", "unpaid" or "no_payment_required".
    payment_status: str
    customer_email: str | None
    amount_total: int | None
    currency: str | None


@dataclass(frozen=True, slots=True)
class CreatedCheckoutSession:
    id: str
    url: str | None = None


@runtime_checkable
class CheckoutSessionProvider(Protocol):
    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionProjection: ...

    async def create_checkout_session(self, params: dict[str, Any]) -> CreatedCheckoutSession: ...


class StripeCheckoutProvider:
    """
    Stripe implementation of `CheckoutSessionProvider`.

    The Stripe SDK is blocking, so each call runs in a worker thread. The secret key
    is resolved per call, which keeps key rotation effective without a restart.
    """

    def __init__(self, *, api_key: Callable[[], str] = check_secret_key) -> None:
        self._api_key = api_key

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionProjection:
        api_key = self._api_key()
        session = await asyncio.to_thread(
            stripe.checkout.Session.retrieve, session_id, api_key=api_key
        )
        return project_checkout_session(session)

    async def create_checkout_session(self, params: dict[str, Any]) -> CreatedCheckoutSession:
        api_key = self._api_key()
        session = await asyncio.to_thread(
            stripe.checkout.Session.create, api_key=api_key, **params
        )
        return CreatedCheckoutSession(id=session.id, url=getattr(session, "url", None))


def project_checkout_session(session: Any) -> CheckoutSessionProjection:
    details = getattr(session, "customer_details", None)
    email = getattr(details, "email", None) if details is not None else None
    return CheckoutSessionProjection(
        payment_status=session.payment_status,
        customer_email=email,
        amount_total=getattr(session, "amount_total", None),
        currency=getattr(session, "currency", None),
    )


# --- Module Notes -----------------------------------------------------------
# Tests substitute a stub provider; nothing outside this module imports `stripe`.
