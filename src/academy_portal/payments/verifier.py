"""
academy_portal.payments.verifier

Server-side verification of a completed checkout.

Responsibilities:
- Re-read the checkout session from the processor (never trust client state).
- Normalize the processor response into a stable status contract.
- Resolve every failure to a result value; processor detail goes to logs only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from academy_portal.observability.logging import get_logger
from academy_portal.payments.processor import (
    CheckoutSessionProjection,
    CheckoutSessionProvider,
)

log = get_logger(__name__)

SESSION_ID_REQUIRED = "Session ID required"
INTERNAL_SERVER_ERROR = "Internal server error"


@dataclass(frozen=True, slots=True)
class VerifiedPaymentResult:
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def normalize(projection: CheckoutSessionProjection) -> dict[str, Any]:
    return {
        "status": projection.payment_status,
        "customer_email": projection.customer_email,
        "amount_total": projection.amount_total,
        "currency": projection.currency,
    }


class PaymentVerifier:
    def __init__(self, *, provider: CheckoutSessionProvider) -> None:
        self._provider = provider

    async def verify(self, session_id: str | None) -> VerifiedPaymentResult:
        if not session_id:
            return VerifiedPaymentResult(status_code=400, body={"error": SESSION_ID_REQUIRED})

        # Exactly one processor read per call; no retry and no cache.
        try:
            projection = await self._provider.retrieve_checkout_session(session_id)
        except Exception as e:
            log.error(
                "payment_verification_failed",
                session_id=session_id,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return VerifiedPaymentResult(status_code=500, body={"error": INTERNAL_SERVER_ERROR})

        log.info(
            "payment_verified",
            session_id=session_id,
            payment_status=projection.payment_status,
        )
        return VerifiedPaymentResult(status_code=200, body=normalize(projection))
