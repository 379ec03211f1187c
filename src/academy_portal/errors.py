"""
academy_portal.errors

Typed exceptions raised by the portal's service layer.

Responsibilities:
- Carry an HTTP status and a user-safe message for every domain failure.
- Keep internal detail (processor messages, key fragments) out of client responses.

Rendering lives in `academy_portal.api.error_handlers`.
"""

from __future__ import annotations

from typing import Any


class PortalError(Exception):
    """
    Base class for portal failures.

    `detail` is for server-side logs only; `public_message` is what the client sees.
    """

    http_status: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None, *, public_message: str | None = None) -> None:
        super().__init__(detail or public_message or self.public_message)
        self.detail = detail
        if public_message is not None:
            self.public_message = public_message

    def to_response(self) -> dict[str, Any]:
        return {"error": self.public_message}


class InvalidRequestError(PortalError):
    http_status = 400
    public_message = "Invalid request data"


class UnsupportedRegionError(InvalidRequestError):
    public_message = (
        "Bangladesh payments are not supported through this checkout. Please contact support."
    )


class UnsupportedPlanError(InvalidRequestError):
    def __init__(self, plan_name: str) -> None:
        super().__init__(
            f"unknown plan {plan_name!r}",
            public_message=f'Plan "{plan_name}" is not supported',
        )
        self.plan_name = plan_name


class PaymentConfigurationError(PortalError):
    public_message = "Stripe configuration error"


class CheckoutCreationError(PortalError):
    public_message = "Failed to create checkout session"


# --- Module Notes -----------------------------------------------------------
# Payment *verification* never raises these: it resolves every failure to a result
# value at its own boundary (see `payments.verifier`).
