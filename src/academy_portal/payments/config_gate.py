"""
academy_portal.payments.config_gate

Request-time validation of the Stripe credentials.

Responsibilities:
- Report whether the publishable key is usable, as a value (never raised).
- Check the server-side secret key before any processor write.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from academy_portal.errors import PaymentConfigurationError
from academy_portal.settings import PaymentCredentials, load_payment_credentials

PLACEHOLDER_PUBLISHABLE_KEY = "pk_test_placeholder_key"
PUBLISHABLE_KEY_PREFIX = "pk_"
SECRET_KEY_PREFIXES = ("sk_test_", "sk_live_")

KEY_MISSING = "Stripe publishable key is not configured in environment variables."
KEY_PLACEHOLDER = "Stripe is using placeholder keys. Please configure with real Stripe keys."
KEY_INVALID_FORMAT = "Invalid Stripe publishable key format."


@dataclass(frozen=True, slots=True)
class PaymentCredentialState:
    is_configured: bool
    error: str | None
    publishable_key: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_configured": self.is_configured,
            "error": self.error,
            "publishable_key": self.publishable_key,
        }


def evaluate(credentials: PaymentCredentials | None = None) -> PaymentCredentialState:
    """
    Validate the publishable key; the first failing rule wins.

    Credentials are re-read from the environment on every call unless passed in.
    """

    creds = credentials if credentials is not None else load_payment_credentials()
    key = creds.publishable_key

    if not key:
        return PaymentCredentialState(is_configured=False, error=KEY_MISSING, publishable_key=None)
    if key == PLACEHOLDER_PUBLISHABLE_KEY:
        return PaymentCredentialState(
            is_configured=False, error=KEY_PLACEHOLDER, publishable_key=None
        )
    if not key.startswith(PUBLISHABLE_KEY_PREFIX):
        return PaymentCredentialState(
            is_configured=False, error=KEY_INVALID_FORMAT, publishable_key=None
        )
    return PaymentCredentialState(is_configured=True, error=None, publishable_key=key)


def is_configured() -> bool:
    return evaluate().is_configured


def check_secret_key(credentials: PaymentCredentials | None = None) -> str:
    """
    Return the Stripe secret key, or raise `PaymentConfigurationError`.

    The raised detail names the problem but never includes the key itself.
    """

    creds = credentials if credentials is not None else load_payment_credentials()
    secret = creds.secret_key.get_secret_value() if creds.secret_key else ""
    if not secret:
        raise PaymentConfigurationError("STRIPE_SECRET_KEY environment variable is not set")
    if not secret.startswith(SECRET_KEY_PREFIXES):
        raise PaymentConfigurationError(
            "STRIPE_SECRET_KEY appears to be invalid (should start with sk_test_ or sk_live_)"
        )
    return secret


# --- Module Notes -----------------------------------------------------------
# Callers must consult `evaluate()` before offering a checkout action; the API exposes
# it at GET /api/stripe/config and `checkout.CheckoutCreator` enforces it server-side.
