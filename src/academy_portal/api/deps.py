"""
academy_portal.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the payment processor.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from academy_portal.payments.processor import CheckoutSessionProvider
from academy_portal.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are bound to the app in `academy_portal.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def checkout_provider_dep(request: Request) -> CheckoutSessionProvider:
    return request.app.state.checkout_provider  # type: ignore[attr-defined]
