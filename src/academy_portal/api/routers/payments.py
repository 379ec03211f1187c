"""
academy_portal.api.routers.payments

Stripe-facing endpoints.

Responsibilities:
- Verify a completed checkout (`GET /api/verify-payment`, also `/api/stripe/verify-payment`).
- Report whether checkout can be offered (`GET /api/stripe/config`).
- Start a subscription checkout (`POST /api/stripe/create-checkout-session`).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from academy_portal.api.deps import checkout_provider_dep, settings_dep
from academy_portal.payments.checkout import CheckoutCreator
from academy_portal.payments.config_gate import evaluate
from academy_portal.payments.processor import CheckoutSessionProvider
from academy_portal.payments.verifier import PaymentVerifier
from academy_portal.settings import Settings

router = APIRouter(prefix="/api/stripe", tags=["payments"])
# Unprefixed alias: GET /api/verify-payment serves the same verification.
verify_router = APIRouter(prefix="/api", tags=["payments"])


class CheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_name: str = Field(alias="planName", min_length=1, max_length=64)
    country: str | None = Field(default=None, max_length=2)
    amount: int | None = Field(default=None, gt=0)


@router.get("/verify-payment")
@verify_router.get("/verify-payment")
async def verify_payment(
    session_id: str | None = Query(default=None),
    provider: CheckoutSessionProvider = Depends(checkout_provider_dep),
) -> JSONResponse:
    result = await PaymentVerifier(provider=provider).verify(session_id)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("/config")
async def payment_config() -> dict[str, Any]:
    return evaluate().to_dict()


@router.post("/create-checkout-session")
async def create_checkout_session(
    request: Request,
    body: CheckoutSessionRequest,
    provider: CheckoutSessionProvider = Depends(checkout_provider_dep),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    origin = request.headers.get("origin") or settings.site_origin
    session_id = await CheckoutCreator(provider=provider).create(
        plan_name=body.plan_name,
        country=body.country,
        amount=body.amount,
        origin=origin,
    )
    return {"sessionId": session_id}
