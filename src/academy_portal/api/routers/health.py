"""
academy_portal.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting payment capability.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from academy_portal.payments.config_gate import evaluate

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz() -> dict[str, Any]:
    # The portal serves without payments; the flag lets ops spot a broken key.
    return {"status": "ready", "payments_configured": evaluate().is_configured}
