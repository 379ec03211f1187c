"""
academy_portal.api.routers.landing

Server-side landing routing.

Responsibilities:
- Redirect `/` to the dashboard or sign-in page based on the caller's identity.
- Expose the resolved identity and routing target at `/api/session`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from starlette.status import HTTP_307_TEMPORARY_REDIRECT

from academy_portal.api.deps import settings_dep
from academy_portal.auth.deps import fetch_current_identity
from academy_portal.auth.models import AuthIdentity
from academy_portal.routing.decisions import RoutingDecision, decide_route
from academy_portal.settings import Settings

router = APIRouter(tags=["session"])


def _decide(identity: AuthIdentity, settings: Settings) -> RoutingDecision:
    return decide_route(
        identity,
        dashboard_path=settings.dashboard_path,
        signin_path=settings.signin_path,
    )


@router.get("/", response_class=RedirectResponse, status_code=HTTP_307_TEMPORARY_REDIRECT)
async def landing(
    identity: AuthIdentity = Depends(fetch_current_identity),
    settings: Settings = Depends(settings_dep),
) -> RedirectResponse:
    decision = _decide(identity, settings)
    # Server-side resolution is synchronous, so the decision is never "loading".
    return RedirectResponse(
        decision.path or settings.signin_path, status_code=HTTP_307_TEMPORARY_REDIRECT
    )


@router.get("/api/session")
async def session_state(
    identity: AuthIdentity = Depends(fetch_current_identity),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    decision = _decide(identity, settings)
    return {
        "authenticated": identity.is_authenticated,
        "user": identity.user.to_dict() if identity.user else None,
        "redirect_to": decision.path,
        "stall_after_seconds": settings.stall_after_seconds,
    }
