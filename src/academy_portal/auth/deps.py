"""
academy_portal.auth.deps

FastAPI dependency functions for identity resolution.

Responsibilities:
- Convert an optional bearer token into an `AuthIdentity`.
- Treat missing or invalid tokens as an anonymous visitor (landing never 401s).
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from academy_portal.api.deps import settings_dep
from academy_portal.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    user_from_claims,
)
from academy_portal.auth.models import AuthIdentity
from academy_portal.observability.logging import get_logger
from academy_portal.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def fetch_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> AuthIdentity:
    if creds is None or not creds.credentials:
        return AuthIdentity.resolved(None)

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
        user = user_from_claims(payload)
    except JwtValidationError as e:
        log.info("identity_token_rejected", reason=str(e))
        return AuthIdentity.resolved(None)

    return AuthIdentity.resolved(user)
