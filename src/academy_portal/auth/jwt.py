"""
academy_portal.auth.jwt

JWT issuing and validation helpers for identity-provider access tokens.

Responsibilities:
- Issue short-lived tokens for local/dev scenarios and tests.
- Decode and validate tokens with strict claim requirements (aud/exp/sub).

Note:
- Hosted identity providers sign access tokens with a project-wide HS256 secret and
  audience "authenticated"; the issuer is checked only when configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from academy_portal.auth.models import UserRef
from academy_portal.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    audience: str
    secret: str
    issuer: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    user_id: str,
    email: str | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "aud": cfg.audience,
        "sub": user_id,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    if email:
        payload["email"] = email
    if cfg.issuer:
        payload["iss"] = cfg.issuer
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    required = ["exp", "aud", "sub"]
    if cfg.issuer:
        required.append("iss")
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            audience=cfg.audience,
            issuer=cfg.issuer,
            options={"require": required},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def user_from_claims(payload: dict[str, Any]) -> UserRef:
    subject = str(payload.get("sub", "")).strip()
    if not subject:
        raise JwtValidationError("Invalid token subject")
    email = payload.get("email")
    return UserRef(id=subject, email=str(email) if email else None)


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `api/routers/dev_auth.py` (dev convenience) and tests.
