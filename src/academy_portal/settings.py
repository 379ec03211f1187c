"""
academy_portal.settings

Central configuration models (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, auth and routing layers.
- Hide secrets from repr/logging (identity JWT secret, Stripe secret key).
- Offer a cached settings instance for app wiring, and an uncached loader for
  payment credentials.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings:
    - Strict env-driven configuration (prefix `PORTAL_`)
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "academy-portal"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Public origin of the portal; used for checkout redirect URLs when the
    # request carries no Origin header.
    site_origin: str = "http://localhost:3000"

    # Identity provider access tokens (HS256, audience "authenticated").
    jwt_alg: str = "HS256"
    jwt_audience: str = "authenticated"
    jwt_issuer: str | None = None
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Session routing
    dashboard_path: str = "/dashboard"
    signin_path: str = "/auth/signin"
    stall_after_seconds: float = Field(default=5.0, gt=0)


class PaymentCredentials(BaseSettings):
    """
    Stripe credentials as currently present in the environment.

    Not cached: build a fresh instance for each evaluation so a corrected
    deployment is picked up without a restart.
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    publishable_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "STRIPE_PUBLISHABLE_KEY", "NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY"
        ),
    )
    secret_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("STRIPE_SECRET_KEY"),
        repr=False,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


def load_payment_credentials() -> PaymentCredentials:
    return PaymentCredentials()


# --- Module Notes -----------------------------------------------------------
# `get_settings` is cached, `load_payment_credentials` is deliberately not: payment
# capability must track the live environment.
