"""
academy_portal.routing.decisions

Pure routing decision derived from an identity snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from academy_portal.auth.models import AuthIdentity

DASHBOARD_PATH = "/dashboard"
SIGNIN_PATH = "/auth/signin"


@dataclass(frozen=True, slots=True)
class RoutingDecision:
    kind: Literal["loading", "navigate"]
    path: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.kind == "loading"


LOADING = RoutingDecision(kind="loading")


def decide_route(
    identity: AuthIdentity,
    *,
    dashboard_path: str = DASHBOARD_PATH,
    signin_path: str = SIGNIN_PATH,
) -> RoutingDecision:
    if identity.loading:
        return LOADING
    if identity.user is not None:
        return RoutingDecision(kind="navigate", path=dashboard_path)
    return RoutingDecision(kind="navigate", path=signin_path)
