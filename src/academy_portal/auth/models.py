"""
academy_portal.auth.models

Identity models shared by the API and the session router.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class UserRef:
    """
    Reference to a signed-in user as issued by the identity provider.
    """

    id: str
    email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    """
    Snapshot of identity resolution.

    `loading` is True only until the first resolution completes; `user` is None for
    anonymous visitors.
    """

    user: UserRef | None = None
    loading: bool = True

    @classmethod
    def resolving(cls) -> AuthIdentity:
        return cls(user=None, loading=True)

    @classmethod
    def resolved(cls, user: UserRef | None) -> AuthIdentity:
        return cls(user=user, loading=False)

    @property
    def is_authenticated(self) -> bool:
        return not self.loading and self.user is not None
