"""
academy_portal.routing.identity

Observable identity state.

Responsibilities:
- Hold the latest `AuthIdentity` snapshot and push changes to subscribers.
- Replay the current snapshot on subscribe, return an unsubscribe handle.
- Run a provider's identity fetch and publish its outcome.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from academy_portal.auth.models import AuthIdentity, UserRef
from academy_portal.observability.logging import get_logger

log = get_logger(__name__)

Listener = Callable[[AuthIdentity], None]
Unsubscribe = Callable[[], None]


class IdentityStream:
    """
    Push-based stream of identity snapshots.

    Once a resolved snapshot (`loading=False`) has been published, the stream never
    goes back to loading for its lifetime.
    """

    def __init__(self, initial: AuthIdentity | None = None) -> None:
        self._current = initial or AuthIdentity.resolving()
        self._listeners: list[Listener] = []

    @property
    def current(self) -> AuthIdentity:
        return self._current

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)
        listener(self._current)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, snapshot: AuthIdentity) -> None:
        if snapshot.loading and not self._current.loading:
            raise ValueError("identity already resolved; cannot return to loading")
        self._current = snapshot
        # Copy: listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(snapshot)

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)


async def resolve_into(
    stream: IdentityStream,
    fetch_current_identity: Callable[[], Awaitable[UserRef | None]],
) -> AuthIdentity:
    """
    Resolve identity once and publish it.

    A failing fetch resolves to an anonymous visitor so routing never stays stuck on
    the loading screen because of a provider error.
    """

    try:
        user = await fetch_current_identity()
    except Exception as e:
        log.warning("identity_resolution_failed", error_type=type(e).__name__, error=str(e))
        user = None

    snapshot = AuthIdentity.resolved(user)
    stream.publish(snapshot)
    return snapshot


# --- Module Notes -----------------------------------------------------------
# The identity provider pushes changes (sign-in, sign-out) through `publish`; consumers
# never poll.
