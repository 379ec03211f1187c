"""
academy_portal.routing.session_router

Identity-driven landing router with a stall fallback.

Responsibilities:
- Stay in RESOLVING while identity is loading, then navigate exactly once.
- Replace (not push) the current location so the loading screen is not reachable
  through back-navigation.
- Surface a "taking longer than expected" affordance when resolution stalls.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from academy_portal.auth.models import AuthIdentity
from academy_portal.observability.logging import get_logger
from academy_portal.routing.decisions import DASHBOARD_PATH, SIGNIN_PATH, decide_route
from academy_portal.routing.identity import IdentityStream, Unsubscribe

log = get_logger(__name__)

DEFAULT_STALL_AFTER = 5.0
STALL_MESSAGE = "This is taking longer than expected."


class RouterState(StrEnum):
    RESOLVING = "RESOLVING"
    REDIRECT_AUTHENTICATED = "REDIRECT_AUTHENTICATED"
    REDIRECT_ANONYMOUS = "REDIRECT_ANONYMOUS"


class Navigator(Protocol):
    def replace(self, path: str) -> None: ...


class SessionRouter:
    """
    Reacts to pushed identity snapshots; never polls.

    The stall timer and the identity observation race on the event loop. Whichever
    arrives first wins; the timer is cancelled on transition and on unmount, and is
    a no-op if it ever runs outside RESOLVING.

    `mount()` must be called from inside a running event loop.
    """

    def __init__(
        self,
        *,
        identity: IdentityStream,
        navigator: Navigator,
        stall_after: float = DEFAULT_STALL_AFTER,
        on_stall: Callable[[], None] | None = None,
        dashboard_path: str = DASHBOARD_PATH,
        signin_path: str = SIGNIN_PATH,
    ) -> None:
        self._identity = identity
        self._navigator = navigator
        self._stall_after = stall_after
        self._on_stall = on_stall
        self._dashboard_path = dashboard_path
        self._signin_path = signin_path

        self._state = RouterState.RESOLVING
        self._stall_visible = False
        self._timer: asyncio.TimerHandle | None = None
        self._unsubscribe: Unsubscribe | None = None

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def stall_visible(self) -> bool:
        return self._stall_visible

    @property
    def stall_message(self) -> str | None:
        return STALL_MESSAGE if self._stall_visible else None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        if self.mounted:
            return
        loop = asyncio.get_running_loop()
        self._state = RouterState.RESOLVING
        self._stall_visible = False
        self._timer = loop.call_later(self._stall_after, self._on_stall_timeout)
        # subscribe() replays the current snapshot, so an already-resolved identity
        # transitions (and disarms the timer) before this returns.
        self._unsubscribe = self._identity.subscribe(self._observe)

    def unmount(self) -> None:
        self._cancel_timer()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def reload(self) -> None:
        """Full reload offered by the stall affordance: start over from RESOLVING."""
        log.info("session_router_reload")
        self.unmount()
        self.mount()

    def _observe(self, snapshot: AuthIdentity) -> None:
        if self._state is not RouterState.RESOLVING:
            return
        decision = decide_route(
            snapshot, dashboard_path=self._dashboard_path, signin_path=self._signin_path
        )
        if decision.is_loading or decision.path is None:
            return

        self._cancel_timer()
        self._stall_visible = False
        self._state = (
            RouterState.REDIRECT_AUTHENTICATED
            if snapshot.user is not None
            else RouterState.REDIRECT_ANONYMOUS
        )
        log.info("session_router_redirect", state=self._state.value, path=decision.path)
        self._navigator.replace(decision.path)

    def _on_stall_timeout(self) -> None:
        self._timer = None
        if self._state is not RouterState.RESOLVING or self._stall_visible:
            return
        self._stall_visible = True
        log.warning("session_router_stalled", stall_after=self._stall_after)
        if self._on_stall is not None:
            self._on_stall()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


# --- Module Notes -----------------------------------------------------------
# Navigation is idempotent, so no lock is needed between the timer and the observer;
# the state check in `_observe` alone guarantees a single navigation per mount.
