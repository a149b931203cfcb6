"""
Current-session holder with listener fan-out.

Listeners are kept in an ordered registry keyed by subscription id.
set_session notifies a snapshot of the registry taken before the first
callback runs, so listeners added during a round wait for the next one and
listeners removed during a round are still called for it.
"""

from __future__ import annotations

import itertools
from typing import Callable, Optional

from loguru import logger

from .models import SessionUser
from .persistence import PersistenceBridge


AuthStateListener = Callable[[Optional[SessionUser]], None]


class Unsubscribe:
    """Handle returned by SessionState.subscribe. Calling it twice is a no-op."""

    def __init__(self, state: "SessionState", subscription_id: int):
        self._state = state
        self.subscription_id = subscription_id
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def __call__(self) -> None:
        if not self._active:
            return
        self._active = False
        self._state._remove(self.subscription_id)


class SessionState:
    """Single optional SessionUser plus its subscribers."""

    def __init__(
        self,
        bridge: Optional[PersistenceBridge] = None,
        initial: Optional[SessionUser] = None,
    ):
        self._bridge = bridge
        self._current = initial
        self._listeners: dict[int, AuthStateListener] = {}
        self._ids = itertools.count(1)

    @property
    def current(self) -> Optional[SessionUser]:
        return self._current

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: AuthStateListener) -> Unsubscribe:
        """Register callback, call it once with the current value, return its handle."""
        subscription_id = next(self._ids)
        self._listeners[subscription_id] = callback
        logger.debug(f"Auth listener {subscription_id} subscribed ({len(self._listeners)} active)")
        try:
            callback(self._current)
        except Exception:
            self._listeners.pop(subscription_id, None)
            raise
        return Unsubscribe(self, subscription_id)

    def set_session(self, user: Optional[SessionUser]) -> None:
        """Replace the session, persist it, then notify subscribers in registration order."""
        self._current = user
        if self._bridge is not None:
            self._bridge.save(user)

        for subscription_id, callback in list(self._listeners.items()):
            try:
                callback(user)
            except Exception:
                logger.exception(f"Auth listener {subscription_id} raised during notification")

    def _remove(self, subscription_id: int) -> None:
        if self._listeners.pop(subscription_id, None) is not None:
            logger.debug(f"Auth listener {subscription_id} unsubscribed ({len(self._listeners)} active)")
