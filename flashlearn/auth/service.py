"""
Mock Auth Service

Sign-in, sign-up and sign-out against the in-memory UserStore, for running
FlashLearn without a real identity provider.

Usage:
    service = build_auth_service()
    unsubscribe = service.on_auth_state_changed(print)
    user = await service.sign_in("demo@flashlearn.ai", "demo123")
    await service.sign_out()
    unsubscribe()

State machine:
    Anonymous --sign_in/sign_up--> Authenticated(user)
    Authenticated --sign_out--> Anonymous

The initial state comes from the persisted snapshot. Every operation waits
on the injected sleep first to simulate network latency. Concurrent calls are
serialized by the event loop and the last one to finish wins.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from loguru import logger

from flashlearn.config import Settings, get_settings

from .errors import DuplicateEmail, InvalidCredentials
from .models import SessionUser
from .persistence import PersistenceBridge
from .session_state import AuthStateListener, SessionState, Unsubscribe
from .storage import JsonFileStorage, KeyValueStorage
from .user_store import UserStore, create_user_store


SleepFn = Callable[[float], Awaitable[None]]


class AuthService:
    """Auth facade over UserStore, SessionState and PersistenceBridge."""

    def __init__(
        self,
        store: UserStore,
        bridge: PersistenceBridge,
        sleep: Optional[SleepFn] = None,
        sign_in_delay: float = 0.5,
        sign_up_delay: float = 0.5,
        sign_out_delay: float = 0.3,
    ):
        self.store = store
        self.bridge = bridge
        self._sleep = sleep or asyncio.sleep
        self.sign_in_delay = sign_in_delay
        self.sign_up_delay = sign_up_delay
        self.sign_out_delay = sign_out_delay
        self.state = SessionState(bridge=bridge, initial=self._restore())

    def _restore(self) -> Optional[SessionUser]:
        """Load the persisted session, dropping it if it matches no credential record."""
        user = self.bridge.load()
        if user is None:
            return None

        record = self.store.lookup(user.email)
        if record is None or not record.matches(user):
            logger.warning(f"Discarding persisted session for unknown account {user.uid}")
            self.bridge.clear()
            return None

        logger.info(f"Restored session for {user.email}")
        return user

    # =========================================================================
    # Queries
    # =========================================================================

    def get_current_session(self) -> Optional[SessionUser]:
        return self.state.current

    @property
    def is_authenticated(self) -> bool:
        return self.state.current is not None

    def on_auth_state_changed(self, callback: AuthStateListener) -> Unsubscribe:
        """Subscribe to session changes. callback is invoked immediately with the current value."""
        return self.state.subscribe(callback)

    subscribe = on_auth_state_changed

    # =========================================================================
    # Mutations
    # =========================================================================

    async def sign_in(self, email: str, password: str) -> SessionUser:
        """
        Authenticate against the UserStore.

        Raises:
            InvalidCredentials: unknown email or wrong password (same message for both)
        """
        await self._sleep(self.sign_in_delay)

        record = self.store.lookup(email)
        if record is None or record.password != password:
            logger.info("Sign-in rejected")
            raise InvalidCredentials()

        user = record.to_session_user()
        self._replace_session(user)
        logger.info(f"Signed in as {user.email} ({user.uid})")
        return user

    async def sign_up(self, email: str, password: str) -> SessionUser:
        """
        Register a new account and sign it in.

        Raises:
            DuplicateEmail: email already registered
        """
        await self._sleep(self.sign_up_delay)

        if self.store.contains(email):
            logger.info("Sign-up rejected: email already registered")
            raise DuplicateEmail()

        uid = self.store.register(email, password)
        user = SessionUser(uid=uid, email=email)
        self._replace_session(user)
        logger.info(f"Signed up {user.email} ({user.uid})")
        return user

    async def sign_out(self) -> None:
        """Clear the session. Signing out while anonymous is a no-op transition."""
        await self._sleep(self.sign_out_delay)

        previous = self.state.current
        self.state.set_session(None)
        if previous is not None:
            logger.info(f"Signed out {previous.email}")

    def _replace_session(self, user: SessionUser) -> None:
        previous = self.state.current
        if previous is not None and previous.uid != user.uid:
            logger.warning(f"Replacing active session {previous.uid} with {user.uid}")
        self.state.set_session(user)


def build_auth_service(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    store: Optional[UserStore] = None,
    sleep: Optional[SleepFn] = None,
) -> AuthService:
    """
    Wire an AuthService from settings.

    Build one per process and pass it by reference to consumers.
    """
    settings = settings or get_settings()
    if storage is None:
        storage = JsonFileStorage(settings.data_dir)
    if store is None:
        store = create_user_store(
            demo_email=settings.demo_email,
            demo_password=settings.demo_password,
            demo_uid=settings.demo_uid,
        )

    return AuthService(
        store=store,
        bridge=PersistenceBridge(storage, key=settings.session_key),
        sleep=sleep,
        sign_in_delay=settings.sign_in_delay_seconds,
        sign_up_delay=settings.sign_up_delay_seconds,
        sign_out_delay=settings.sign_out_delay_seconds,
    )
