"""
Scoped auth context for the presentation layer.

AuthProvider subscribes to the AuthService when entered and unsubscribes on
exit. While active it is the value returned by use_auth():

    with AuthProvider(service, on_change=render) as auth:
        ...
        use_auth().user

Providers nest; use_auth() returns the innermost one.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Any, Callable, Optional

from loguru import logger

from .errors import ContextUnavailable
from .models import SessionUser
from .service import AuthService
from .session_state import Unsubscribe


_current_provider: ContextVar[Optional["AuthProvider"]] = ContextVar(
    "flashlearn_auth_provider", default=None
)


class AuthProvider:
    """Live view of the session plus the mutating auth operations."""

    def __init__(
        self,
        service: AuthService,
        on_change: Optional[Callable[[Optional[SessionUser]], Any]] = None,
    ):
        self.service = service
        self.on_change = on_change
        self.user: Optional[SessionUser] = None
        self.loading = True
        self._unsubscribe: Optional[Unsubscribe] = None
        self._token: Optional[Token] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def _handle_change(self, user: Optional[SessionUser]) -> None:
        self.user = user
        self.loading = False
        if self.on_change is not None:
            self.on_change(user)

    # -------------------------------------------------------------------------
    # Scope
    # -------------------------------------------------------------------------

    def mount(self) -> "AuthProvider":
        if self._unsubscribe is not None:
            raise RuntimeError("AuthProvider is already mounted")
        self._token = _current_provider.set(self)
        try:
            self._unsubscribe = self.service.on_auth_state_changed(self._handle_change)
        except Exception:
            _current_provider.reset(self._token)
            self._token = None
            raise
        logger.debug("AuthProvider mounted")
        return self

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._token is not None:
            _current_provider.reset(self._token)
            self._token = None
        logger.debug("AuthProvider unmounted")

    def __enter__(self) -> "AuthProvider":
        return self.mount()

    def __exit__(self, *args: Any) -> None:
        self.unmount()

    async def __aenter__(self) -> "AuthProvider":
        return self.mount()

    async def __aexit__(self, *args: Any) -> None:
        self.unmount()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> SessionUser:
        return await self.service.sign_in(email, password)

    async def sign_up(self, email: str, password: str) -> SessionUser:
        return await self.service.sign_up(email, password)

    async def sign_out(self) -> None:
        await self.service.sign_out()


def use_auth() -> AuthProvider:
    """
    Return the active AuthProvider.

    Raises:
        ContextUnavailable: called outside an AuthProvider scope
    """
    provider = _current_provider.get()
    if provider is None:
        raise ContextUnavailable()
    return provider
