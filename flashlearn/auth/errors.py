"""Error taxonomy for the auth layer."""

from __future__ import annotations


class AuthError(Exception):
    """Base class for auth failures. Carries a human-readable message."""

    default_message = "Authentication error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(AuthError):
    """Unknown email or wrong password. Same message for both."""

    default_message = "Invalid email or password"


class DuplicateEmail(AuthError):
    """Sign-up with an email that already has a credential record."""

    default_message = "Email already in use"


class ContextUnavailable(AuthError):
    """Auth consumer used outside an active AuthProvider."""

    default_message = "use_auth must be used within an AuthProvider"


class CorruptPersistedState(AuthError):
    """Persisted snapshot could not be decoded. Never escapes PersistenceBridge.load."""

    default_message = "Persisted session snapshot is corrupt"


class AuthRequestError(AuthError):
    """Backend auth endpoint rejected the request or was unreachable."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
