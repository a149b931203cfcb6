"""
Auth Module - Mock authentication and session state.

Components:
- user_store: In-memory credential records (development only)
- session_state: Current session plus ordered listener registry
- persistence: Session snapshot in a durable key-value slot
- service: AuthService facade (sign in/up/out, current session)
- context: AuthProvider scope and use_auth() lookup
- backend_client: HTTP client for the backend login/register endpoints
"""

from flashlearn.auth.backend_client import BackendAuthClient, BackendAuthResult
from flashlearn.auth.context import AuthProvider, use_auth
from flashlearn.auth.errors import (
    AuthError,
    AuthRequestError,
    ContextUnavailable,
    CorruptPersistedState,
    DuplicateEmail,
    InvalidCredentials,
)
from flashlearn.auth.models import CredentialRecord, SessionUser
from flashlearn.auth.persistence import PersistenceBridge
from flashlearn.auth.service import AuthService, build_auth_service
from flashlearn.auth.session_state import SessionState, Unsubscribe
from flashlearn.auth.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from flashlearn.auth.user_store import UserStore, create_user_store

__all__ = [
    # Errors
    "AuthError",
    "AuthRequestError",
    "ContextUnavailable",
    "CorruptPersistedState",
    "DuplicateEmail",
    "InvalidCredentials",
    # Models
    "CredentialRecord",
    "SessionUser",
    # Components
    "UserStore",
    "create_user_store",
    "SessionState",
    "Unsubscribe",
    "PersistenceBridge",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "AuthService",
    "build_auth_service",
    "AuthProvider",
    "use_auth",
    "BackendAuthClient",
    "BackendAuthResult",
]
