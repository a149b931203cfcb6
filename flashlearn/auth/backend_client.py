"""
FlashLearn Backend Auth Client

HTTP client for the backend's email/password endpoints. This is the non-mock
auth path: the backend verifies credentials and issues a JWT, which is kept
in the same durable storage as the mock session snapshot.

Usage:
    async with BackendAuthClient(settings.api_base_url, storage) as client:
        result = await client.sign_in(email, password)
        client.get_token()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from loguru import logger

from .errors import AuthRequestError
from .storage import KeyValueStorage


LOGIN_ENDPOINT = "/api/auth/login"
REGISTER_ENDPOINT = "/api/auth/register"
DEFAULT_TOKEN_KEY = "jwtToken"


@dataclass
class BackendAuthResult:
    """Successful login/register response."""

    token: str
    user: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BackendAuthResult":
        """Parse a response body. Login answers with jwtToken, register with token."""
        token = data.get("token") or data.get("jwtToken")
        if not isinstance(token, str) or not token:
            raise AuthRequestError("Authentication response did not include a token")
        return cls(token=token, user=data.get("user") or {})


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull a message out of {message} or {error: {message}} payloads."""
    try:
        payload = response.json()
    except ValueError:
        return default

    if not isinstance(payload, dict):
        return default
    if isinstance(payload.get("message"), str) and payload["message"]:
        return payload["message"]
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    if isinstance(error, str) and error:
        return error
    return default


class BackendAuthClient:
    """Async client for /api/auth/login and /api/auth/register."""

    def __init__(
        self,
        base_url: str,
        storage: KeyValueStorage,
        timeout: float = 30.0,
        token_key: str = DEFAULT_TOKEN_KEY,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.token_key = token_key
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
        self._user: Optional[dict[str, Any]] = None

    async def __aenter__(self) -> "BackendAuthClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    # =========================================================================
    # Authentication
    # =========================================================================

    async def sign_in(self, email: str, password: str) -> BackendAuthResult:
        """
        Log in with email and password.

        Raises:
            AuthRequestError: non-2xx response or connection failure
        """
        return await self._authenticate(
            LOGIN_ENDPOINT,
            {"email": email, "password": password},
            default_error="Login failed",
        )

    async def sign_up(self, email: str, password: str, name: str) -> BackendAuthResult:
        """
        Register an account and log it in.

        Raises:
            AuthRequestError: non-2xx response or connection failure
        """
        return await self._authenticate(
            REGISTER_ENDPOINT,
            {"email": email, "password": password, "name": name},
            default_error="Registration failed",
        )

    def sign_out(self) -> None:
        self._user = None
        self.storage.remove_item(self.token_key)

    def get_token(self) -> Optional[str]:
        """Return the raw JWT from storage, or None when the slot is empty or unreadable."""
        try:
            token = self.storage.get_item(self.token_key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read token from '{self.token_key}': {e}")
            return None
        return token or None

    def get_current_user(self) -> Optional[dict[str, Any]]:
        return self._user

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    async def _authenticate(
        self, endpoint: str, payload: dict[str, Any], default_error: str
    ) -> BackendAuthResult:
        try:
            response = await self.client.post(endpoint, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Connection error calling {endpoint}: {e}")
            raise AuthRequestError(default_error) from e

        if not response.is_success:
            message = _error_message(response, default_error)
            logger.warning(f"{endpoint} returned {response.status_code}: {message}")
            raise AuthRequestError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise AuthRequestError(default_error, status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise AuthRequestError(default_error, status_code=response.status_code)

        result = BackendAuthResult.from_dict(data)
        self._user = result.user
        self.storage.set_item(self.token_key, result.token)
        logger.info(f"Authenticated with backend via {endpoint}")
        return result
