"""
Auth data model.

CredentialRecord lives only inside the UserStore. SessionUser is the
password-free identity handed to everything else, serialized with the same
camelCase keys the browser build writes to localStorage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CredentialRecord:
    """Stored email/password/uid triple."""

    email: str
    password: str = field(repr=False)
    uid: str

    def to_session_user(self) -> "SessionUser":
        """Build the visible identity for this record (password stripped)."""
        return SessionUser(uid=self.uid, email=self.email)

    def matches(self, user: "SessionUser") -> bool:
        return self.uid == user.uid and self.email == user.email


@dataclass(frozen=True)
class SessionUser:
    """The currently authenticated identity."""

    uid: str
    email: str
    display_name: str | None = None
    photo_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "photoURL": self.photo_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionUser":
        """
        Create from a serialized snapshot.

        Raises:
            TypeError: data is not a mapping or a field has the wrong type
            KeyError: uid or email missing
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        uid = data["uid"]
        email = data["email"]
        display_name = data.get("displayName")
        photo_url = data.get("photoURL")

        for name, value in (("uid", uid), ("email", email)):
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string")
        for name, value in (("displayName", display_name), ("photoURL", photo_url)):
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be a string or null")

        return cls(uid=uid, email=email, display_name=display_name, photo_url=photo_url)
