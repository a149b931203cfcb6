"""
In-memory credential store for local development.

Passwords are kept in plain text. This is a mock for running the app without
a real identity provider and must never hold production credentials.
"""

from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from loguru import logger

from .errors import DuplicateEmail
from .models import CredentialRecord


def generate_uid() -> str:
    """Timestamp component plus a random suffix, e.g. user-1718000000000-3f9a1c2b7."""
    return f"user-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class UserStore:
    """
    Email -> CredentialRecord mapping.

    Emails are matched exactly (case-sensitive). Records are never updated
    or deleted.
    """

    def __init__(self, uid_factory: Optional[Callable[[], str]] = None):
        self._users: dict[str, CredentialRecord] = {}
        self._uids: set[str] = set()
        self._uid_factory = uid_factory or generate_uid

    def __len__(self) -> int:
        return len(self._users)

    def contains(self, email: str) -> bool:
        return email in self._users

    def lookup(self, email: str) -> Optional[CredentialRecord]:
        """Return the record for email, or None."""
        return self._users.get(email)

    def seed(self, email: str, password: str, uid: str) -> CredentialRecord:
        """Insert a record with a fixed uid (demo accounts)."""
        if email in self._users:
            raise DuplicateEmail()
        record = CredentialRecord(email=email, password=password, uid=uid)
        self._users[email] = record
        self._uids.add(uid)
        return record

    def register(self, email: str, password: str) -> str:
        """
        Create a credential record and return its uid.

        Raises:
            DuplicateEmail: email already registered
        """
        if email in self._users:
            raise DuplicateEmail()

        uid = self._uid_factory()
        while uid in self._uids:
            uid = self._uid_factory()

        self._users[email] = CredentialRecord(email=email, password=password, uid=uid)
        self._uids.add(uid)
        logger.debug(f"Registered mock account {uid}")
        return uid


def create_user_store(
    demo_email: str = "demo@flashlearn.ai",
    demo_password: str = "demo123",
    demo_uid: str = "demo-user-123",
) -> UserStore:
    """Create a store seeded with the demo account."""
    store = UserStore()
    store.seed(demo_email, demo_password, demo_uid)
    return store
