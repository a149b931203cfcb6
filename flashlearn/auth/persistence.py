"""
Session snapshot persistence.

The current SessionUser is written to a single storage slot on every change
and read back once at startup. A corrupt snapshot is logged and treated as
"no session"; it never breaks initialization.
"""

from __future__ import annotations

import json
from typing import Optional

from loguru import logger

from .errors import CorruptPersistedState
from .models import SessionUser
from .storage import KeyValueStorage


DEFAULT_SESSION_KEY = "mockUser"


class PersistenceBridge:
    """Serializes the session to one named slot of a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_SESSION_KEY):
        self.storage = storage
        self.key = key

    def save(self, user: Optional[SessionUser]) -> None:
        """Write the snapshot, or remove the slot when user is None."""
        try:
            if user is None:
                self.storage.remove_item(self.key)
            else:
                self.storage.set_item(self.key, json.dumps(user.to_dict()))
        except OSError as e:
            logger.warning(f"Could not persist session snapshot to '{self.key}': {e}")

    def load(self) -> Optional[SessionUser]:
        """Read the snapshot. Missing or malformed data yields None."""
        try:
            return self._decode(self.storage.get_item(self.key))
        except CorruptPersistedState as e:
            logger.warning(f"Ignoring persisted session in '{self.key}': {e.message}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read persisted session from '{self.key}': {e}")
            return None

    def clear(self) -> None:
        self.save(None)

    def _decode(self, raw: Optional[str]) -> Optional[SessionUser]:
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if data is None:
                return None
            return SessionUser.from_dict(data)
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            raise CorruptPersistedState(f"Persisted session snapshot is corrupt: {e}") from e
