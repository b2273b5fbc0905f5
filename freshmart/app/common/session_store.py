"""Client-side session record.

The record is an opaque JSON object (whatever the login endpoint returned)
stored under one fixed key. Having a record means "logged in"; nothing here
validates it against the server.
"""

from __future__ import annotations

import json
import logging
from typing import Any, MutableMapping, Optional, Protocol

from flask import session as flask_session

logger = logging.getLogger(__name__)

SESSION_KEY = "userSession"


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, items: Optional[MutableMapping[str, str]] = None) -> None:
        self.items: MutableMapping[str, str] = items if items is not None else {}

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FlaskSessionStorage:
    """Storage backed by Flask's signed cookie session (needs a request context)."""

    def get_item(self, key: str) -> Optional[str]:
        return flask_session.get(key)

    def set_item(self, key: str, value: str) -> None:
        flask_session[key] = value

    def remove_item(self, key: str) -> None:
        flask_session.pop(key, None)


class SessionStore:
    def __init__(self, storage: Storage, key: str = SESSION_KEY) -> None:
        self.storage = storage
        self.key = key

    def save(self, session: Any) -> None:
        # null would read back as "absent"
        self.storage.set_item(self.key, json.dumps(session if session is not None else {}))

    def load(self) -> Optional[Any]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable session record under %r", self.key)
            self.clear()
            return None

    def clear(self) -> None:
        self.storage.remove_item(self.key)

    def is_logged_in(self) -> bool:
        return self.load() is not None
