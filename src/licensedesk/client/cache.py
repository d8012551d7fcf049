"""
Session Cache

String key/value store that lives for one browsing session. Values are
stored as JSON text. Nothing expires; entries go away when the session
object does.
"""

import json
from typing import Any


class SessionCache:
    """Per-session storage for data that may be stale within a session."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def get_json(self, key: str) -> Any | None:
        """
        Read and decode a JSON entry.

        Raises:
            json.JSONDecodeError: If the stored text is not valid JSON
        """
        raw = self.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))
