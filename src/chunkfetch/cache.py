"""Single-use store for encoded bodies awaiting a continuation call."""

import threading


class ChunkCache:
    """Holds at most one pending encoded body per resource key.

    Entries leave only through :meth:`take`; there is no expiry and no
    capacity bound. A single lock guards the whole map so that two
    continuation calls for the same key can never both receive the entry.
    """

    def __init__(self):
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: str):
        """Store ``value`` under ``key``, replacing any pending entry."""
        with self._lock:
            self._entries[key] = value

    def take(self, key: str) -> str | None:
        """Remove and return the entry for ``key``, or None if absent."""
        with self._lock:
            return self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
