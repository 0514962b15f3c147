"""In-process snapshot cache."""

import time
from dataclasses import dataclass

from xarchive.cache.base import ArchiveKey, SnapshotCache


@dataclass
class _Entry:
    records: list[dict]
    expires_at: float


class MemoryCache(SnapshotCache):
    """
    Dict-backed cache living for the process lifetime.

    Keys include the archive's mtime and size, so a rewritten archive
    misses naturally and its old snapshot is dropped on the next ``set``.
    Each ``get`` returns a new list.
    """

    def __init__(self, default_ttl: int = 300):
        """
        Initialize memory cache.

        Args:
            default_ttl: Default TTL in seconds (5 minutes)
        """
        self.default_ttl = default_ttl
        self._entries: dict[ArchiveKey, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: ArchiveKey) -> list[dict] | None:
        """Retrieve cached records, None if miss or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.expires_at <= time.monotonic():
            del self._entries[key]
            return None

        return list(entry.records)

    async def set(
        self, key: ArchiveKey, records: list[dict], ttl_seconds: int | None = None
    ) -> None:
        """Store records, replacing any snapshot of an earlier version of the same archive."""
        stale = [
            cached for cached in self._entries
            if cached.path == key.path and cached.payload_entry == key.payload_entry
        ]
        for cached in stale:
            del self._entries[cached]

        now = time.monotonic()
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        self._entries[key] = _Entry(list(records), now + ttl)

    async def invalidate(self, key: ArchiveKey) -> None:
        """Remove specific entry."""
        self._entries.pop(key, None)

    async def clear(self) -> None:
        """Clear all cached entries."""
        self._entries.clear()

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = time.monotonic()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def close(self) -> None:
        """Drop all entries."""
        self._entries.clear()
