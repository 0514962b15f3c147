"""Abstract snapshot cache interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from xarchive.exceptions import ArchiveOpenError


@dataclass(frozen=True)
class ArchiveKey:
    """Identity of an archive on disk; changes whenever the file does."""

    path: str
    payload_entry: str
    mtime_ns: int
    size: int

    @classmethod
    def for_file(cls, archive_path: str | Path, payload_entry: str) -> "ArchiveKey":
        """
        Build a key from the current file state.

        Raises:
            ArchiveOpenError: If the file cannot be stat'ed
        """
        path = Path(archive_path)
        try:
            stat = path.stat()
        except OSError as e:
            raise ArchiveOpenError(f"Cannot open archive {path}: {e}") from e
        return cls(str(path.resolve()), payload_entry, stat.st_mtime_ns, stat.st_size)


class SnapshotCache(ABC):
    """Abstract base class for decoded-archive snapshot caches."""

    @abstractmethod
    async def get(self, key: ArchiveKey) -> list[dict] | None:
        """
        Retrieve cached records for an archive.

        Args:
            key: Archive identity

        Returns:
            Records in recency order, or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, key: ArchiveKey, records: list[dict], ttl_seconds: int | None = None) -> None:
        """
        Store decoded records.

        Args:
            key: Archive identity
            records: Records in recency order
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def invalidate(self, key: ArchiveKey) -> None:
        """Remove a specific archive from cache."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release resources."""
        ...

    async def __aenter__(self) -> "SnapshotCache":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
