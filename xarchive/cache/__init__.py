"""Cache implementations."""

from xarchive.cache.base import ArchiveKey, SnapshotCache
from xarchive.cache.memory_cache import MemoryCache

__all__ = ["ArchiveKey", "SnapshotCache", "MemoryCache"]
