"""Service orchestrator - wires reader, cache, catalog, and sampler."""

import random

from xarchive.cache.base import ArchiveKey, SnapshotCache
from xarchive.cache.memory_cache import MemoryCache
from xarchive.config import ArchiveConfig, CacheBackend
from xarchive.core.catalog import ResourceCatalog
from xarchive.core.reader import ArchiveReader
from xarchive.core.sampler import SampleTool
from xarchive.logging import configure_logging, get_logger


class ArchiveService:
    """
    High-level interface over one export archive.

    Example:
        async with ArchiveService(ArchiveConfig(archive_path="archive.zip")) as service:
            recent = await service.catalog.list_recent()
            texts = await service.sampler.sample()
    """

    def __init__(
        self,
        config: ArchiveConfig | None = None,
        rng: random.Random | None = None,
        configure_logs: bool = True,
    ):
        """
        Initialize service with configuration.

        Args:
            config: ArchiveConfig instance, uses defaults if None
            rng: Random source handed to the sample tool
            configure_logs: Set up structlog on entry

        Raises:
            ConfigError: If the archive path is missing or does not exist
        """
        self.config = config or ArchiveConfig()
        self.reader = ArchiveReader(self.config.require_archive(), self.config.payload_entry)
        self.catalog = ResourceCatalog(self)
        self.sampler = SampleTool(
            self,
            rng=rng,
            default_size=self.config.default_sample_size,
            reshare_prefix=self.config.reshare_prefix,
        )
        self._configure_logs = configure_logs
        self._cache: SnapshotCache | None = None
        self._log = get_logger("service")

    async def __aenter__(self) -> "ArchiveService":
        """Async context manager entry - initialize resources."""
        if self._configure_logs:
            configure_logging(self.config)

        if self.config.cache_backend == CacheBackend.MEMORY:
            self._cache = MemoryCache(self.config.cache_ttl_seconds)

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup resources."""
        if self._cache is not None:
            await self._cache.close()
            self._cache = None

    async def read(self) -> list[dict]:
        """
        Raw records in recency order, through the cache when enabled.

        Raises:
            ArchiveOpenError, EntryNotFoundError, PayloadDecodeError
        """
        if self._cache is None:
            return await self.reader.read()

        key = ArchiveKey.for_file(self.reader.archive_path, self.reader.payload_entry)
        cached = await self._cache.get(key)
        if cached is not None:
            self._log.debug("cache_hit", archive=key.path, records_count=len(cached))
            return cached

        records = await self.reader.read()
        await self._cache.set(key, records)
        return records

    async def clear_cache(self) -> None:
        """Drop any cached snapshot."""
        if self._cache is not None:
            await self._cache.clear()
