"""Configuration management using Pydantic Settings."""

from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings

from xarchive.exceptions import ConfigError


class CacheBackend(str, Enum):
    """Snapshot cache backend type."""
    MEMORY = "memory"
    NONE = "none"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class ArchiveConfig(BaseSettings):
    """Configuration for the xarchive service."""

    # Archive settings
    archive_path: Path | None = None
    payload_entry: str = "data/tweets.js"

    # Sampling
    default_sample_size: int = 5
    reshare_prefix: str = "RT @"

    # Cache settings
    cache_backend: CacheBackend = CacheBackend.NONE
    cache_ttl_seconds: int = 300

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "XARCHIVE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def require_archive(self) -> Path:
        """
        Return the configured archive path, checking it exists.

        Raises:
            ConfigError: If no path is set or the file does not exist
        """
        if self.archive_path is None:
            raise ConfigError("No archive path configured")
        if not self.archive_path.exists():
            raise ConfigError(f"File not found: {self.archive_path}")
        return self.archive_path
