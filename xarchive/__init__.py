"""xarchive - Twitter/X export archive reader and MCP server."""

__version__ = "0.1.0"

from xarchive.config import ArchiveConfig
from xarchive.core.catalog import ResourceCatalog
from xarchive.core.orchestrator import ArchiveService
from xarchive.core.reader import ArchiveReader
from xarchive.core.sampler import SampleTool
from xarchive.core.sanitizer import sanitize_text
from xarchive.core.transformer import expand_urls, normalize_tweet
from xarchive.models.sample import SampleRequest
from xarchive.models.tweet import CanonicalTweet, UrlEntity

__all__ = [
    # Main interface
    "ArchiveService",
    "ArchiveConfig",
    # Components
    "ArchiveReader",
    "ResourceCatalog",
    "SampleTool",
    # Transformations
    "expand_urls",
    "normalize_tweet",
    "sanitize_text",
    # Models
    "CanonicalTweet",
    "UrlEntity",
    "SampleRequest",
    "__version__",
]
