"""Custom exception hierarchy for xarchive."""


class XarchiveError(Exception):
    """Base exception for all xarchive errors."""


class ArchiveError(XarchiveError):
    """Failed to produce records from the export archive."""


class ArchiveOpenError(ArchiveError):
    """Archive container is missing or unreadable."""


class EntryNotFoundError(ArchiveError):
    """Expected payload entry is absent from the archive."""


class PayloadDecodeError(ArchiveError):
    """Payload text could not be decoded, even leniently."""


class RecordNotFound(XarchiveError):
    """No record with the requested id.

    The resource catalog folds this into a normal result instead of
    raising it.
    """

    def __init__(self, tweet_id: str):
        super().__init__(f"Tweet not found: {tweet_id}")
        self.tweet_id = tweet_id


class ResourceNotFoundError(XarchiveError):
    """URI does not address any known resource."""


class ToolNotFoundError(XarchiveError):
    """Tool name is not served."""


class ConfigError(XarchiveError):
    """Invalid configuration."""
