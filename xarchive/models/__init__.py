"""Pydantic models for xarchive."""

from xarchive.models.tweet import CanonicalTweet, UrlEntity
from xarchive.models.sample import SampleRequest, DEFAULT_SAMPLE_SIZE

__all__ = [
    "CanonicalTweet",
    "UrlEntity",
    "SampleRequest",
    "DEFAULT_SAMPLE_SIZE",
]
