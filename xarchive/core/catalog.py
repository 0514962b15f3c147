"""Addressable tweet resources served from the archive."""

import json
from typing import Protocol

from xarchive.core.transformer import normalize_tweet, normalize_tweets, raw_text, tweet_id
from xarchive.exceptions import RecordNotFound, ResourceNotFoundError
from xarchive.logging import get_logger

LIST_URI = "tweet-list://recent"
TWEET_SCHEME = "tweet"
TWEET_TEXT_SCHEME = "tweet-text"
TWEET_URI_TEMPLATE = "tweet://{id}"
TWEET_TEXT_URI_TEMPLATE = "tweet-text://{id}"


class RecordSource(Protocol):
    """Anything that yields raw records in recency order."""

    async def read(self) -> list[dict]: ...


def tweet_uri(record_id: str) -> str:
    return TWEET_URI_TEMPLATE.format(id=record_id)


def tweet_text_uri(record_id: str) -> str:
    return TWEET_TEXT_URI_TEMPLATE.format(id=record_id)


def not_found_content(uri: str, error: RecordNotFound) -> dict:
    """Content item reporting a missing record as a normal result."""
    body = json.dumps({"error": "Tweet not found", "id": error.tweet_id}, separators=(",", ":"))
    return {"uri": uri, "text": body}


def _find(records: list[dict], wanted: str) -> dict:
    for record in records:
        if tweet_id(record) == wanted:
            return record
    raise RecordNotFound(wanted)


class ResourceCatalog:
    """
    Resolves tweet resource URIs to content payloads.

    Every call re-reads the source; payloads have the shape
    ``{"contents": [...]}``.

    Example:
        catalog = ResourceCatalog(ArchiveReader("archive.zip"))
        recent = await catalog.list_recent()
    """

    def __init__(self, source: RecordSource):
        self.source = source
        self._log = get_logger("catalog")

    async def list_recent(self) -> dict:
        """Every tweet, most recent first, each with its ``tweet://`` URI."""
        records = await self.source.read()
        contents = [
            {"uri": tweet.uri, **tweet.to_payload()}
            for tweet in normalize_tweets(records)
        ]
        self._log.info("resource_read", uri=LIST_URI, contents_count=len(contents))
        return {"contents": contents}

    async def get_tweet(self, wanted_id: str, uri: str | None = None) -> dict:
        """
        Full canonical record for one tweet.

        Args:
            wanted_id: Tweet id
            uri: Requested URI, echoed back when the tweet is missing

        Returns:
            Contents with the tweet, or with a not-found error body
        """
        uri = uri or tweet_uri(wanted_id)
        records = await self.source.read()
        try:
            record = _find(records, wanted_id)
        except RecordNotFound as e:
            self._log.info("resource_not_found", uri=uri, id=wanted_id)
            return {"contents": [not_found_content(uri, e)]}

        tweet = normalize_tweet(record)
        self._log.info("resource_read", uri=uri)
        return {"contents": [{"uri": tweet.uri, **tweet.to_payload()}]}

    async def get_tweet_text(self, wanted_id: str, uri: str | None = None) -> dict:
        """
        Original text of one tweet, without link expansion or redaction.

        Args:
            wanted_id: Tweet id
            uri: Requested URI, echoed back when the tweet is missing

        Returns:
            Contents with the text, or with a not-found error body
        """
        uri = uri or tweet_text_uri(wanted_id)
        records = await self.source.read()
        try:
            record = _find(records, wanted_id)
        except RecordNotFound as e:
            self._log.info("resource_not_found", uri=uri, id=wanted_id)
            return {"contents": [not_found_content(uri, e)]}

        self._log.info("resource_read", uri=uri)
        return {"contents": [{"uri": tweet_text_uri(tweet_id(record)), "text": raw_text(record)}]}

    async def read(self, uri: str) -> dict:
        """
        Dispatch a resource URI to the matching view.

        Raises:
            ResourceNotFoundError: If the URI matches no resource
        """
        uri = uri.rstrip("/")
        if uri == LIST_URI:
            return await self.list_recent()

        scheme, sep, wanted_id = uri.partition("://")
        if sep and wanted_id:
            if scheme == TWEET_SCHEME:
                return await self.get_tweet(wanted_id, uri)
            if scheme == TWEET_TEXT_SCHEME:
                return await self.get_tweet_text(wanted_id, uri)

        raise ResourceNotFoundError(f"Unknown resource: {uri}")
