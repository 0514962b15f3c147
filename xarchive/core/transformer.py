"""Data transformation and normalization for archived tweets."""

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from pydantic import ValidationError

from xarchive.models.tweet import CanonicalTweet, UrlEntity

# Twitter export format: "Wed Oct 10 20:19:24 +0000 2018"
ARCHIVE_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def parse_tweet_date(date_str: str | None) -> datetime | None:
    """
    Parse a tweet ``created_at`` string to an aware datetime.

    Handles:
        - Archive format: "Wed Oct 10 20:19:24 +0000 2018"
        - ISO 8601: "2026-01-18T18:17:20.000Z"

    Naive values are taken as UTC. Returns None when unparsable.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    date_str = date_str.strip()

    try:
        return datetime.strptime(date_str, ARCHIVE_DATE_FORMAT)
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def tweet_id(raw: Mapping) -> str:
    """Record id as a string, preferring ``id_str``."""
    value = raw.get("id_str") or raw.get("id")
    if value is None:
        return ""
    return str(value)


def raw_text(raw: Mapping) -> str:
    """Original, unexpanded text of a record; non-string values count as missing."""
    for key in ("full_text", "text"):
        value = raw.get(key)
        if value and isinstance(value, str):
            return value
    return ""


def expand_urls(text: str, urls) -> str:
    """
    Replace shortened links in text with their expanded form.

    Entities are applied in order; every occurrence of a short URL is
    replaced. Entities missing either field are skipped. If one short URL
    is a substring of another, the earlier entity wins.

    Args:
        text: Tweet text
        urls: Sequence of ``{url, expanded_url}`` mappings

    Returns:
        Text with links expanded
    """
    if not urls or not isinstance(urls, Sequence) or isinstance(urls, str):
        return text

    result = text
    for item in urls:
        if not isinstance(item, Mapping):
            continue
        try:
            entity = UrlEntity.model_validate(item)
        except ValidationError:
            continue
        if entity.is_complete:
            result = result.replace(entity.short_url, entity.expanded_url)

    return result


def _user_field(user: Mapping, *keys: str) -> str:
    for key in keys:
        value = user.get(key)
        if value:
            return str(value)
    return ""


def normalize_tweet(raw: Mapping) -> CanonicalTweet:
    """
    Transform a raw archive record to a CanonicalTweet.

    Missing optional fields fall back to empty strings.

    Args:
        raw: Raw tweet dict as decoded from the archive

    Returns:
        CanonicalTweet with links expanded in its text
    """
    user = raw.get("user")
    if not isinstance(user, Mapping):
        user = {}

    entities = raw.get("entities")
    urls = entities.get("urls") if isinstance(entities, Mapping) else None

    created_at = raw.get("created_at")

    return CanonicalTweet(
        id=tweet_id(raw),
        display_name=_user_field(user, "name", "display_name"),
        username=_user_field(user, "screen_name", "username"),
        text=expand_urls(raw_text(raw), urls or []),
        created_at=str(created_at) if created_at is not None else None,
    )


def normalize_tweets(raw_tweets: list[dict]) -> list[CanonicalTweet]:
    """Normalize a sequence of raw records, preserving order."""
    return [normalize_tweet(raw) for raw in raw_tweets]
