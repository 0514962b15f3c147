"""Zip archive reader for Twitter/X data exports."""

import asyncio
import json
import re
import time
import zipfile
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path

import json5

from xarchive.core.transformer import parse_tweet_date, raw_text, tweet_id
from xarchive.exceptions import ArchiveOpenError, EntryNotFoundError, PayloadDecodeError
from xarchive.logging import get_logger

DEFAULT_PAYLOAD_ENTRY = "data/tweets.js"

# Anything before the first bracket, e.g. "window.YTD.tweets.part0 = "
_HEADER = re.compile(r"^[^{\[]+")
_TERMINATOR = re.compile(r";\s*$")

# Sort key for records without a usable timestamp
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def strip_payload_header(text: str) -> str:
    """
    Remove the JavaScript assignment wrapper around the payload.

    Examples:
        'window.YTD.tweets.part0 = [{...}];' -> '[{...}]'
    """
    text = _HEADER.sub("", text, count=1)
    return _TERMINATOR.sub("", text, count=1)


def decode_payload(text: str):
    """
    Decode stripped payload text.

    Strict JSON first, then a lenient literal-only JSON5 parse (unquoted
    keys, single quotes, trailing commas, comments). Nothing is evaluated.

    Raises:
        PayloadDecodeError: If neither parser accepts the text
    """
    try:
        return json.loads(text)
    except RecursionError as e:
        raise PayloadDecodeError("Payload is nested too deeply") from e
    except ValueError as strict_error:
        log = get_logger("reader")
        log.debug("payload_lenient_decode", reason=str(strict_error))
        try:
            return json5.loads(text)
        except RecursionError as e:
            raise PayloadDecodeError("Payload is nested too deeply") from e
        except ValueError as e:
            raise PayloadDecodeError(f"Payload is not valid structured data: {e}") from e


def unwrap_records(decoded) -> list[dict]:
    """
    Pull tweet records out of the decoded payload.

    Export items look like ``{"tweet": {...}}``; bare records pass through.
    Non-mapping items are dropped.
    """
    if not isinstance(decoded, list):
        return []

    log = get_logger("reader")
    records = []
    for index, item in enumerate(decoded):
        if not isinstance(item, Mapping):
            log.warning("record_skipped", index=index, item_type=type(item).__name__)
            continue
        record = item.get("tweet") or item
        if not isinstance(record, Mapping):
            log.warning("record_skipped", index=index, item_type=type(record).__name__)
            continue
        if not tweet_id(record) or not raw_text(record):
            log.warning(
                "record_incomplete",
                index=index,
                has_id=bool(tweet_id(record)),
                has_text=bool(raw_text(record)),
            )
        records.append(dict(record))
    return records


def sort_by_recency(records: list[dict]) -> list[dict]:
    """Stable sort, most recent ``created_at`` first; unparsable dates last."""

    def key(record: dict) -> datetime:
        return parse_tweet_date(record.get("created_at")) or _OLDEST

    return sorted(records, key=key, reverse=True)


class ArchiveReader:
    """
    Reads tweet records from a Twitter/X export zip.

    Each call to ``read`` opens, decodes, and closes the archive; no state
    is kept between calls.

    Example:
        reader = ArchiveReader("twitter-archive.zip")
        tweets = await reader.read()
    """

    def __init__(self, archive_path: str | Path, payload_entry: str = DEFAULT_PAYLOAD_ENTRY):
        """
        Initialize reader.

        Args:
            archive_path: Path to the export zip
            payload_entry: Name of the tweet payload inside the zip
        """
        self.archive_path = Path(archive_path)
        self.payload_entry = payload_entry
        self._log = get_logger("reader")

    def read_entry(self) -> str:
        """
        Read the payload entry as text.

        Raises:
            ArchiveOpenError: If the zip cannot be opened
            EntryNotFoundError: If the payload entry is missing
        """
        try:
            with zipfile.ZipFile(self.archive_path) as zf:
                try:
                    data = zf.read(self.payload_entry)
                except KeyError as e:
                    raise EntryNotFoundError(
                        f"{self.payload_entry} not found in {self.archive_path}"
                    ) from e
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveOpenError(f"Cannot open archive {self.archive_path}: {e}") from e

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise PayloadDecodeError(f"{self.payload_entry} is not UTF-8 text: {e}") from e

    def read_sync(self) -> list[dict]:
        """Blocking read: entry text -> decoded -> unwrapped -> sorted."""
        text = self.read_entry()
        decoded = decode_payload(strip_payload_header(text))
        return sort_by_recency(unwrap_records(decoded))

    async def read(self) -> list[dict]:
        """
        Read all tweet records, most recent first.

        Returns:
            List of raw tweet dicts
        """
        self._log.debug("archive_read_start", archive=str(self.archive_path))
        start = time.perf_counter()

        records = await asyncio.to_thread(self.read_sync)

        self._log.info(
            "archive_read_complete",
            archive=str(self.archive_path),
            records_count=len(records),
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return records
