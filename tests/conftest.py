"""Shared fixtures - builds export archives in tmp_path, no real data needed."""

import json
import zipfile
from pathlib import Path

import pytest

from xarchive.core.reader import ArchiveReader

PAYLOAD_HEADER = "window.YTD.tweets.part0 = "


def make_tweet(
    tweet_id: str,
    text: str,
    created_at: str | None = "Wed Oct 10 20:19:24 +0000 2018",
    urls: list[dict] | None = None,
    user: dict | None = None,
) -> dict:
    """Build a raw archive tweet record."""
    tweet = {
        "id_str": tweet_id,
        "id": tweet_id,
        "full_text": text,
        "entities": {"urls": urls or []},
    }
    if created_at is not None:
        tweet["created_at"] = created_at
    if user is not None:
        tweet["user"] = user
    return tweet


def write_archive(
    path: Path,
    payload: str | bytes | None,
    entry: str = "data/tweets.js",
) -> Path:
    """Write a zip holding ``payload`` at ``entry``; None writes an empty zip."""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("data/account.js", "window.YTD.account.part0 = []")
        if payload is not None:
            zf.writestr(entry, payload)
    return path


def export_payload(tweets: list[dict], wrap: bool = True) -> str:
    """Render tweets the way the export writes tweets.js."""
    items = [{"tweet": t} for t in tweets] if wrap else tweets
    return PAYLOAD_HEADER + json.dumps(items, indent=2) + ";\n"


@pytest.fixture
def scenario_tweets() -> list[dict]:
    """Retweet, reply, and plain tweet with ids 1-3 and decreasing timestamps."""
    return [
        make_tweet("1", "RT @x hi", "Wed Jan 03 10:00:00 +0000 2024"),
        make_tweet("2", "@a hello @b #tag http://short", "Tue Jan 02 10:00:00 +0000 2024"),
        make_tweet("3", "plain", "Mon Jan 01 10:00:00 +0000 2024"),
    ]


@pytest.fixture
def archive_factory(tmp_path):
    """Create archives from a tweet list."""
    counter = {"n": 0}

    def factory(tweets: list[dict], wrap: bool = True) -> Path:
        counter["n"] += 1
        return write_archive(tmp_path / f"archive-{counter['n']}.zip", export_payload(tweets, wrap))

    return factory


@pytest.fixture
def scenario_archive(archive_factory, scenario_tweets) -> Path:
    return archive_factory(scenario_tweets)


@pytest.fixture
def scenario_reader(scenario_archive) -> ArchiveReader:
    return ArchiveReader(scenario_archive)
