"""Unit tests for the resource catalog - zip fixtures, no network."""

import json

import pytest

from conftest import make_tweet
from xarchive.core.catalog import LIST_URI, ResourceCatalog
from xarchive.core.reader import ArchiveReader
from xarchive.exceptions import ArchiveOpenError, ResourceNotFoundError


@pytest.fixture
def catalog(scenario_reader) -> ResourceCatalog:
    return ResourceCatalog(scenario_reader)


class TestListRecent:
    """Test the tweet-list://recent view."""

    @pytest.mark.asyncio
    async def test_lists_every_tweet_most_recent_first(self, catalog):
        payload = await catalog.list_recent()
        contents = payload["contents"]

        assert [item["id"] for item in contents] == ["1", "2", "3"]
        assert [item["uri"] for item in contents] == ["tweet://1", "tweet://2", "tweet://3"]

    @pytest.mark.asyncio
    async def test_items_have_canonical_fields(self, catalog):
        payload = await catalog.list_recent()
        for item in payload["contents"]:
            assert set(item) == {"uri", "id", "displayName", "username", "text", "createdAt"}

    @pytest.mark.asyncio
    async def test_links_expanded(self, archive_factory):
        path = archive_factory([
            make_tweet(
                "5",
                "look https://t.co/z",
                urls=[{"url": "https://t.co/z", "expanded_url": "https://example.com/z"}],
            )
        ])
        payload = await ResourceCatalog(ArchiveReader(path)).list_recent()
        assert payload["contents"][0]["text"] == "look https://example.com/z"

    @pytest.mark.asyncio
    async def test_non_string_text_does_not_break_listing(self, archive_factory):
        """One malformed record is served with empty text, the rest as usual."""
        path = archive_factory([
            make_tweet("1", "fine", "Wed Jan 03 10:00:00 +0000 2024"),
            make_tweet("2", 12345, "Tue Jan 02 10:00:00 +0000 2024"),
        ])
        payload = await ResourceCatalog(ArchiveReader(path)).list_recent()

        assert [item["id"] for item in payload["contents"]] == ["1", "2"]
        assert [item["text"] for item in payload["contents"]] == ["fine", ""]

    @pytest.mark.asyncio
    async def test_empty_archive(self, archive_factory):
        payload = await ResourceCatalog(ArchiveReader(archive_factory([]))).list_recent()
        assert payload == {"contents": []}


class TestGetTweet:
    """Test the tweet://{id} view."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("wanted", ["1", "2", "3"])
    async def test_found(self, catalog, wanted):
        payload = await catalog.get_tweet(wanted)
        [item] = payload["contents"]
        assert item["id"] == wanted
        assert item["uri"] == f"tweet://{wanted}"

    @pytest.mark.asyncio
    async def test_text_is_expanded_not_sanitized(self, archive_factory):
        path = archive_factory([
            make_tweet(
                "5",
                "@a look https://t.co/z #tag",
                urls=[{"url": "https://t.co/z", "expanded_url": "https://example.com/z"}],
            )
        ])
        payload = await ResourceCatalog(ArchiveReader(path)).get_tweet("5")
        assert payload["contents"][0]["text"] == "@a look https://example.com/z #tag"

    @pytest.mark.asyncio
    async def test_not_found_is_a_result(self, catalog):
        payload = await catalog.get_tweet("404")
        [item] = payload["contents"]

        assert item["uri"] == "tweet://404"
        assert json.loads(item["text"]) == {"error": "Tweet not found", "id": "404"}

    @pytest.mark.asyncio
    async def test_not_found_echoes_requested_uri(self, catalog):
        payload = await catalog.get_tweet("404", uri="tweet://404")
        assert payload["contents"][0]["uri"] == "tweet://404"

    @pytest.mark.asyncio
    async def test_matches_numeric_id(self, archive_factory):
        path = archive_factory([{"id": 77, "full_text": "numbers"}])
        payload = await ResourceCatalog(ArchiveReader(path)).get_tweet("77")
        assert payload["contents"][0]["text"] == "numbers"


class TestGetTweetText:
    """Test the tweet-text://{id} view."""

    @pytest.mark.asyncio
    async def test_returns_raw_text(self, archive_factory):
        path = archive_factory([
            make_tweet(
                "5",
                "@a look https://t.co/z",
                urls=[{"url": "https://t.co/z", "expanded_url": "https://example.com/z"}],
            )
        ])
        payload = await ResourceCatalog(ArchiveReader(path)).get_tweet_text("5")
        assert payload == {"contents": [{"uri": "tweet-text://5", "text": "@a look https://t.co/z"}]}

    @pytest.mark.asyncio
    async def test_falls_back_to_text_field(self, archive_factory):
        path = archive_factory([{"id_str": "8", "text": "short form"}])
        payload = await ResourceCatalog(ArchiveReader(path)).get_tweet_text("8")
        assert payload["contents"][0]["text"] == "short form"

    @pytest.mark.asyncio
    async def test_not_found(self, catalog):
        payload = await catalog.get_tweet_text("999")
        [item] = payload["contents"]
        assert item["uri"] == "tweet-text://999"
        assert json.loads(item["text"]) == {"error": "Tweet not found", "id": "999"}


class TestReadDispatch:
    """Test URI dispatch."""

    @pytest.mark.asyncio
    async def test_list_uri(self, catalog):
        payload = await catalog.read(LIST_URI)
        assert len(payload["contents"]) == 3

    @pytest.mark.asyncio
    async def test_trailing_slash_tolerated(self, catalog):
        payload = await catalog.read("tweet-list://recent/")
        assert len(payload["contents"]) == 3

    @pytest.mark.asyncio
    async def test_tweet_uri(self, catalog):
        payload = await catalog.read("tweet://2")
        assert payload["contents"][0]["id"] == "2"

    @pytest.mark.asyncio
    async def test_tweet_text_uri(self, catalog):
        payload = await catalog.read("tweet-text://3")
        assert payload["contents"][0] == {"uri": "tweet-text://3", "text": "plain"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("uri", ["tweet://", "other://1", "tweet-list://old", "nonsense"])
    async def test_unknown_uri(self, catalog, uri):
        with pytest.raises(ResourceNotFoundError):
            await catalog.read(uri)


class TestCatalogErrors:
    """Archive failures propagate; they are not folded into content."""

    @pytest.mark.asyncio
    async def test_missing_archive(self, tmp_path):
        catalog = ResourceCatalog(ArchiveReader(tmp_path / "gone.zip"))
        with pytest.raises(ArchiveOpenError):
            await catalog.get_tweet("1")

    @pytest.mark.asyncio
    async def test_archive_removed_mid_run(self, scenario_archive):
        catalog = ResourceCatalog(ArchiveReader(scenario_archive))
        await catalog.list_recent()

        scenario_archive.unlink()
        with pytest.raises(ArchiveOpenError):
            await catalog.list_recent()
