"""Random sampling of sanitized original tweet texts."""

import json
import random
from collections.abc import Mapping

from xarchive.core.catalog import RecordSource
from xarchive.core.sanitizer import sanitize_text
from xarchive.core.transformer import raw_text
from xarchive.logging import get_logger
from xarchive.models.sample import DEFAULT_SAMPLE_SIZE, SampleRequest, parse_sample_size

TOOL_NAME = "sample_tweet_texts"
RESHARE_PREFIX = "RT @"


def is_reshare(record: Mapping, prefix: str = RESHARE_PREFIX) -> bool:
    """True for retweets; the check is exact and case-sensitive."""
    return raw_text(record).startswith(prefix)


class SampleTool:
    """
    Draws distinct original tweets at random and returns redacted text.

    Example:
        tool = SampleTool(reader, rng=random.Random(7))
        texts = await tool.sample(SampleRequest(sample_size=3))
    """

    def __init__(
        self,
        source: RecordSource,
        rng: random.Random | None = None,
        default_size: int = DEFAULT_SAMPLE_SIZE,
        reshare_prefix: str = RESHARE_PREFIX,
    ):
        """
        Initialize sample tool.

        Args:
            source: Record source, re-read on every call
            rng: Random source, injectable for reproducible tests
            default_size: Size used for missing or invalid requests
            reshare_prefix: Text prefix marking retweets
        """
        self.source = source
        self.rng = rng or random.Random()
        self.default_size = default_size
        self.reshare_prefix = reshare_prefix
        self._log = get_logger("sampler")

    def parse_request(self, arguments: Mapping | None) -> SampleRequest:
        """Build a request from loosely typed tool arguments."""
        value = (arguments or {}).get("sampleSize")
        return SampleRequest(sample_size=parse_sample_size(value, self.default_size))

    async def sample(self, request: SampleRequest | None = None) -> list[str]:
        """
        Sample sanitized texts without replacement.

        Returns:
            min(sample_size, pool size) strings, in draw order
        """
        request = request or SampleRequest(sample_size=self.default_size)
        records = await self.source.read()

        pool = [record for record in records if not is_reshare(record, self.reshare_prefix)]
        count = min(request.sample_size, len(pool))
        indices = self.rng.sample(range(len(pool)), count)

        self._log.info(
            "sample_drawn",
            requested=request.sample_size,
            pool_size=len(pool),
            drawn=count,
        )
        return [sanitize_text(raw_text(pool[index])) for index in indices]

    async def call(self, arguments: Mapping | None = None) -> dict:
        """
        Run the tool with protocol arguments.

        Returns:
            ``{"content": [{"type": "text", "text": <JSON array>}]}``
        """
        texts = await self.sample(self.parse_request(arguments))
        return {
            "content": [
                {
                    "type": "text",
                    "text": json.dumps(texts, indent=2, ensure_ascii=False),
                }
            ]
        }
