"""Sample request model."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SAMPLE_SIZE = 5

# Leading integer, trailing characters ignored ("12abc" -> 12)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_sample_size(value, default: int = DEFAULT_SAMPLE_SIZE) -> int:
    """
    Coerce a loosely typed sample size to a positive integer.

    Examples:
        "3" -> 3
        "12abc" -> 12
        "0", "-2", "abc", None -> default
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value)
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        parsed = int(match.group(1))

    return parsed if parsed > 0 else default


class SampleRequest(BaseModel):
    """Arguments of the ``sample_tweet_texts`` tool."""

    model_config = ConfigDict(populate_by_name=True)

    sample_size: int = Field(default=DEFAULT_SAMPLE_SIZE, alias="sampleSize")

    @field_validator("sample_size", mode="before")
    @classmethod
    def _coerce_size(cls, value):
        return parse_sample_size(value)
