"""Privacy redaction for sampled tweet text."""

import re

LINK_TOKEN = "[LINK]"
USERNAME_TOKEN = "[USERNAME]"
HASHTAG_TOKEN = "[HASHTAG]"

# Reply/retweet header: one or more "@handle " at the start
LEADING_MENTIONS = re.compile(r"^(?:@\w+\s+)+")
LINK = re.compile(r"https?://\S+")
MENTION = re.compile(r"@\w+")
HASHTAG = re.compile(r"#\w+")
WHITESPACE_RUN = re.compile(r"\s{2,}")


def strip_leading_mentions(text: str) -> str:
    """Remove the leading run of @mentions."""
    return LEADING_MENTIONS.sub("", text, count=1)


def sanitize_text(text: str) -> str:
    """
    Replace mentions, hashtags, and links with placeholder tokens.

    Leading mentions are dropped before redaction so that reply headers
    disappear instead of turning into a row of placeholders.

    Examples:
        "@a @b hello #x http://y" -> "hello [HASHTAG] [LINK]"
    """
    cleaned = strip_leading_mentions(text)
    cleaned = LINK.sub(LINK_TOKEN, cleaned)
    cleaned = MENTION.sub(USERNAME_TOKEN, cleaned)
    cleaned = HASHTAG.sub(HASHTAG_TOKEN, cleaned)
    return WHITESPACE_RUN.sub(" ", cleaned).strip()
