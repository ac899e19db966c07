"""Pure text helpers: slugs, markup stripping, word counts, reading time."""

import html
import math
import re

WORDS_PER_MINUTE = 238

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.UNICODE)
_SEPARATOR_RUNS = re.compile(r"[\s_-]+", re.UNICODE)
_TAGS = re.compile(r"<[^>]*>")
_WORD = re.compile(r"[^\W\d_]+(?:['-][^\W\d_]+)*", re.UNICODE)


def slugify(text: str) -> str:
    """Turn free text into a lowercase, hyphen-separated, URL-safe token.

    Total and deterministic; may return an empty string, which callers
    must handle.

    >>> slugify("Hello, World! 2024")
    'hello-world-2024'
    >>> slugify("  --  ")
    ''
    """
    value = text.strip().lower()
    value = _NON_SLUG_CHARS.sub("", value)
    value = _SEPARATOR_RUNS.sub("-", value)
    return value.strip("-")


def strip_tags(markup: str) -> str:
    """Remove HTML tags and decode entities."""
    return html.unescape(_TAGS.sub(" ", markup or ""))


def word_count(text: str) -> int:
    """Count alphabetic words, treating inner apostrophes and hyphens as part of a word."""
    return len(_WORD.findall(text))


def reading_time(body: str) -> int:
    """Minutes needed to read ``body`` (markup ignored), never less than one."""
    words = word_count(strip_tags(body))
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def excerpt(markup: str, length: int = 180) -> str:
    """Plain-text excerpt of ``markup`` capped at ``length`` characters."""
    text = " ".join(strip_tags(markup).split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "…"
