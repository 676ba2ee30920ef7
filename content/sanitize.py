"""Turn a free-form model response into a postable string

This is a character-class cleanup, not a markdown parser. Steps run in a
fixed order and the length cut happens last.
"""

import re

from errors import EmptyContent
from settings import MAX_POST_LENGTH

# Emphasis, code, quote and bullet markers, removed wherever they occur
_MARKER_CHARS = re.compile(r"[*_`>\-]")
# Heading markers; a '#' directly followed by a word character is a hashtag
_HEADING_MARKS = re.compile(r"#(?!\w)")
# Ordered list prefix such as "1. " or "12) "; longer numbers like "2024." are content
_ORDERED_LIST_PREFIX = re.compile(r"^\s*\d{1,2}[.)]\s+")


def first_nonblank_line(raw: str) -> str:
    """Return the first line with visible content, or an empty string"""
    for line in raw.split("\n"):
        if line.strip():
            return line
    return ""


def strip_markers(line: str) -> str:
    line = _MARKER_CHARS.sub("", line)
    line = _HEADING_MARKS.sub("", line)
    return _ORDERED_LIST_PREFIX.sub("", line)


def sanitize(raw: str, max_length: int = MAX_POST_LENGTH) -> str:
    """Sanitize generated text for posting

    Args:
        raw: Text returned by the generator
        max_length: Hard cap on the result length, in characters

    Returns:
        Cleaned text, at most ``max_length`` characters. A long line is cut
        at exactly ``max_length`` even if that splits a word.

    Raises:
        EmptyContent: nothing usable is left
    """
    text = strip_markers(first_nonblank_line(raw or "")).strip()

    if not text:
        raise EmptyContent("Generated post was empty. Please try again.")

    if len(text) > max_length:
        text = text[:max_length]

    return text
