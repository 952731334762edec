"""
Small, focused text cleaning utilities applied before drawing.
"""

import re
from typing import Callable


_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")
_EMPHASIS = re.compile(r"(\*\*|__|\*)(?=\S)(.+?)(?<=\S)\1")
_INLINE_CODE = re.compile(r"`([^`]*)`")
_LINK = re.compile(r"!?\[([^\]]*)\]\(([^)\s]*)\)")
_BULLET = re.compile(r"^(\s*)[-*+]\s+")
_HEADING = re.compile(r"^#{3,6}\s+")
_BULLET_CHAR = "\u2022"


def normalize_whitespace(value: str) -> str:
    """Collapse unusual whitespace into single ASCII spaces.

    Example:
        >>> normalize_whitespace("a\\u00a0b\\u200bb")
        'a bb'
    """

    clean = _NON_BREAKING_SPACES.sub(" ", value)
    clean = _ZERO_WIDTH.sub("", clean)
    clean = re.sub(r"[ \t\r\f\v]+", " ", clean)
    return clean.strip()


def strip_emphasis(value: str) -> str:
    """Drop bold/italic markers and inline code ticks.

    Example:
        >>> strip_emphasis("a **bold** and `code` word")
        'a bold and code word'
    """

    previous = None
    result = value
    while previous != result:
        previous = result
        result = _EMPHASIS.sub(r"\2", result)
    return _INLINE_CODE.sub(r"\1", result)


def flatten_links(value: str) -> str:
    """Replace markdown links with their label.

    Example:
        >>> flatten_links("see [docs](https://example.com) now")
        'see docs now'
    """

    return _LINK.sub(r"\1", value)


def plain_markers(value: str) -> str:
    """Turn list markers into bullets and drop minor heading hashes.

    Example:
        >>> plain_markers("- item")
        '• item'
        >>> plain_markers("### Detail")
        'Detail'
    """

    value = _HEADING.sub("", value)
    return _BULLET.sub(lambda match: f"{match.group(1)}{_BULLET_CHAR} ", value)


def clean_text(value: str) -> str:
    """Run all targeted cleaners in a stable order."""

    cleaners: tuple[Callable[[str], str], ...] = (
        plain_markers,
        flatten_links,
        strip_emphasis,
        normalize_whitespace,
    )
    result = value
    for cleaner in cleaners:
        result = cleaner(result)
    return result
