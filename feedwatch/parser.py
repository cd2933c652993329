"""
Feed Parser - Turn raw RSS content into a channel and its items.

Handles:
- RSS 2.0 (and anything else feedparser recognises, e.g. Atom)
- Malformed documents, reported as ParsingError
"""

from dataclasses import dataclass

import feedparser

from .errors import ParsingError


@dataclass
class ParsedItem:
    """A single item from a feed document."""
    title: str
    link: str
    description: str


@dataclass
class ParsedFeed:
    """Channel metadata and items from a feed document."""
    title: str
    description: str
    items: list[ParsedItem]


def _is_malformed(parsed) -> bool:
    if not parsed.bozo:
        return False
    # feedparser flags a declared/actual encoding mismatch, the content is still usable
    return not isinstance(parsed.bozo_exception, feedparser.CharacterEncodingOverride)


def parse_rss(content: str) -> ParsedFeed:
    """
    Parse feed content.

    Args:
        content: Raw feed text as returned by the proxy

    Returns:
        ParsedFeed with title, description and items

    Raises:
        ParsingError: If the content is not a recognisable feed
    """
    # Bytes, so feedparser never treats URL-like content as something to fetch.
    # The proxy already decoded the text; the header keeps a stale XML encoding
    # declaration from re-decoding it.
    parsed = feedparser.parse(
        content.encode("utf-8"),
        response_headers={"content-type": "application/xml; charset=utf-8"},
    )

    if not parsed.get("version"):
        reason = parsed.get("bozo_exception") or "unrecognised feed format"
        raise ParsingError(f"Failed to parse feed: {reason}")

    if _is_malformed(parsed) and not parsed.entries:
        raise ParsingError(f"Failed to parse feed: {parsed.bozo_exception}")

    items = [
        ParsedItem(
            title=entry.get("title", ""),
            link=entry.get("link", ""),
            description=entry.get("summary", ""),
        )
        for entry in parsed.entries
    ]

    return ParsedFeed(
        title=parsed.feed.get("title", ""),
        description=parsed.feed.get("description", ""),
        items=items,
    )
