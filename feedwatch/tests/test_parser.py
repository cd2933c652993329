"""
Tests for RSS parsing.
"""

import pytest

from feedwatch.errors import ParsingError
from feedwatch.parser import parse_rss

from .conftest import make_rss


class TestParseRss:
    """Tests for parse_rss."""

    def test_parses_channel_metadata(self):
        result = parse_rss(make_rss(title="My Blog", description="Things I write"))
        assert result.title == "My Blog"
        assert result.description == "Things I write"

    def test_returns_one_item_per_item_element(self):
        content = make_rss([
            ("First", "https://example.com/1", "One"),
            ("Second", "https://example.com/2", "Two"),
            ("Third", "https://example.com/3", "Three"),
        ])
        result = parse_rss(content)
        assert len(result.items) == 3

    def test_item_fields_come_from_child_elements(self):
        result = parse_rss(make_rss([("Hello", "https://example.com/hello", "Body text")]))
        item = result.items[0]
        assert item.title == "Hello"
        assert item.link == "https://example.com/hello"
        assert item.description == "Body text"

    def test_preserves_item_order(self):
        content = make_rss([
            ("A", "https://example.com/a", ""),
            ("B", "https://example.com/b", ""),
        ])
        assert [i.link for i in parse_rss(content).items] == [
            "https://example.com/a",
            "https://example.com/b",
        ]

    def test_feed_without_items(self):
        result = parse_rss(make_rss([]))
        assert result.items == []

    def test_decodes_entities_in_title(self):
        result = parse_rss(make_rss([("Q&A", "https://example.com/qa", "")]))
        assert result.items[0].title == "Q&A"

    def test_plain_text_raises(self):
        with pytest.raises(ParsingError):
            parse_rss("this is not xml at all")

    def test_html_page_raises(self):
        with pytest.raises(ParsingError):
            parse_rss("<html><head><title>Page</title></head><body>Hi</body></html>")

    def test_truncated_feed_without_items_raises(self):
        with pytest.raises(ParsingError):
            parse_rss('<?xml version="1.0"?><rss version="2.0"><channel><title>Broken')

    def test_url_like_content_is_not_fetched(self):
        with pytest.raises(ParsingError):
            parse_rss("https://example.com/rss")
