"""Unit tests for the BeautifulSoup parser."""

from bs4 import BeautifulSoup

from ffetch.io import BeautifulSoupParser


def test_parse_returns_soup():
    """Parsed documents are queryable BeautifulSoup trees."""
    document = BeautifulSoupParser().parse("<html><head><title>Hello</title></head></html>")
    assert isinstance(document, BeautifulSoup)
    assert document.title.string == "Hello"


def test_parse_malformed_markup():
    """Malformed markup yields a best-effort tree."""
    document = BeautifulSoupParser().parse("<div><p>unclosed <b>bold</div>")
    assert document.find("b").get_text() == "bold"


def test_parse_empty_markup():
    """Empty input parses to an empty document."""
    document = BeautifulSoupParser().parse("")
    assert document.get_text() == ""
