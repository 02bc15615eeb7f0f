"""Tests for repository link extraction and the Used by counter."""

from unittest.mock import MagicMock

import pytest
import requests

from repo_stats.config import Settings
from repo_stats.domain.errors import FetchError, ParseError, TransportError
from repo_stats.domain.repository import RepositoryId
from repo_stats.infrastructure.page_scraper import (
    PageScraper,
    extract_repository_links,
    parse_used_by_count,
)

SAMPLES_PAGE = """
<html><body>
  <h3>Python</h3>
  <a href="https://github.com/python-telegram-bot/python-telegram-bot">python-telegram-bot</a>
  <a href="https://core.telegram.org/bots/api">Bot API</a>
  <a href="https://github.com/aiogram/aiogram/tree/dev-3.x">aiogram</a>
  <a href="https://github.com/eternnoir">eternnoir</a>
  <a href="https://github.com/python-telegram-bot/python-telegram-bot">again</a>
  <a href="http://github.com/insecure/link">http only</a>
</body></html>
"""


def _response(status_code=200, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


def test_extract_links_in_document_order_with_duplicates():
    """Every matching anchor yields one identifier, duplicates kept."""
    repos = extract_repository_links(SAMPLES_PAGE)
    assert repos == [
        RepositoryId("python-telegram-bot", "python-telegram-bot"),
        RepositoryId("aiogram", "aiogram"),
        RepositoryId("python-telegram-bot", "python-telegram-bot"),
    ]


def test_extract_links_skips_single_segment():
    """An owner-only link is not a repository."""
    html = '<a href="https://github.com/eternnoir">x</a><a href="https://github.com/">y</a>'
    assert extract_repository_links(html) == []


def test_extract_links_empty_page():
    """No anchors, no identifiers."""
    assert extract_repository_links("<html><body><p>nothing</p></body></html>") == []


def test_extract_links_custom_prefix():
    """Host prefix is configurable."""
    html = '<a href="https://example.org/a/b">x</a><a href="https://github.com/c/d">y</a>'
    assert extract_repository_links(html, "https://example.org/") == [RepositoryId("a", "b")]


def test_parse_used_by_count_strips_separators():
    """Counter text with thousands separators is parsed."""
    html = (
        '<a href="/aiogram/aiogram/network/dependents">Used by '
        '<span class="Counter">12,345</span></a>'
    )
    assert parse_used_by_count(html) == 12345


def test_parse_used_by_count_missing_counter_is_zero():
    """Repositories without a dependents graph report zero."""
    assert parse_used_by_count("<html><body><span class='Counter'>7</span></body></html>") == 0


def test_parse_used_by_count_rejects_abbreviated_text():
    """Non-numeric counter text is a parse error."""
    html = '<a href="/a/b/network/dependents"><span class="Counter">1.2k</span></a>'
    with pytest.raises(ParseError):
        parse_used_by_count(html)


def test_fetch_html_non_2xx_raises_fetch_error():
    """A 404 page is a fetch failure."""
    session = MagicMock()
    session.get.return_value = _response(404)
    scraper = PageScraper(Settings(), session=session)
    with pytest.raises(FetchError) as exc_info:
        scraper.fetch_html("https://core.telegram.org/bots/samples")
    assert exc_info.value.status_code == 404


def test_fetch_html_connection_error_raises_transport_error():
    """Network failures are wrapped."""
    session = MagicMock()
    session.get.side_effect = requests.exceptions.ConnectionError("boom")
    scraper = PageScraper(Settings(), session=session)
    with pytest.raises(TransportError):
        scraper.fetch_html("https://core.telegram.org/bots/samples")


def test_fetch_html_uses_configured_timeout():
    """Timeout comes from settings."""
    session = MagicMock()
    session.get.return_value = _response(200, "<html></html>")
    scraper = PageScraper(Settings(request_timeout=5.0), session=session)
    assert scraper.fetch_html("https://example.org") == "<html></html>"
    session.get.assert_called_once_with("https://example.org", timeout=5.0)


def test_discover_repositories():
    """Discovery fetches the page and extracts links."""
    session = MagicMock()
    session.get.return_value = _response(200, SAMPLES_PAGE)
    scraper = PageScraper(Settings(), session=session)
    repos = scraper.discover_repositories("https://core.telegram.org/bots/samples")
    assert len(repos) == 3
    assert repos[1].full_name == "aiogram/aiogram"


def test_scrape_used_by_requests_repository_page():
    """Used by is read from https://github.com/owner/name."""
    session = MagicMock()
    session.get.return_value = _response(
        200, '<a href="/a/b/network/dependents"><span class="Counter"> 42 </span></a>'
    )
    scraper = PageScraper(Settings(), session=session)
    assert scraper.scrape_used_by(RepositoryId("a", "b")) == 42
    session.get.assert_called_once_with("https://github.com/a/b", timeout=None)
