"""HTML scraping: repository links on the source page and "Used by" counters.

Pages are fetched with ``requests`` and parsed with BeautifulSoup using the
standard-library ``html.parser`` backend.
"""

import logging
from typing import List, Optional

import bs4
import requests

from repo_stats.config import Settings
from repo_stats.domain.errors import FetchError, ParseError, TransportError
from repo_stats.domain.repository import RepositoryId

logger = logging.getLogger(__name__)

DEPENDENTS_COUNTER_SELECTOR = "a[href$='/network/dependents'] span.Counter"


def _parse(html: str) -> bs4.BeautifulSoup:
    try:
        return bs4.BeautifulSoup(html, "html.parser")
    except bs4.builder.ParserRejectedMarkup as e:
        raise ParseError(f"Unparseable markup: {e}") from e


def extract_repository_links(html: str, host_prefix: str = "https://github.com/") -> List[RepositoryId]:
    """
    Collect repository identifiers from anchors pointing at ``host_prefix``.

    Every matching anchor with at least two path segments yields one
    identifier, in document order. Duplicates are kept.
    """
    soup = _parse(html)
    repos: List[RepositoryId] = []
    for anchor in soup.select(f'a[href^="{host_prefix}"]'):
        parts = anchor["href"][len(host_prefix):].split("/")
        if len(parts) >= 2:
            repos.append(RepositoryId(owner=parts[0], name=parts[1]))
    return repos


def parse_used_by_count(html: str) -> int:
    """
    Read the dependents counter from a repository page.

    Returns 0 when the page has no counter.

    Raises:
        ParseError: If the counter text is not a number
    """
    soup = _parse(html)
    text = "".join(el.get_text() for el in soup.select(DEPENDENTS_COUNTER_SELECTOR))
    text = text.replace(",", "").strip()
    if not text:
        return 0
    if not text.isdigit():
        raise ParseError(f"Unexpected dependents counter text: {text!r}")
    return int(text)


class PageScraper:
    """Fetches HTML pages over a shared session."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.host_prefix = settings.host_prefix
        self.timeout = settings.request_timeout
        self.session = session or requests.Session()

    def fetch_html(self, url: str) -> str:
        """
        Fetch a page body.

        Raises:
            TransportError: If the request fails before a response arrives
            FetchError: If the server answers with a non-2xx status
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"GET {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def discover_repositories(self, page_url: str) -> List[RepositoryId]:
        """Fetch ``page_url`` and return the repositories it links to."""
        html = self.fetch_html(page_url)
        repos = extract_repository_links(html, self.host_prefix)
        logger.info(f"Found {len(repos)} repository links on {page_url}")
        return repos

    def scrape_used_by(self, repo_id: RepositoryId) -> int:
        """Dependents count shown on the repository's web page."""
        html = self.fetch_html(f"{self.host_prefix}{repo_id.full_name}")
        return parse_used_by_count(html)
