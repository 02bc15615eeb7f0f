"""GitHub REST API client for the read-only repository endpoints."""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests

from repo_stats.config import Settings
from repo_stats.domain.errors import TransportError, UpstreamAPIError

logger = logging.getLogger(__name__)


class GitHubRESTClient:
    """Client for the GitHub REST API. One session, no retries."""

    # Authenticated: 5,000 requests per hour. Unauthenticated: 60 per hour,
    # which a page with more than a dozen repositories will exhaust.
    RATE_LIMIT_WARNING_THRESHOLD = 10
    COMMITS_PAGE_SIZE = 100

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """
        Initialize GitHub REST client.

        Args:
            settings: Runtime settings carrying the API URL, token and timeout.
            session: Session to reuse. If None, a new one is created.
        """
        self.base_url = settings.github_api_url.rstrip("/")
        self.timeout = settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

        # Add authorization header if token is available
        if settings.github_token:
            self.session.headers["Authorization"] = f"Bearer {settings.github_token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Issue a GET against the API.

        Raises:
            TransportError: If the request fails before a response arrives
            UpstreamAPIError: If the API answers with a non-2xx status
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        self._check_rate_limit(response)

        if 200 <= response.status_code < 300:
            return response

        message = self._error_message(response)
        if response.status_code == 401:
            raise UpstreamAPIError(
                f"Authentication failed. Check your GitHub token. ({message})",
                status_code=401,
            )
        if response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            raise UpstreamAPIError(f"Rate limit exceeded: {message}", status_code=403)
        if response.status_code == 404:
            raise UpstreamAPIError(f"Not found: {url}", status_code=404)
        raise UpstreamAPIError(
            f"GET {url} returned HTTP {response.status_code}: {message}",
            status_code=response.status_code,
        )

    def _check_rate_limit(self, response: requests.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None and remaining.isdigit():
            if int(remaining) <= self.RATE_LIMIT_WARNING_THRESHOLD:
                logger.warning(f"Low API rate limit: {remaining} requests remaining")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return response.json().get("message", "")
        except ValueError:
            return response.text[:200]

    @staticmethod
    def _next_page(response: requests.Response) -> Optional[int]:
        """Page number named by the Link header's "next" relation, or None on the last page."""
        next_link = response.links.get("next")
        if not next_link:
            return None
        pages = parse_qs(urlparse(next_link["url"]).query).get("page")
        return int(pages[0]) if pages else None

    def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Get repository metadata (stargazers, forks, subscribers...)."""
        return self._get(f"repos/{owner}/{repo}").json()

    def list_commits(
        self, owner: str, repo: str, per_page: int = COMMITS_PAGE_SIZE, page: int = 1
    ) -> Tuple[List[Dict[str, Any]], Optional[int]]:
        """
        Fetch one page of commits from the default branch, newest first.

        Returns:
            Tuple of (commits on this page, next page number or None)
        """
        response = self._get(
            f"repos/{owner}/{repo}/commits",
            {"per_page": per_page, "page": page},
        )
        return response.json(), self._next_page(response)

    def list_contributors(self, owner: str, repo: str) -> List[Dict[str, Any]]:
        """Contributors including anonymous ones. Only the API's default first page."""
        return self._get(f"repos/{owner}/{repo}/contributors", {"anon": "true"}).json()

    def list_pull_requests(self, owner: str, repo: str) -> List[Dict[str, Any]]:
        """Pull requests in every state. Only the API's default first page."""
        return self._get(f"repos/{owner}/{repo}/pulls", {"state": "all"}).json()
