"""Errors raised while collecting repository stats."""

from typing import Optional


class RepoStatsError(Exception):
    """Base class for all repo_stats errors."""
    pass


class FetchError(RepoStatsError):
    """Raised when a fetch does not produce usable data."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(FetchError):
    """Raised when the request never got a response."""
    pass


class UpstreamAPIError(FetchError):
    """Raised when the GitHub API answers with an error status."""
    pass


class EmptyRepositoryError(FetchError):
    """Raised when a repository has no commits to report."""
    pass


class ParseError(RepoStatsError):
    """Raised when markup or a counter cannot be parsed."""
    pass
