"""Domain entities for GitHub repositories."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

GITHUB_WEB_URL = "https://github.com"


@dataclass(frozen=True)
class RepositoryId:
    """Owner/name pair naming a hosted repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable snapshot of a repository's activity and popularity counts."""

    owner: str
    name: str
    latest_commit_date: Optional[date]
    total_commits: int
    stars: int
    forks: int
    watchers: int
    used_by: int
    contributors: int
    pull_requests: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return f"{GITHUB_WEB_URL}/{self.full_name}"
