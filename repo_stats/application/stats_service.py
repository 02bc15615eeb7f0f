"""Application service for collecting per-repository stats."""

import logging
from datetime import date, datetime
from typing import Iterable, List

from repo_stats.domain.errors import EmptyRepositoryError
from repo_stats.domain.repository import RepositoryId, RepositoryRecord
from repo_stats.infrastructure.github_client import GitHubRESTClient
from repo_stats.infrastructure.page_scraper import PageScraper

logger = logging.getLogger(__name__)


class RepoStatsService:
    """Service assembling one RepositoryRecord per repository, sequentially."""

    def __init__(self, github_client: GitHubRESTClient, page_scraper: PageScraper):
        """
        Initialize stats service.

        Args:
            github_client: GitHub REST API client
            page_scraper: Scraper for repository web pages
        """
        self.github_client = github_client
        self.page_scraper = page_scraper

    def collect_all(self, repo_ids: Iterable[RepositoryId]) -> List[RepositoryRecord]:
        """
        Collect records for every repository, in input order.

        A repository whose collection fails is logged and left out.
        """
        records: List[RepositoryRecord] = []
        for repo_id in repo_ids:
            try:
                records.append(self.collect_repository(repo_id))
            except Exception as e:
                logger.error(f"Error getting info for {repo_id.full_name}: {e}")
                continue
        logger.info(f"Collected stats for {len(records)} repositories")
        return records

    def collect_repository(self, repo_id: RepositoryId) -> RepositoryRecord:
        """
        Fetch everything needed for one repository.

        Raises:
            FetchError: If metadata, commits, contributors or pull requests cannot be fetched
        """
        owner, name = repo_id.owner, repo_id.name
        logger.info(f"Fetching info for {repo_id.full_name}")

        repo_data = self.github_client.get_repository(owner, name)
        latest_commit_date = self._latest_commit_date(repo_id)
        total_commits = self._count_commits(repo_id)
        contributors = self.github_client.list_contributors(owner, name)
        pull_requests = self.github_client.list_pull_requests(owner, name)
        used_by = self._used_by(repo_id)

        return RepositoryRecord(
            owner=owner,
            name=name,
            latest_commit_date=latest_commit_date,
            total_commits=total_commits,
            stars=repo_data.get("stargazers_count", 0),
            forks=repo_data.get("forks_count", 0),
            watchers=repo_data.get("subscribers_count", 0),
            used_by=used_by,
            contributors=len(contributors),
            pull_requests=len(pull_requests),
        )

    def _latest_commit_date(self, repo_id: RepositoryId) -> date:
        commits, _ = self.github_client.list_commits(repo_id.owner, repo_id.name, per_page=1)
        if not commits:
            raise EmptyRepositoryError(f"No commits found for {repo_id.full_name}")

        committed_at = commits[0]["commit"]["author"]["date"]
        return datetime.fromisoformat(committed_at.replace("Z", "+00:00")).date()

    def _count_commits(self, repo_id: RepositoryId) -> int:
        """Walk every commit page; the last page is the one without a next link."""
        total = 0
        page = 1
        while True:
            commits, next_page = self.github_client.list_commits(
                repo_id.owner,
                repo_id.name,
                per_page=GitHubRESTClient.COMMITS_PAGE_SIZE,
                page=page,
            )
            total += len(commits)
            logger.debug(f"{repo_id.full_name}: page {page} had {len(commits)} commits")
            if next_page is None:
                break
            page = next_page
        return total

    def _used_by(self, repo_id: RepositoryId) -> int:
        try:
            return self.page_scraper.scrape_used_by(repo_id)
        except Exception as e:
            logger.warning(f"Error getting Used by count for {repo_id.full_name}: {e}")
            return 0
