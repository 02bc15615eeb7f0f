#!/usr/bin/env python3
"""Script to collect stats for repositories linked from a documentation page."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from repo_stats.config import Settings
from repo_stats.infrastructure.github_client import GitHubRESTClient
from repo_stats.infrastructure.page_scraper import PageScraper
from repo_stats.application.stats_service import RepoStatsService
from repo_stats.application.table_renderer import print_markdown_table

logger = logging.getLogger(__name__)


def main(settings=None):
    """Scrape the source page, collect stats and print them as a Markdown table."""
    if settings is None:
        settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not settings.github_token:
        logger.warning("GITHUB_TOKEN not set. Using unauthenticated client (limited rate).")

    # Initialize clients
    github_client = GitHubRESTClient(settings)
    page_scraper = PageScraper(settings)

    try:
        repo_ids = page_scraper.discover_repositories(settings.source_page_url)
    except Exception as e:
        logger.error(f"Error scraping GitHub repos from {settings.source_page_url}: {e}")
        return 1

    service = RepoStatsService(github_client, page_scraper)
    records = service.collect_all(repo_ids)

    print_markdown_table(records)
    return 0


if __name__ == "__main__":
    sys.exit(main())
