"""Runtime configuration loaded from the environment and an optional .env file."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_PAGE_URL = "https://core.telegram.org/bots/samples"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_WEB_URL = "https://github.com"


@dataclass(frozen=True)
class Settings:
    """Settings shared by the API client and the page scraper."""

    github_token: Optional[str] = None
    source_page_url: str = DEFAULT_SOURCE_PAGE_URL
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_web_url: str = DEFAULT_GITHUB_WEB_URL
    request_timeout: Optional[float] = None
    log_level: str = "INFO"

    @property
    def host_prefix(self) -> str:
        """Link prefix identifying repository URLs on the source page."""
        return self.github_web_url.rstrip("/") + "/"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Variables already present in the environment win over the .env file.

        Args:
            dotenv_path: Explicit .env file. If None, searches from the working directory.
        """
        if dotenv_path is None:
            dotenv_path = find_dotenv(usecwd=True)
        if not dotenv_path or not load_dotenv(dotenv_path):
            logger.warning("No .env file loaded. Using process environment only.")

        timeout = os.getenv("REQUEST_TIMEOUT")

        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or None,
            source_page_url=os.getenv("SOURCE_PAGE_URL", DEFAULT_SOURCE_PAGE_URL),
            github_api_url=os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL),
            github_web_url=os.getenv("GITHUB_WEB_URL", DEFAULT_GITHUB_WEB_URL),
            request_timeout=float(timeout) if timeout else None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
