"""Markdown table output for collected repository records."""

import sys
from typing import Iterable, Optional, TextIO

from repo_stats.domain.repository import RepositoryRecord

COLUMNS = [
    "Repository",
    "Latest Commit",
    "Total Commits",
    "Stars",
    "Forks",
    "Watchers",
    "Used by",
    "Contributors",
    "Pull Requests",
]


def _row(cells: Iterable[object]) -> str:
    return "| " + " | ".join(str(cell) for cell in cells) + " |"


def format_record(record: RepositoryRecord) -> str:
    latest = record.latest_commit_date.isoformat() if record.latest_commit_date else ""
    return _row([
        f"[{record.full_name}]({record.url})",
        latest,
        record.total_commits,
        record.stars,
        record.forks,
        record.watchers,
        record.used_by,
        record.contributors,
        record.pull_requests,
    ])


def render_markdown_table(records: Iterable[RepositoryRecord]) -> str:
    """Header, separator, then one row per record in the given order."""
    lines = [
        _row(COLUMNS),
        "|" + "|".join("-" * (len(column) + 2) for column in COLUMNS) + "|",
    ]
    lines.extend(format_record(record) for record in records)
    return "\n".join(lines) + "\n"


def print_markdown_table(records: Iterable[RepositoryRecord], stream: Optional[TextIO] = None) -> None:
    (stream or sys.stdout).write(render_markdown_table(records))
