"""Markdown rendering of the weekly RELEASES section.

The output is assembled line by line and joined with "\\n":

    # RELEASES

    Last week there were 2 releases.
    :rocket: [Release v1.0.0 v1.0.0](https://github.com/org/repo/releases/tag/v1.0.0)
    :rocket: [v0.1.1](https://github.com/org/repo/releases/tag/v0.1.1)

Releases are listed in the order they were passed in. Filtering by the
reporting window is the caller's job (see ``release_digest.window``); the
head and tail dates are accepted for context only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from release_digest.schemas import ReleaseRecord, parse_releases

HEADING = "# RELEASES"
NO_RELEASES = "Last week there were no releases."


def summary_line(count: int) -> str:
    """Sentence announcing how many releases the digest lists."""
    if count <= 0:
        return NO_RELEASES
    if count == 1:
        return "Last week there was 1 release."
    return f"Last week there were {count} releases."


def release_line(record: ReleaseRecord) -> str:
    return f":rocket: [{record.display_text}]({record.html_url})"


def markdown_releases(
    releases: Any,
    head_date: datetime | str | None = None,
    tail_date: datetime | str | None = None,
) -> str:
    """Render the RELEASES section for one reporting window.

    Null, empty, and malformed input never raises; it renders the
    "no releases" sentence instead.

    Args:
        releases: Sequence of release entries (mappings, objects or
                  ReleaseRecords), possibly None or containing junk
        head_date: End of the reporting window
        tail_date: Start of the reporting window

    Returns:
        The Markdown section, without a trailing newline
    """
    records = parse_releases(releases)

    lines = [HEADING, "", summary_line(len(records))]
    lines.extend(release_line(record) for record in records)
    return "\n".join(lines)
