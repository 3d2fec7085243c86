"""Reporting window for the weekly digest.

A digest covers ``[tail_date, head_date]``, both ends inclusive, normally
the seven days up to the time the report runs. Narrowing a release set to
the window happens here, before the set is handed to the formatter.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from release_digest.schemas import ReleaseRecord, parse_releases

DEFAULT_LOOKBACK_DAYS = 7


def as_utc(instant: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


class DigestWindow(BaseModel):
    """The period a digest reports on.

    Attributes:
        head_date: Inclusive upper bound ("now")
        tail_date: Inclusive lower bound
    """

    model_config = ConfigDict(frozen=True)

    head_date: datetime
    tail_date: datetime

    @field_validator("head_date", "tail_date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def check_order(self) -> DigestWindow:
        if self.tail_date > self.head_date:
            raise ValueError(
                f"tail_date {self.tail_date.isoformat()} is after "
                f"head_date {self.head_date.isoformat()}"
            )
        return self

    @classmethod
    def ending_at(
        cls, head: datetime, days: int = DEFAULT_LOOKBACK_DAYS
    ) -> DigestWindow:
        """Window covering the ``days`` days up to and including ``head``."""
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}")
        head = as_utc(head)
        return cls(head_date=head, tail_date=head - timedelta(days=days))

    def contains(self, instant: datetime) -> bool:
        return self.tail_date <= as_utc(instant) <= self.head_date


def filter_releases(
    releases: Iterable[Any] | None, window: DigestWindow
) -> list[ReleaseRecord]:
    """Keep the valid releases created inside ``window``.

    Malformed entries and releases without a creation time are dropped.
    Input order is preserved.
    """
    return [
        record
        for record in parse_releases(releases)
        if record.created_at is not None and window.contains(record.created_at)
    ]
