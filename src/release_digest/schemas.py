"""Pydantic models for the release records the digest is built from.

Release data arrives loosely shaped: GitHub's REST payload uses snake_case
keys (``tag_name``, ``html_url``), the fixtures of older tooling use
camelCase (``tagName``, ``htmlUrl``), and entries can be null or missing
the fields a digest line needs. Every entry goes through a single
validation pass here; the formatter only ever sees ``ReleaseRecord``s.

Key decisions:
- ``tag_name`` and ``html_url`` are required, non-blank strings
- ``name`` and ``created_at`` are optional and degrade to None instead of
  rejecting an otherwise usable record
- Rejections are values (``RecordRejection``), not exceptions
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


# ---------------------------------------------------------------------------
# Release record
# ---------------------------------------------------------------------------


class ReleaseRecord(BaseModel):
    """A single published release of a tracked project.

    Attributes:
        tag_name: Git tag of the release (e.g., "v1.0.0")
        name: Human-readable release title, None when not set
        html_url: Absolute URL of the release page
        created_at: When the release was created, None when unknown
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    tag_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("tag_name", "tagName"),
        description="Tag the release points at",
    )
    name: str | None = Field(None, description="Display name of the release")
    html_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("html_url", "htmlUrl"),
        description="Release page URL",
    )
    created_at: datetime | None = Field(
        None,
        validation_alias=AliasChoices(
            "created_at", "createdAt", "published_at", "publishedAt"
        ),
        description="Creation time of the release",
    )

    @field_validator("name", "created_at", mode="wrap")
    @classmethod
    def _optional_or_none(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        """Unusable optional values are dropped rather than failing the record."""
        try:
            result = handler(value)
        except ValidationError:
            return None
        if isinstance(result, str) and not result:
            return None
        return result

    @property
    def display_text(self) -> str:
        """Link text for the digest line: "{name} {tag_name}" or the bare tag."""
        if self.name:
            return f"{self.name} {self.tag_name}"
        return self.tag_name


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RecordRejection:
    """An input entry that could not be turned into a ReleaseRecord.

    Attributes:
        index: Position of the entry in the input sequence
        reason: Why it was rejected
    """

    index: int
    reason: str


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "record"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


def _validate(raw: Any) -> ReleaseRecord | str:
    if raw is None:
        return "record is null"
    try:
        return ReleaseRecord.model_validate(raw)
    except ValidationError as exc:
        return _describe(exc)


def parse_release(raw: Any) -> ReleaseRecord | None:
    """Validate one raw entry.

    Returns:
        The ReleaseRecord, or None if the entry is null or malformed
    """
    result = _validate(raw)
    return result if isinstance(result, ReleaseRecord) else None


def partition_releases(
    raw: Any,
) -> tuple[list[ReleaseRecord], list[RecordRejection]]:
    """Split a raw release set into valid records and rejections.

    Input order is preserved on both sides. Anything that is not a sequence
    of entries (None, a mapping, a string, a scalar) yields no records and
    no rejections.

    Args:
        raw: The release set as handed over by the caller

    Returns:
        (accepted records, rejections)
    """
    if raw is None or isinstance(raw, (str, bytes, Mapping)):
        return [], []
    if not isinstance(raw, Iterable):
        return [], []

    accepted: list[ReleaseRecord] = []
    rejected: list[RecordRejection] = []
    for index, entry in enumerate(raw):
        result = _validate(entry)
        if isinstance(result, ReleaseRecord):
            accepted.append(result)
        else:
            rejected.append(RecordRejection(index=index, reason=result))
    return accepted, rejected


def parse_releases(raw: Any) -> list[ReleaseRecord]:
    """Return only the valid records of a raw release set, in input order."""
    accepted, _ = partition_releases(raw)
    return accepted
