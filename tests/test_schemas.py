"""Tests for release record parsing.

Run with: pytest tests/test_schemas.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from release_digest.schemas import (
    RecordRejection,
    ReleaseRecord,
    parse_release,
    parse_releases,
    partition_releases,
)

URL = "https://github.com/myorg/api/releases/tag/v1.2.0"


@pytest.fixture
def github_release() -> dict:
    """A release as the GitHub REST API returns it (trimmed)."""
    return {
        "id": 1,
        "tag_name": "v1.2.0",
        "name": "Spring release",
        "html_url": URL,
        "created_at": "2024-03-01T12:00:00Z",
        "published_at": "2024-03-02T08:30:00Z",
        "author": {"login": "dev1"},
        "assets": [],
    }


# ---------------------------------------------------------------------------
# ReleaseRecord
# ---------------------------------------------------------------------------


class TestReleaseRecord:
    def test_github_payload(self, github_release: dict) -> None:
        record = ReleaseRecord.model_validate(github_release)
        assert record.tag_name == "v1.2.0"
        assert record.name == "Spring release"
        assert record.html_url == URL
        assert record.created_at == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)

    def test_camel_case_payload(self) -> None:
        record = ReleaseRecord.model_validate(
            {"tagName": "v1.2.0", "htmlUrl": URL, "createdAt": "2024-03-01T12:00:00Z"}
        )
        assert record.tag_name == "v1.2.0"
        assert record.name is None
        assert record.created_at is not None

    def test_published_at_fallback(self) -> None:
        record = ReleaseRecord.model_validate(
            {"tag_name": "v1.2.0", "html_url": URL, "published_at": "2024-03-02T08:30:00Z"}
        )
        assert record.created_at == datetime(2024, 3, 2, 8, 30, tzinfo=timezone.utc)

    def test_from_attributes(self) -> None:
        @dataclass
        class ApiRelease:
            tag_name: str
            html_url: str
            name: str | None = None

        record = ReleaseRecord.model_validate(ApiRelease(tag_name="v1.2.0", html_url=URL))
        assert record.tag_name == "v1.2.0"

    def test_whitespace_stripped(self) -> None:
        record = ReleaseRecord(tag_name="  v1.2.0 ", name=" Spring ", html_url=URL)
        assert record.tag_name == "v1.2.0"
        assert record.name == "Spring"

    def test_blank_name_becomes_none(self) -> None:
        assert ReleaseRecord(tag_name="v1", name="   ", html_url=URL).name is None

    def test_unusable_optional_fields_become_none(self) -> None:
        record = ReleaseRecord.model_validate(
            {"tag_name": "v1.2.0", "html_url": URL, "name": 42, "created_at": "last tuesday"}
        )
        assert record.name is None
        assert record.created_at is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"html_url": URL},
            {"tag_name": "v1.2.0"},
            {"tag_name": "", "html_url": URL},
            {"tag_name": "v1.2.0", "html_url": "  "},
            {"tag_name": 120, "html_url": URL},
        ],
    )
    def test_required_fields(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            ReleaseRecord.model_validate(payload)

    def test_display_text(self) -> None:
        named = ReleaseRecord(tag_name="v1.2.0", name="Spring release", html_url=URL)
        unnamed = ReleaseRecord(tag_name="v1.2.0", html_url=URL)
        assert named.display_text == "Spring release v1.2.0"
        assert unnamed.display_text == "v1.2.0"

    def test_frozen(self) -> None:
        record = ReleaseRecord(tag_name="v1.2.0", html_url=URL)
        with pytest.raises(ValidationError):
            record.tag_name = "v2"


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


class TestParsing:
    def test_parse_release_valid(self, github_release: dict) -> None:
        record = parse_release(github_release)
        assert isinstance(record, ReleaseRecord)

    @pytest.mark.parametrize("raw", [None, {}, 3, "v1.2.0", [], {"tag_name": "v1"}])
    def test_parse_release_rejects(self, raw) -> None:
        assert parse_release(raw) is None

    def test_partition_keeps_order_and_indexes(self, github_release: dict) -> None:
        second = {**github_release, "tag_name": "v1.3.0"}
        accepted, rejected = partition_releases(
            [None, github_release, {"name": "x"}, second]
        )

        assert [r.tag_name for r in accepted] == ["v1.2.0", "v1.3.0"]
        assert [r.index for r in rejected] == [0, 2]
        assert rejected[0] == RecordRejection(index=0, reason="record is null")
        assert rejected[1].reason

    @pytest.mark.parametrize("raw", [None, {"tag_name": "v1"}, "abc", b"abc", 5])
    def test_partition_non_sequence(self, raw) -> None:
        assert partition_releases(raw) == ([], [])

    def test_partition_accepts_generators(self, github_release: dict) -> None:
        accepted, rejected = partition_releases(r for r in [github_release, None])
        assert len(accepted) == 1
        assert len(rejected) == 1

    def test_parse_releases(self, github_release: dict) -> None:
        assert len(parse_releases([github_release, None, github_release])) == 2
        assert parse_releases(None) == []
