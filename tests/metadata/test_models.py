"""Tests for metadata models."""

import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from newspaper_batch.metadata import IssueMetadata, PageMetadata


def create_metadata(**fields: object) -> IssueMetadata:
    """Helper to create issue metadata."""
    data: dict[str, object] = {"title": "The Fargo Forum", "date_issued": "1921-07-04"}
    data.update(fields)
    return IssueMetadata.model_validate(data)


class TestIssueMetadata:
    """Tests for IssueMetadata model."""

    def test_minimal(self) -> None:
        """Test metadata with only required fields."""
        metadata = create_metadata()

        assert metadata.date_issued == datetime.date(1921, 7, 4)
        assert metadata.edition == 1
        assert metadata.pages == []
        assert metadata.language is None

    def test_title_is_stripped(self) -> None:
        """Test surrounding whitespace is removed from the title."""
        assert create_metadata(title="  The Fargo Forum\n").title == "The Fargo Forum"

    def test_numeric_identifiers_become_strings(self) -> None:
        """Test numeric volume and issue numbers are accepted."""
        metadata = create_metadata(volume=41, issue_number=185)

        assert metadata.volume == "41"
        assert metadata.issue_number == "185"

    def test_blank_identifiers_become_none(self) -> None:
        """Test blank identifiers are dropped."""
        metadata = create_metadata(volume=" ", lccn="")

        assert metadata.volume is None
        assert metadata.lccn is None

    def test_extra_fields_ignored(self) -> None:
        """Test unknown keys do not fail validation."""
        metadata = create_metadata(publisher="Forum Publishing Co.")

        assert not hasattr(metadata, "publisher")

    @pytest.mark.parametrize(
        "fields",
        [
            {"title": ""},
            {"date_issued": "1921-13-01"},
            {"edition": 0},
            {"language": "en"},
            {"issue_directory": "../escape"},
            {"issue_directory": ".hidden"},
        ],
    )
    def test_invalid_values(self, fields: dict[str, object]) -> None:
        """Test invalid field values raise ValidationError."""
        with pytest.raises(ValidationError):
            create_metadata(**fields)

    def test_directory_name_from_date(self) -> None:
        """Test the issue directory defaults to the ISO date."""
        assert create_metadata().directory_name == "1921-07-04"

    def test_directory_name_with_edition(self) -> None:
        """Test later editions get a suffix."""
        assert create_metadata(edition=2).directory_name == "1921-07-04_ed02"

    def test_directory_name_override(self) -> None:
        """Test the explicit issue directory wins."""
        metadata = create_metadata(edition=3, issue_directory="forum-1921-07-04-extra")

        assert metadata.directory_name == "forum-1921-07-04-extra"


class TestPageMetadata:
    """Tests for PageMetadata model."""

    def test_sidecars(self) -> None:
        """Test sidecars lists only set files."""
        page = PageMetadata(image=Path("1.tif"), hocr=Path("1.hocr"))

        assert page.sidecars == [Path("1.hocr")]

    def test_no_sidecars(self) -> None:
        """Test page without sidecars."""
        assert PageMetadata(image=Path("1.tif")).sidecars == []
