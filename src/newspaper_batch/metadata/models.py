"""Models for issue metadata descriptors."""

import datetime
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class PageMetadata(BaseModel):
    """One page of an issue and its sidecar files."""

    model_config = {"extra": "ignore"}

    image: Path = Field(description="Page image (relative paths resolve against the metadata file)")
    ocr: Path | None = Field(default=None, description="Plain text OCR sidecar")
    hocr: Path | None = Field(default=None, description="hOCR sidecar")
    label: str | None = Field(default=None, description="Page label, e.g. '1' or 'Supplement 2'")

    @property
    def sidecars(self) -> list[Path]:
        """Get the sidecar files attached to this page.

        Returns:
            OCR and hOCR paths that are set
        """
        return [path for path in (self.ocr, self.hocr) if path is not None]


class IssueMetadata(BaseModel):
    """Descriptive metadata for a single newspaper issue."""

    model_config = {"extra": "ignore"}

    title: str = Field(description="Newspaper title")
    date_issued: datetime.date = Field(description="Publication date")
    lccn: str | None = Field(default=None, description="Library of Congress Control Number of the title")
    volume: str | None = Field(default=None, description="Volume number")
    issue_number: str | None = Field(default=None, description="Issue number within the volume")
    edition: int = Field(default=1, ge=1, description="Edition of the day, 1 for the first")
    language: str | None = Field(default=None, description="ISO 639-2/B language code")
    issue_directory: str | None = Field(default=None, description="Override for the issue directory name")
    page_directory: Path | None = Field(default=None, description="Directory to discover pages in")
    pages: list[PageMetadata] = Field(default_factory=list, description="Pages in reading order")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure the title is not blank."""
        title = v.strip()
        if not title:
            raise ValueError("title must not be blank")
        return title

    @field_validator("volume", "issue_number", "lccn", mode="before")
    @classmethod
    def coerce_identifier(cls, v: object) -> object:
        """Accept numeric identifiers and drop blank ones."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str | None) -> str | None:
        """Ensure the language is a three-letter code."""
        if v is None:
            return None
        code = v.strip().lower()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"language must be an ISO 639-2 code, got {v!r}")
        return code

    @field_validator("issue_directory")
    @classmethod
    def validate_issue_directory(cls, v: str | None) -> str | None:
        """Ensure the directory override is a single path component."""
        if v is None:
            return None
        name = v.strip()
        if not name or name in {".", ".."} or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"issue_directory must be a plain directory name, got {v!r}")
        return name

    @property
    def directory_name(self) -> str:
        """Get the name of the issue directory in the batch.

        Returns:
            The override when set, otherwise the ISO date with an edition suffix after the first edition
        """
        if self.issue_directory:
            return self.issue_directory
        name = self.date_issued.isoformat()
        if self.edition > 1:
            name = f"{name}_ed{self.edition:02d}"
        return name

    @property
    def page_count(self) -> int:
        """Get the number of pages.

        Returns:
            Number of pages listed or discovered
        """
        return len(self.pages)
