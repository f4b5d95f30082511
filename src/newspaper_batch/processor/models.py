"""Models for issue processing."""

from pathlib import Path

from pydantic import BaseModel, Field

OBJ_FILENAME = "OBJ.tif"
OCR_FILENAME = "OCR.txt"
HOCR_FILENAME = "HOCR.html"
MODS_FILENAME = "MODS.xml"


class PagePlan(BaseModel):
    """Where one source page goes in the batch."""

    sequence: int = Field(ge=1, description="1-based page number")
    image: Path = Field(description="Source page image")
    ocr: Path | None = Field(default=None, description="Source OCR sidecar")
    hocr: Path | None = Field(default=None, description="Source hOCR sidecar")
    label: str | None = Field(default=None, description="Page label")

    @property
    def directory_name(self) -> str:
        """Get the page directory name inside the issue directory.

        Returns:
            The sequence number, unpadded
        """
        return str(self.sequence)


class IssueLayout(BaseModel):
    """Planned batch layout for one issue."""

    target_path: Path = Field(description="Batch root")
    directory_name: str = Field(description="Issue directory name under the batch root")
    pages: list[PagePlan] = Field(default_factory=list)

    @property
    def issue_path(self) -> Path:
        """Get the final issue directory.

        Returns:
            Path of the issue directory in the batch
        """
        return self.target_path / self.directory_name

    @property
    def staging_path(self) -> Path:
        """Get the directory the issue is assembled in before it is moved into place.

        Returns:
            Hidden sibling of the issue directory
        """
        return self.target_path / f".{self.directory_name}.partial"


class PageResult(BaseModel):
    """Files written for one page."""

    sequence: int
    object_path: Path
    width: int
    height: int
    mode: str
    converted: bool = Field(description="True if the source was re-encoded")
    files: list[str] = Field(default_factory=list, description="File names written in the page directory")


class ProcessingResult(BaseModel):
    """Result of processing an issue."""

    issue_path: Path
    pages: list[PageResult] = Field(default_factory=list)
    planned_pages: int = 0
    dry_run: bool = False

    @property
    def page_count(self) -> int:
        """Get the number of pages written.

        Returns:
            Pages written, or pages planned in a dry run
        """
        return self.planned_pages if self.dry_run else len(self.pages)

    @property
    def converted_count(self) -> int:
        """Get the number of pages that were re-encoded.

        Returns:
            Number of converted pages
        """
        return sum(1 for page in self.pages if page.converted)
