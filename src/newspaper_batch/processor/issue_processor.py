"""Issue processor that writes a newspaper issue into the batch layout."""

import logging
import shutil
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from newspaper_batch.config import NewspaperBatchConfig
from newspaper_batch.imaging import write_page_object
from newspaper_batch.metadata import IssueMetadata, load_issue_metadata
from newspaper_batch.mods import build_issue_mods, build_page_mods, write_mods
from newspaper_batch.processor.exceptions import InvalidArgumentError, ProcessingError, TargetExistsError
from newspaper_batch.processor.models import (
    HOCR_FILENAME,
    MODS_FILENAME,
    OBJ_FILENAME,
    OCR_FILENAME,
    IssueLayout,
    PagePlan,
    PageResult,
    ProcessingResult,
)

logger = logging.getLogger(__name__)


class IssueProcessor:
    """Processes one newspaper issue into the Islandora newspaper batch format.

    Reads the issue metadata file, then writes the issue MODS record and one
    directory per page (archival TIFF, OCR sidecars, page MODS) under the
    target path. The issue is assembled in a staging directory and only moved
    to its final name once every page has been written.
    """

    def __init__(
        self,
        metadata_file_path: str | Path,
        target_path: str | Path,
        config: NewspaperBatchConfig | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the issue processor.

        Args:
            metadata_file_path: Issue metadata JSON file
            target_path: Batch root the issue is written under
            config: Application configuration (loaded from the environment if omitted)
            console: Console for progress output

        Raises:
            InvalidArgumentError: If either path is empty
        """
        if not str(metadata_file_path).strip():
            raise InvalidArgumentError("Metadata file path must not be empty")
        if not str(target_path).strip():
            raise InvalidArgumentError("Target path must not be empty")

        self.metadata_file_path = Path(metadata_file_path)
        self.target_path = Path(target_path)
        self.config = config if config is not None else NewspaperBatchConfig()
        self.console = console or Console()
        self._metadata: IssueMetadata | None = None

    def load_metadata(self) -> IssueMetadata:
        """Load the issue metadata, once.

        Returns:
            Issue metadata with resolved page paths
        """
        if self._metadata is None:
            self._metadata = load_issue_metadata(self.metadata_file_path, self.config)
            logger.debug(
                f"Loaded metadata for '{self._metadata.title}' {self._metadata.date_issued} "
                f"({self._metadata.page_count} pages)"
            )
        return self._metadata

    def plan(self) -> IssueLayout:
        """Plan the batch layout without writing anything.

        Returns:
            Issue directory and page plans in reading order
        """
        metadata = self.load_metadata()
        pages = [
            PagePlan(
                sequence=sequence,
                image=page.image,
                ocr=page.ocr,
                hocr=page.hocr,
                label=page.label,
            )
            for sequence, page in enumerate(metadata.pages, 1)
        ]
        return IssueLayout(
            target_path=self.target_path,
            directory_name=metadata.directory_name,
            pages=pages,
        )

    def process(self, dry_run: bool = False) -> ProcessingResult:
        """Write the issue into the batch.

        Processing steps:
        1. Load metadata and plan the layout
        2. Check the issue directory can be written
        3. Assemble issue MODS and every page in a staging directory
        4. Move the staging directory into place

        Args:
            dry_run: If True, only report the planned layout

        Returns:
            ProcessingResult describing the written issue

        Raises:
            MetadataError: If the metadata file is missing or invalid
            ImageConversionError: If a page image cannot be converted
            TargetExistsError: If the issue directory exists and overwrite is off
            ProcessingError: If the batch cannot be written
        """
        metadata = self.load_metadata()
        layout = self.plan()

        self.console.print(
            f"\n[yellow]Processing '{metadata.title}' {metadata.date_issued.isoformat()} "
            f"({len(layout.pages)} pages) -> {layout.issue_path}[/yellow]"
        )

        if dry_run:
            self._display_plan(layout)
            return ProcessingResult(
                issue_path=layout.issue_path,
                planned_pages=len(layout.pages),
                dry_run=True,
            )

        self._prepare_target(layout)

        staging = layout.staging_path
        if staging.exists():
            logger.warning(f"Removing leftover staging directory {staging}")
            shutil.rmtree(staging)
        staging.mkdir()

        try:
            write_mods(build_issue_mods(metadata), staging / MODS_FILENAME)
            pages = self._write_pages(metadata, layout)
            self._move_into_place(layout)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        result = ProcessingResult(
            issue_path=layout.issue_path,
            pages=pages,
            planned_pages=len(layout.pages),
        )
        self._display_summary(result)
        return result

    def _prepare_target(self, layout: IssueLayout) -> None:
        """Create the batch root and check the issue directory is free.

        Args:
            layout: Planned layout

        Raises:
            ProcessingError: If the batch root is not a directory
            TargetExistsError: If the issue directory is taken
        """
        if self.target_path.exists() and not self.target_path.is_dir():
            raise ProcessingError(f"Target path is not a directory: {self.target_path}")

        try:
            self.target_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProcessingError(f"Cannot create target directory {self.target_path}: {e}") from e

        issue_path = layout.issue_path
        if not issue_path.exists():
            return
        if not issue_path.is_dir():
            raise TargetExistsError(issue_path)
        if not any(issue_path.iterdir()):
            return
        if not self.config.overwrite:
            raise TargetExistsError(issue_path)
        logger.info(f"Replacing existing issue directory {issue_path}")

    def _write_pages(self, metadata: IssueMetadata, layout: IssueLayout) -> list[PageResult]:
        """Write every page into the staging directory.

        Args:
            metadata: Issue metadata
            layout: Planned layout

        Returns:
            Page results, with paths pointing at the final issue directory
        """
        results = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
        ) as progress:
            for plan in layout.pages:
                task = progress.add_task(
                    f"[cyan]Page {plan.sequence}/{len(layout.pages)}: {plan.image.name}",
                    total=None,
                )
                result = self._write_page(metadata, layout, plan)
                results.append(result)
                action = "converted" if result.converted else "copied"
                progress.update(
                    task,
                    description=f"[green]✓ Page {plan.sequence} {action} ({result.width}x{result.height})[/green]",
                )

        return results

    def _write_page(self, metadata: IssueMetadata, layout: IssueLayout, plan: PagePlan) -> PageResult:
        """Write one page directory.

        Args:
            metadata: Issue metadata
            layout: Planned layout
            plan: Page to write

        Returns:
            Result for the page
        """
        page_dir = layout.staging_path / plan.directory_name
        page_dir.mkdir()

        page_object = write_page_object(plan.image, page_dir / OBJ_FILENAME, self.config)
        files = [OBJ_FILENAME]

        if plan.ocr:
            shutil.copyfile(plan.ocr, page_dir / OCR_FILENAME)
            files.append(OCR_FILENAME)
        if plan.hocr:
            shutil.copyfile(plan.hocr, page_dir / HOCR_FILENAME)
            files.append(HOCR_FILENAME)
        if self.config.page_mods:
            write_mods(build_page_mods(metadata, plan.sequence, plan.label), page_dir / MODS_FILENAME)
            files.append(MODS_FILENAME)

        logger.debug(f"Wrote page {plan.sequence}: {', '.join(files)}")

        return PageResult(
            sequence=plan.sequence,
            object_path=layout.issue_path / plan.directory_name / OBJ_FILENAME,
            width=page_object.width,
            height=page_object.height,
            mode=page_object.mode,
            converted=page_object.converted,
            files=files,
        )

    def _move_into_place(self, layout: IssueLayout) -> None:
        """Rename the staging directory to the issue directory.

        An existing issue directory is set aside first and restored if the
        rename fails.

        Args:
            layout: Planned layout

        Raises:
            ProcessingError: If the rename fails
        """
        issue_path = layout.issue_path
        previous = layout.target_path / f".{layout.directory_name}.previous"

        if issue_path.exists():
            if previous.exists():
                shutil.rmtree(previous)
            issue_path.rename(previous)

        try:
            layout.staging_path.rename(issue_path)
        except OSError as e:
            if previous.exists():
                previous.rename(issue_path)
            raise ProcessingError(f"Cannot move issue into {issue_path}: {e}") from e

        if previous.exists():
            shutil.rmtree(previous)

    def _display_plan(self, layout: IssueLayout) -> None:
        """Display the planned layout.

        Args:
            layout: Planned layout
        """
        self.console.print(f"\n[bold]{layout.issue_path}/[/bold]")
        self.console.print(f"  {MODS_FILENAME}")
        for plan in layout.pages:
            sidecars = [name for name, path in ((OCR_FILENAME, plan.ocr), (HOCR_FILENAME, plan.hocr)) if path]
            extras = f" + {', '.join(sidecars)}" if sidecars else ""
            self.console.print(f"  {plan.directory_name}/{OBJ_FILENAME} <- {plan.image}{extras}")
        self.console.print("\n[yellow]Dry-run mode: nothing written[/yellow]")

    def _display_summary(self, result: ProcessingResult) -> None:
        """Display processing summary.

        Args:
            result: Processing result
        """
        self.console.print("\n[bold]Summary:[/bold]")
        self.console.print(f"  Issue directory: {result.issue_path}")
        self.console.print(f"  [green]Pages written: {result.page_count}[/green]")
        self.console.print(f"  Converted: {result.converted_count}")
        self.console.print(f"  Copied: {result.page_count - result.converted_count}")
