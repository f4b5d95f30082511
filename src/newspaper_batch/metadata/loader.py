"""Load issue metadata descriptors and resolve their page files."""

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from newspaper_batch.config import NewspaperBatchConfig
from newspaper_batch.metadata.exceptions import InvalidMetadataError, MetadataNotFoundError
from newspaper_batch.metadata.models import IssueMetadata, PageMetadata

logger = logging.getLogger(__name__)

OCR_SIDECAR_SUFFIXES = (".txt",)
HOCR_SIDECAR_SUFFIXES = (".hocr", ".html")

_DIGITS = re.compile(r"(\d+)")


def natural_sort_key(name: str) -> list[int | str]:
    """Build a sort key that orders embedded numbers numerically.

    Args:
        name: File name

    Returns:
        Key where '2.tif' sorts before '10.tif'
    """
    return [int(part) if part.isdigit() else part.lower() for part in _DIGITS.split(name)]


def load_issue_metadata(path: Path, config: NewspaperBatchConfig) -> IssueMetadata:
    """Load an issue metadata file.

    Relative paths are resolved against the metadata file's directory. When
    the file lists no pages they are discovered in the page directory.

    Args:
        path: Metadata JSON file
        config: Application configuration

    Returns:
        Metadata with absolute page paths and a language set

    Raises:
        MetadataNotFoundError: If the file does not exist
        InvalidMetadataError: If the file is malformed or its pages are unusable
    """
    if not path.is_file():
        raise MetadataNotFoundError(f"Metadata file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidMetadataError(f"Cannot read metadata file {path}: {e}") from e

    try:
        metadata = IssueMetadata.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidMetadataError(f"Invalid metadata in {path}:\n{_format_errors(e)}") from e

    base_dir = path.parent.resolve()
    page_directory = _resolve(base_dir, metadata.page_directory) if metadata.page_directory else base_dir

    if metadata.pages:
        pages = [_resolve_page(base_dir, page) for page in metadata.pages]
    else:
        if not page_directory.is_dir():
            raise InvalidMetadataError(f"Page directory not found: {page_directory}")
        pages = discover_pages(page_directory, config.image_suffixes)
        logger.debug(f"Discovered {len(pages)} pages in {page_directory}")

    if not pages:
        raise InvalidMetadataError(f"No pages found for issue described in {path}")

    _check_files_exist(pages)

    return metadata.model_copy(
        update={
            "pages": pages,
            "page_directory": page_directory,
            "language": metadata.language or config.default_language,
        }
    )


def discover_pages(directory: Path, image_suffixes: list[str]) -> list[PageMetadata]:
    """Discover page images and their sidecars in a directory.

    Args:
        directory: Directory containing page images
        image_suffixes: Lower-case suffixes treated as images

    Returns:
        Pages in natural file name order
    """
    images = [
        entry
        for entry in directory.iterdir()
        if entry.is_file() and not entry.name.startswith(".") and entry.suffix.lower() in image_suffixes
    ]
    images.sort(key=lambda entry: natural_sort_key(entry.name))

    return [
        PageMetadata(
            image=image,
            ocr=_find_sidecar(image, OCR_SIDECAR_SUFFIXES),
            hocr=_find_sidecar(image, HOCR_SIDECAR_SUFFIXES),
        )
        for image in images
    ]


def _find_sidecar(image: Path, suffixes: tuple[str, ...]) -> Path | None:
    for suffix in suffixes:
        candidate = image.with_suffix(suffix)
        if candidate.is_file():
            return candidate
    return None


def _resolve(base_dir: Path, path: Path) -> Path:
    return path if path.is_absolute() else (base_dir / path).resolve()


def _resolve_page(base_dir: Path, page: PageMetadata) -> PageMetadata:
    return page.model_copy(
        update={
            "image": _resolve(base_dir, page.image),
            "ocr": _resolve(base_dir, page.ocr) if page.ocr else None,
            "hocr": _resolve(base_dir, page.hocr) if page.hocr else None,
        }
    )


def _check_files_exist(pages: list[PageMetadata]) -> None:
    missing = [str(path) for page in pages for path in (page.image, *page.sidecars) if not path.is_file()]
    if missing:
        raise InvalidMetadataError("Missing page files:\n" + "\n".join(f"  {path}" for path in missing))


def _format_errors(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        lines.append(f"  {location}: {item['msg']}")
    return "\n".join(lines)
