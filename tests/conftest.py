"""Shared fixtures for newspaper-batch tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from newspaper_batch.config import NewspaperBatchConfig

ImageFactory = Callable[..., Path]
MetadataWriter = Callable[..., Path]


@pytest.fixture
def make_image() -> ImageFactory:
    """Create page images on disk.

    Returns:
        Factory taking a path, size, mode and optional Pillow format
    """

    def _make(path: Path, size: tuple[int, int] = (60, 80), mode: str = "L", fmt: str | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        color: Any = 128 if mode in {"L", "1"} else (200, 100, 50, 255)[: len(mode)]
        Image.new(mode, size, color).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def write_metadata() -> MetadataWriter:
    """Write issue metadata JSON files.

    Returns:
        Factory taking a directory and metadata fields
    """

    def _write(directory: Path, name: str = "metadata.json", **fields: Any) -> Path:
        data: dict[str, Any] = {"title": "The Bismarck Tribune", "date_issued": "1900-01-15"}
        data.update(fields)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def issue_source(tmp_path: Path, make_image: ImageFactory, write_metadata: MetadataWriter) -> Path:
    """Create an issue source directory with discovered pages.

    Pages are 1.tif (with OCR), 2.jpg (with hOCR) and 10.png.

    Returns:
        Path to the metadata file
    """
    source = tmp_path / "source"
    make_image(source / "1.tif", size=(60, 80), mode="L")
    make_image(source / "2.jpg", size=(70, 90), mode="RGB")
    make_image(source / "10.png", size=(50, 40), mode="RGBA")
    (source / "1.txt").write_text("EXTRA! EXTRA!", encoding="utf-8")
    (source / "2.hocr").write_text("<html><body class='ocr_page'></body></html>", encoding="utf-8")

    return write_metadata(
        source,
        lccn="sn85042243",
        volume=12,
        issue_number="3",
        language="eng",
    )


@pytest.fixture
def config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> NewspaperBatchConfig:
    """Create a configuration isolated from .env files in the working directory.

    Returns:
        Default configuration
    """
    monkeypatch.chdir(tmp_path)
    return NewspaperBatchConfig()
