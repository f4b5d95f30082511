"""Page image to archival TIFF conversion."""

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from newspaper_batch.imaging.exceptions import ImageConversionError
from newspaper_batch.imaging.models import PageObject, TiffCompression

if TYPE_CHECKING:
    from newspaper_batch.config import NewspaperBatchConfig

logger = logging.getLogger(__name__)

TIFF_SUFFIXES = {".tif", ".tiff"}
TIFF_SAFE_MODES = {"1", "L", "RGB"}
GRAYSCALE_MODES = {"LA", "I", "I;16", "I;16B", "I;16L", "F"}
SIXTEEN_BIT_MAX = 65535


def is_tiff(path: Path) -> bool:
    """Check if a file is a TIFF by its suffix.

    Args:
        path: File path

    Returns:
        True for .tif and .tiff files
    """
    return path.suffix.lower() in TIFF_SUFFIXES


def write_page_object(source: Path, destination: Path, config: "NewspaperBatchConfig") -> PageObject:
    """Write the archival page object for one page.

    TIFF sources are copied unchanged unless recompression is configured;
    everything else is decoded and re-encoded as TIFF.

    Args:
        source: Source page image
        destination: Path of the OBJ.tif to write
        config: Application configuration

    Returns:
        Description of the written object

    Raises:
        ImageConversionError: If the source cannot be read or the object cannot be written
    """
    with pixel_limit(config.max_image_pixels):
        if is_tiff(source) and not config.recompress_tiff:
            return _copy_tiff(source, destination)
        return _convert_to_tiff(source, destination, config.tiff_compression)


@contextmanager
def pixel_limit(max_pixels: int | None) -> Iterator[None]:
    """Apply Pillow's decompression bomb limit while pages are read.

    Args:
        max_pixels: Largest accepted image, or None to accept any size
    """
    previous = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = max_pixels
    try:
        yield
    finally:
        Image.MAX_IMAGE_PIXELS = previous


def _copy_tiff(source: Path, destination: Path) -> PageObject:
    """Copy a TIFF source after checking that Pillow can identify it.

    Args:
        source: Source TIFF
        destination: Destination path

    Returns:
        Description of the copied object
    """
    try:
        with Image.open(source) as img:
            if img.format != "TIFF":
                raise ImageConversionError(f"{source} is not a TIFF image (found {img.format})", source=source)
            width, height = img.size
            mode = img.mode
    except (OSError, Image.DecompressionBombError) as e:
        raise ImageConversionError(f"Cannot read page image {source}: {e}", source=source) from e

    try:
        shutil.copy2(source, destination)
    except OSError as e:
        raise ImageConversionError(f"Cannot copy {source} to {destination}: {e}", source=source) from e

    logger.debug(f"Copied {source} -> {destination} ({width}x{height}, {mode})")
    return PageObject(path=destination, width=width, height=height, mode=mode, converted=False)


def _convert_to_tiff(source: Path, destination: Path, compression: TiffCompression) -> PageObject:
    """Decode a page image and encode it as TIFF.

    Args:
        source: Source image in any format Pillow reads
        destination: Destination path
        compression: TIFF compression scheme

    Returns:
        Description of the written object
    """
    try:
        with Image.open(source) as img:
            img.load()
            dpi = img.info.get("dpi")
            image = _normalize_mode(img, compression)
    except (OSError, Image.DecompressionBombError) as e:
        raise ImageConversionError(f"Cannot read page image {source}: {e}", source=source) from e

    save_kwargs: dict[str, object] = {"compression": compression.pillow_name}
    if dpi:
        save_kwargs["dpi"] = dpi

    try:
        image.save(destination, format="TIFF", **save_kwargs)
    except (OSError, ValueError) as e:
        raise ImageConversionError(f"Cannot write {destination}: {e}", source=source) from e

    logger.debug(
        f"Converted {source} -> {destination} ({image.width}x{image.height}, {image.mode}, {compression.value})"
    )
    return PageObject(
        path=destination,
        width=image.width,
        height=image.height,
        mode=image.mode,
        converted=True,
    )


def _normalize_mode(img: Image.Image, compression: TiffCompression) -> Image.Image:
    """Convert an image to a mode the TIFF writer accepts for the compression.

    Args:
        img: Decoded image
        compression: Target compression

    Returns:
        Image in mode 1, L or RGB
    """
    if compression.requires_bilevel:
        if img.mode == "1":
            return img.copy()
        grayscale = _to_grayscale(img) if img.mode in GRAYSCALE_MODES else img.convert("L")
        return grayscale.convert("1")
    if img.mode in TIFF_SAFE_MODES:
        return img.copy()
    if img.mode in GRAYSCALE_MODES:
        return _to_grayscale(img)
    return img.convert("RGB")


def _to_grayscale(img: Image.Image) -> Image.Image:
    """Narrow a wide grayscale image to 8-bit L by rescaling its values.

    Integer images within the 16-bit range are divided down to 8 bits. Float
    images and integers outside that range are stretched over their extrema.

    Args:
        img: Image in mode LA, I, I;16* or F

    Returns:
        Image in mode L
    """
    if img.mode == "LA":
        return img.convert("L")
    if img.mode.startswith("I;16"):
        img = img.convert("I")

    low, high = img.getextrema()
    if img.mode == "I" and low >= 0 and high <= SIXTEEN_BIT_MAX:
        scale, offset = 1 / 256, 0.0
    elif high > low:
        scale = 255 / (high - low)
        offset = -low * scale
    else:
        # Flat image: keep its value where it fits in 8 bits
        scale, offset = 0.0, float(min(max(low, 0), 255))
    return img.point(lambda v: v * scale + offset).convert("L")
