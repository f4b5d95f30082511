"""Page image handling."""

from newspaper_batch.imaging.converter import is_tiff, write_page_object
from newspaper_batch.imaging.exceptions import ImageConversionError
from newspaper_batch.imaging.models import PageObject, TiffCompression

__all__ = [
    "ImageConversionError",
    "PageObject",
    "TiffCompression",
    "is_tiff",
    "write_page_object",
]
