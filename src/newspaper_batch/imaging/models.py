"""Models for page image conversion."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class TiffCompression(str, Enum):
    """Supported TIFF compression schemes for page objects."""

    NONE = "raw"
    LZW = "tiff_lzw"
    DEFLATE = "tiff_adobe_deflate"
    PACKBITS = "packbits"
    GROUP4 = "group4"

    @property
    def pillow_name(self) -> str:
        """Get the compression name understood by Pillow's TIFF writer.

        Returns:
            Pillow compression name
        """
        return self.value

    @property
    def requires_bilevel(self) -> bool:
        """Check if the scheme only accepts 1-bit images.

        Returns:
            True for CCITT Group 4
        """
        return self is TiffCompression.GROUP4


class PageObject(BaseModel):
    """Archival page object written for one page."""

    path: Path = Field(description="Path of the written OBJ.tif")
    width: int = Field(description="Image width in pixels")
    height: int = Field(description="Image height in pixels")
    mode: str = Field(description="Pillow image mode of the written object")
    converted: bool = Field(description="True if re-encoded, False if copied from a TIFF source")

    @property
    def size(self) -> tuple[int, int]:
        """Get the image size.

        Returns:
            (width, height) in pixels
        """
        return (self.width, self.height)
