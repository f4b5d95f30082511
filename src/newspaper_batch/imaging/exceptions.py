"""Image conversion exceptions."""

from pathlib import Path


class ImageConversionError(Exception):
    """A page image could not be read or written."""

    def __init__(self, message: str, source: Path | None = None) -> None:
        """Initialize conversion error.

        Args:
            message: Error message
            source: Page image that failed, if known
        """
        super().__init__(message)
        self.source = source
