"""Issue processing exceptions."""

from pathlib import Path


class ProcessingError(Exception):
    """Base exception for issue processing errors."""


class InvalidArgumentError(ProcessingError):
    """A processor argument is missing or blank."""


class TargetExistsError(ProcessingError):
    """The issue directory already exists in the target."""

    def __init__(self, issue_path: Path) -> None:
        """Initialize target exists error.

        Args:
            issue_path: Existing issue directory
        """
        super().__init__(f"Issue directory already exists: {issue_path} (use --overwrite to replace it)")
        self.issue_path = issue_path
