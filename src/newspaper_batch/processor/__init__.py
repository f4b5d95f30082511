"""Issue processing module."""

from newspaper_batch.processor.exceptions import InvalidArgumentError, ProcessingError, TargetExistsError
from newspaper_batch.processor.issue_processor import IssueProcessor
from newspaper_batch.processor.models import IssueLayout, PagePlan, PageResult, ProcessingResult

__all__ = [
    "InvalidArgumentError",
    "IssueLayout",
    "IssueProcessor",
    "PagePlan",
    "PageResult",
    "ProcessingError",
    "ProcessingResult",
    "TargetExistsError",
]
