"""Issue metadata loading."""

from newspaper_batch.metadata.exceptions import (
    InvalidMetadataError,
    MetadataError,
    MetadataNotFoundError,
)
from newspaper_batch.metadata.loader import discover_pages, load_issue_metadata
from newspaper_batch.metadata.models import IssueMetadata, PageMetadata

__all__ = [
    "InvalidMetadataError",
    "IssueMetadata",
    "MetadataError",
    "MetadataNotFoundError",
    "PageMetadata",
    "discover_pages",
    "load_issue_metadata",
]
