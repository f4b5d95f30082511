"""Metadata-related exceptions."""


class MetadataError(Exception):
    """Base exception for issue metadata errors."""


class MetadataNotFoundError(MetadataError):
    """Metadata file does not exist."""


class InvalidMetadataError(MetadataError):
    """Metadata file could not be parsed or describes an unusable issue."""
