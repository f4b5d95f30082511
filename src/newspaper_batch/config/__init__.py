"""Configuration management for newspaper-batch."""

from newspaper_batch.config.exceptions import ConfigurationError, InvalidConfigurationError
from newspaper_batch.config.models import NewspaperBatchConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "NewspaperBatchConfig",
]
