"""Configuration models."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from newspaper_batch.config.exceptions import InvalidConfigurationError
from newspaper_batch.imaging.models import TiffCompression

# Lookup order: the first existing file is reported as the source
ENV_FILES = [".env.newspaperbatch", ".env"]
DEFAULT_IMAGE_SUFFIXES = [".tif", ".tiff", ".jpg", ".jpeg", ".png", ".jp2"]


class NewspaperBatchConfig(BaseSettings):
    """Configuration for newspaper-batch application."""

    # Output settings
    overwrite: bool = Field(
        default=False,
        description="Replace an existing issue directory in the target",
    )
    page_mods: bool = Field(
        default=True,
        description="Write a MODS.xml record for every page",
    )
    default_language: str = Field(
        default="eng",
        description="ISO 639-2/B language code used when the metadata has none",
    )

    # Image settings
    tiff_compression: TiffCompression = Field(
        default=TiffCompression.LZW,
        description="Compression used when encoding OBJ.tif",
    )
    recompress_tiff: bool = Field(
        default=False,
        description="Re-encode TIFF sources instead of copying them",
    )
    image_suffixes: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_SUFFIXES),
        description="File suffixes treated as page images during discovery",
    )
    max_image_pixels: int | None = Field(
        default=None,
        description="Pillow decompression bomb limit in pixels (None accepts any size)",
    )

    model_config = SettingsConfigDict(
        # Later files override earlier ones
        env_file=tuple(reversed(ENV_FILES)),
        env_file_encoding="utf-8",
        env_prefix="NEWSPAPER_BATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(
        self,
        _env_file: str | Path | None = None,
        _settings_customise_sources_was_called: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize configuration.

        Args:
            _env_file: Optional path to custom env file (use env_file for public API)
            _settings_customise_sources_was_called: Internal flag
            **kwargs: Additional configuration values

        Raises:
            InvalidConfigurationError: If env_file is specified but does not exist
        """
        env_file = kwargs.pop("env_file", _env_file)

        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise InvalidConfigurationError(f"Environment file not found: {env_file}")
            kwargs["_custom_env_file"] = env_path

        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use a custom env file in place of the default ones when given.

        Args:
            settings_cls: The settings class being instantiated
            init_settings: Settings from __init__ arguments
            env_settings: Settings from environment variables
            dotenv_settings: Settings from .env files
            file_secret_settings: Settings from secret files

        Returns:
            Tuple of settings sources in priority order
        """
        # init_kwargs exists at runtime but is not in the type stubs
        init_kwargs = init_settings.init_kwargs  # type: ignore[attr-defined]
        custom_env_path = init_kwargs.get("_custom_env_file")

        if custom_env_path is not None:
            custom_dotenv = DotEnvSettingsSource(
                settings_cls,
                env_file=custom_env_path,
                env_file_encoding="utf-8",
            )
            return (init_settings, custom_dotenv, env_settings, file_secret_settings)

        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @field_validator("tiff_compression", mode="before")
    @classmethod
    def parse_tiff_compression(cls, v: str | TiffCompression) -> TiffCompression:
        """Parse TIFF compression from string or enum.

        Args:
            v: Compression value (string or enum)

        Returns:
            Parsed TiffCompression

        Raises:
            InvalidConfigurationError: If the compression is not supported
        """
        if isinstance(v, TiffCompression):
            return v
        if isinstance(v, str):
            try:
                return TiffCompression(v.lower())
            except ValueError as e:
                valid = [c.value for c in TiffCompression]
                raise InvalidConfigurationError(f"Invalid TIFF compression: {v}. Valid options: {valid}") from e
        raise InvalidConfigurationError(f"Invalid TIFF compression type: {type(v)}")

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensure the default language is a three-letter code.

        Args:
            v: Language code

        Returns:
            Lower-cased language code

        Raises:
            InvalidConfigurationError: If the code is not three letters
        """
        code = v.strip().lower()
        if len(code) != 3 or not code.isalpha():
            raise InvalidConfigurationError(f"Invalid language code: {v!r} (expected ISO 639-2, e.g. 'eng')")
        return code

    @field_validator("image_suffixes", mode="before")
    @classmethod
    def parse_image_suffixes(cls, v: str | list[str]) -> list[str]:
        """Parse image suffixes from a comma-separated string or list.

        Suffixes are lower-cased and given a leading dot.

        Args:
            v: Suffix list or comma-separated string

        Returns:
            Normalized suffix list

        Raises:
            InvalidConfigurationError: If no suffix remains
        """
        items = v.split(",") if isinstance(v, str) else list(v)
        suffixes = []
        for item in items:
            suffix = item.strip().lower()
            if not suffix:
                continue
            if not suffix.startswith("."):
                suffix = f".{suffix}"
            suffixes.append(suffix)

        if not suffixes:
            raise InvalidConfigurationError("At least one image suffix is required")
        return suffixes

    @field_validator("max_image_pixels")
    @classmethod
    def validate_max_image_pixels(cls, v: int | None) -> int | None:
        """Ensure the pixel limit is positive when set.

        Raises:
            InvalidConfigurationError: If the limit is zero or negative
        """
        if v is not None and v < 1:
            raise InvalidConfigurationError(f"Invalid max image pixels: {v} (must be positive)")
        return v

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.newspaperbatch and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in ENV_FILES:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None
