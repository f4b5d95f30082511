"""Tests for configuration loading from files."""

from pathlib import Path

import pytest

from newspaper_batch.config import InvalidConfigurationError, NewspaperBatchConfig
from newspaper_batch.imaging import TiffCompression


class TestConfigLoading:
    """Tests for loading configuration from .env files."""

    def test_load_from_env_newspaperbatch(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading config from .env.newspaperbatch file."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env.newspaperbatch").write_text(
            """
NEWSPAPER_BATCH_OVERWRITE=true
NEWSPAPER_BATCH_TIFF_COMPRESSION=tiff_adobe_deflate
NEWSPAPER_BATCH_DEFAULT_LANGUAGE=ger
"""
        )

        config = NewspaperBatchConfig()

        assert config.overwrite is True
        assert config.tiff_compression == TiffCompression.DEFLATE
        assert config.default_language == "ger"

    def test_load_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading config from .env file."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env").write_text("NEWSPAPER_BATCH_PAGE_MODS=false\n")

        config = NewspaperBatchConfig()

        assert config.page_mods is False

    def test_newspaperbatch_file_takes_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that .env.newspaperbatch wins over .env."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env").write_text("NEWSPAPER_BATCH_DEFAULT_LANGUAGE=fre\n")
        (tmp_path / ".env.newspaperbatch").write_text("NEWSPAPER_BATCH_DEFAULT_LANGUAGE=nor\n")

        config = NewspaperBatchConfig()

        assert config.default_language == "nor"
        assert NewspaperBatchConfig.find_env_file() == (tmp_path / ".env.newspaperbatch").absolute()

    def test_env_values_fill_gaps(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test .env still supplies values .env.newspaperbatch does not set."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env").write_text("NEWSPAPER_BATCH_DEFAULT_LANGUAGE=fre\nNEWSPAPER_BATCH_PAGE_MODS=false\n")
        (tmp_path / ".env.newspaperbatch").write_text("NEWSPAPER_BATCH_DEFAULT_LANGUAGE=nor\n")

        config = NewspaperBatchConfig()

        assert config.default_language == "nor"
        assert config.page_mods is False

    def test_environment_variables_override_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override .env files."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env.newspaperbatch").write_text(
            """
NEWSPAPER_BATCH_OVERWRITE=false
NEWSPAPER_BATCH_RECOMPRESS_TIFF=true
"""
        )
        monkeypatch.setenv("NEWSPAPER_BATCH_OVERWRITE", "true")

        config = NewspaperBatchConfig()

        assert config.overwrite is True
        # This should still come from file
        assert config.recompress_tiff is True

    def test_image_suffixes_from_comma_separated_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test image suffixes are read from a comma-separated variable."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("NEWSPAPER_BATCH_IMAGE_SUFFIXES", "tif, .JP2")

        config = NewspaperBatchConfig()

        assert config.image_suffixes == [".tif", ".jp2"]

    def test_case_insensitive_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variable names are case insensitive."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("newspaper_batch_page_mods", "false")

        config = NewspaperBatchConfig()

        assert config.page_mods is False

    def test_custom_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading a custom env file instead of the defaults."""
        monkeypatch.chdir(tmp_path)

        (tmp_path / ".env").write_text("NEWSPAPER_BATCH_DEFAULT_LANGUAGE=fre\n")
        custom = tmp_path / "batch.env"
        custom.write_text("NEWSPAPER_BATCH_TIFF_COMPRESSION=packbits\n")

        config = NewspaperBatchConfig(env_file=str(custom))

        assert config.tiff_compression == TiffCompression.PACKBITS
        # Default .env is not read when a custom file is given
        assert config.default_language == "eng"

    def test_custom_env_file_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a missing custom env file raises."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(InvalidConfigurationError, match="Environment file not found"):
            NewspaperBatchConfig(env_file=str(tmp_path / "missing.env"))

    def test_no_env_file_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test find_env_file without any env file."""
        monkeypatch.chdir(tmp_path)

        assert NewspaperBatchConfig.find_env_file() is None
