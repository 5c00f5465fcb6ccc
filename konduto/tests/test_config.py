"""Tests for settings loading and the composition root."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from konduto.client import Konduto
from konduto.config import KondutoSettings, load_settings
from konduto.core.exceptions import InvalidAPIKey
from konduto.main import configure_logging, create_client

API_KEY = "Tabcdefghijklmnopqrst"


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = KondutoSettings(_env_file=None)  # type: ignore[call-arg]
        assert settings.api_key == ""
        assert settings.api_version == "v1"
        assert settings.api_base_url == "https://api.konduto.com"
        assert settings.timeout_seconds == 30.0
        assert settings.log_level == "INFO"

    def test_load_settings_from_env(self) -> None:
        """Load settings from environment variables."""
        with patch.dict(
            os.environ,
            {
                "KONDUTO_API_KEY": API_KEY,
                "KONDUTO_TIMEOUT_SECONDS": "5",
                "KONDUTO_API_BASE_URL": "http://localhost:9000/",
                "KONDUTO_LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
        assert settings.api_key == API_KEY
        assert settings.timeout_seconds == 5.0
        assert settings.api_base_url == "http://localhost:9000"
        assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        """Settings can be read from an explicit .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text(f"KONDUTO_API_KEY={API_KEY}\n")
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(str(env_file))
        assert settings.api_key == API_KEY

    def test_validates_timeout(self) -> None:
        """Timeout validation rejects zero or negative values."""
        with patch.dict(os.environ, {"KONDUTO_TIMEOUT_SECONDS": "0"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_validates_version(self) -> None:
        with patch.dict(os.environ, {"KONDUTO_API_VERSION": "v3"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_validates_base_url(self) -> None:
        with patch.dict(os.environ, {"KONDUTO_API_BASE_URL": "api.konduto.com"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestCompositionRoot:
    """Tests for configure_logging and create_client."""

    def test_configure_logging_text(self) -> None:
        configure_logging("DEBUG", "text")
        logger = logging.getLogger("konduto")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_configure_logging_json(self) -> None:
        configure_logging("WARNING", "json")
        logger = logging.getLogger("konduto")
        assert logger.level == logging.WARNING
        assert logger.handlers[0].formatter is not None
        assert logger.handlers[0].formatter._fmt.startswith('{"time"')  # type: ignore[union-attr]

    def test_create_client_from_settings(self) -> None:
        settings = KondutoSettings(api_key=API_KEY, timeout_seconds=3.0, _env_file=None)  # type: ignore[call-arg]
        client = create_client(settings)
        assert isinstance(client, Konduto)
        assert client.api.endpoint == "https://api.konduto.com/v1"  # type: ignore[attr-defined]
        assert client.api.timeout_seconds == 3.0  # type: ignore[attr-defined]

    def test_create_client_from_env(self) -> None:
        with patch.dict(os.environ, {"KONDUTO_API_KEY": API_KEY}):
            client = create_client()
        assert client.api.credentials.api_key == API_KEY  # type: ignore[attr-defined]

    def test_create_client_without_key(self) -> None:
        settings = KondutoSettings(api_key="", _env_file=None)  # type: ignore[call-arg]
        with pytest.raises(InvalidAPIKey):
            create_client(settings)
