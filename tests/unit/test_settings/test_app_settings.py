"""Tests for environment settings."""

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from src.settings.app import AppSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run without READQ_* variables or a .env file."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "READQ_DB_PATH",
        "READQ_OWNER_ID",
        "READQ_TIMEZONE",
        "READQ_ENGINE_CONFIG",
        "READQ_FETCH_TIMEOUT_SECONDS",
        "READQ_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self) -> None:
        """Test defaults without environment."""
        settings = get_settings()

        assert settings.db_path == Path("data/readq.sqlite")
        assert settings.owner_id == "local"
        assert settings.tzinfo == ZoneInfo("UTC")
        assert settings.engine_config is None

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test READQ_* variables override defaults."""
        monkeypatch.setenv("READQ_TIMEZONE", "Asia/Tokyo")
        monkeypatch.setenv("READQ_ENGINE_CONFIG", "config/engine.yaml")
        monkeypatch.setenv("READQ_FETCH_TIMEOUT_SECONDS", "2.5")

        settings = AppSettings()

        assert settings.tzinfo == ZoneInfo("Asia/Tokyo")
        assert settings.engine_config == Path("config/engine.yaml")
        assert settings.fetch_timeout_seconds == 2.5

    def test_dotenv_file(self, tmp_path: Path) -> None:
        """Test values are read from .env in the working directory."""
        (tmp_path / ".env").write_text("READQ_OWNER_ID=reader-7\n")

        assert AppSettings().owner_id == "reader-7"

    def test_unknown_timezone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unknown timezone names are rejected."""
        monkeypatch.setenv("READQ_TIMEZONE", "Mars/Olympus")

        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppSettings()
