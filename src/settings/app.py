"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Every value can be overridden with a READQ_* variable or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="READQ_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Path = Field(default=Path("data/readq.sqlite"))
    owner_id: str = Field(default="local", min_length=1)
    timezone: str = Field(default="UTC")
    engine_config: Path | None = Field(default=None)
    fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = Field(
        default="readq/0.1 (+https://github.com/readq/readq)", min_length=1
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject names the tz database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            msg = f"Unknown timezone: {v}"
            raise ValueError(msg) from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Reader's timezone used for day and hour arithmetic."""
        return ZoneInfo(self.timezone)


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
