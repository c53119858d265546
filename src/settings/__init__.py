"""Environment settings (READQ_* variables and .env)."""

from src.settings.app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
