"""Engine configuration loader with validation."""

import hashlib
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from src.config.schemas.engine import EngineConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class EngineConfigLoader:
    """Loads and validates engine.yaml.

    A missing path yields the default configuration. Validation failures
    are collected in ``validation_errors`` and raised as
    ConfigValidationError.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current invocation.
        """
        self._run_id = run_id
        self._checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0
        self._log = logger.bind(component="config", run_id=run_id)

    @property
    def checksum(self) -> str | None:
        """Get SHA-256 checksum of the loaded file."""
        return self._checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def load(self, config_path: Path | None) -> EngineConfig:
        """Load and validate the engine configuration.

        Args:
            config_path: Path to engine.yaml, or None for defaults.

        Returns:
            Validated EngineConfig.

        Raises:
            ConfigValidationError: If the file is missing, unparsable or
                invalid.
        """
        if config_path is None:
            self._log.info("config_defaults_used")
            return EngineConfig()

        start_time = time.perf_counter()
        self._validation_errors = []
        self._log.info("loading_config_file", file_path=str(config_path))

        try:
            content_bytes = config_path.read_bytes()
            self._checksum = hashlib.sha256(content_bytes).hexdigest()
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            config = EngineConfig.model_validate(data)
        except FileNotFoundError as e:
            self._record_error("file", str(e), "file_not_found")
            raise ConfigValidationError(self.validation_errors, str(config_path)) from e
        except yaml.YAMLError as e:
            self._record_error("yaml", str(e), "yaml_parse_error")
            raise ConfigValidationError(self.validation_errors, str(config_path)) from e
        except ValidationError as e:
            for err in e.errors():
                self._record_error(
                    ".".join(str(loc) for loc in err["loc"]) or "root",
                    err["msg"],
                    err["type"],
                )
            raise ConfigValidationError(self.validation_errors, str(config_path)) from e

        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
        self._log.info(
            "config_validation_complete",
            file_path=str(config_path),
            file_sha256=self._checksum,
            config_validation_duration_ms=self._validation_duration_ms,
        )
        return config

    def _record_error(self, location: str, message: str, error_type: str) -> None:
        """Record one validation error and log it."""
        self._validation_errors.append(
            {"loc": location, "msg": message, "type": error_type}
        )
        self._log.error(
            "config_validation_failed",
            loc=location,
            error=message,
            error_type=error_type,
        )
