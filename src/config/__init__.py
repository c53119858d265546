"""Engine configuration loading and validation module."""

from src.config.loader import ConfigValidationError, EngineConfigLoader
from src.config.schemas.engine import (
    EngineConfig,
    QueueConfig,
    ScoringConfig,
    StatsConfig,
    TimeFitConfig,
)


__all__ = [
    "ConfigValidationError",
    "EngineConfig",
    "EngineConfigLoader",
    "QueueConfig",
    "ScoringConfig",
    "StatsConfig",
    "TimeFitConfig",
]
