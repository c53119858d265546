"""Configuration schema definitions."""

from src.config.schemas.engine import (
    EngineConfig,
    QueueConfig,
    ScoringConfig,
    StatsConfig,
    TimeFitConfig,
)


__all__ = [
    "EngineConfig",
    "QueueConfig",
    "ScoringConfig",
    "StatsConfig",
    "TimeFitConfig",
]
