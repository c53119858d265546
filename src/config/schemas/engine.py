"""Engine configuration schema."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoringConfig(BaseModel):
    """Priority and freshness weights.

    Attributes:
        freshness_decay_days: Age in days at which freshness reaches 0.
        unread_weight: Contribution of UNREAD status.
        reading_weight: Contribution of READING status.
        freshness_weight: Multiplier applied to freshness.
        time_fit_bonus: Bonus when the article fits the current slot.
        popularity_bonus: Bonus for popular articles.
        popularity_like_threshold: Like count that must be exceeded.
        priority_cap: Upper bound of the summed priority.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    freshness_decay_days: Annotated[float, Field(gt=0.0, le=3650.0)] = 60.0
    unread_weight: Annotated[float, Field(ge=0.0, le=1.0)] = 0.4
    reading_weight: Annotated[float, Field(ge=0.0, le=1.0)] = 0.3
    freshness_weight: Annotated[float, Field(ge=0.0, le=1.0)] = 0.3
    time_fit_bonus: Annotated[float, Field(ge=0.0, le=1.0)] = 0.2
    popularity_bonus: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1
    popularity_like_threshold: Annotated[int, Field(ge=0)] = 100
    priority_cap: Annotated[float, Field(gt=0.0, le=1.0)] = 1.0


class TimeFitConfig(BaseModel):
    """Reading-slot policy.

    Windows are [start_hour, end_hour) in local time.

    Attributes:
        morning_window: Commute window.
        morning_max_minutes: Longest read that fits the commute window.
        lunch_window: Lunch window.
        lunch_max_minutes: Longest read that fits the lunch window.
        evening_start_hour: From this hour on everything fits.
        default_max_minutes: Longest read that fits any other hour.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    morning_window: tuple[int, int] = (6, 9)
    morning_max_minutes: Annotated[int, Field(ge=0)] = 10
    lunch_window: tuple[int, int] = (12, 14)
    lunch_max_minutes: Annotated[int, Field(ge=0)] = 15
    evening_start_hour: Annotated[int, Field(ge=0, le=24)] = 20
    default_max_minutes: Annotated[int, Field(ge=0)] = 10

    @model_validator(mode="after")
    def validate_windows(self) -> "TimeFitConfig":
        """Ensure windows are ordered hour ranges within a day."""
        for name, (start, end) in (
            ("morning_window", self.morning_window),
            ("lunch_window", self.lunch_window),
        ):
            if not 0 <= start < end <= 24:  # noqa: PLR2004
                msg = f"{name} must satisfy 0 <= start < end <= 24"
                raise ValueError(msg)
        return self


class QueueConfig(BaseModel):
    """Queue and archive derivation limits.

    Attributes:
        queue_size: Maximum entries in the read-next queue.
        archive_freshness_threshold: Unread items below this are suggested.
        low_freshness_threshold: Suggestions below this are tagged low_freshness.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    queue_size: Annotated[int, Field(ge=0)] = 3
    archive_freshness_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = 0.3
    low_freshness_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = 0.15

    @model_validator(mode="after")
    def validate_thresholds(self) -> "QueueConfig":
        """Ensure the low-freshness tag threshold sits inside the archive band."""
        if self.low_freshness_threshold > self.archive_freshness_threshold:
            msg = "low_freshness_threshold must not exceed archive_freshness_threshold"
            raise ValueError(msg)
        return self


class StatsConfig(BaseModel):
    """Statistics aggregation limits.

    Attributes:
        top_n: Entries kept in top hashtag/creator lists.
        streak_horizon_days: Days walked back when computing the current streak.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    top_n: Annotated[int, Field(ge=1, le=100)] = 5
    streak_horizon_days: Annotated[int, Field(ge=1)] = 365


class EngineConfig(BaseModel):
    """Root configuration for engine.yaml.

    Attributes:
        version: Schema version.
        scoring: Priority and freshness weights.
        time_fit: Reading-slot policy.
        queue: Queue and archive derivation limits.
        stats: Statistics aggregation limits.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    time_fit: TimeFitConfig = Field(default_factory=TimeFitConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
