"""Data models for reading statistics."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.analytics.constants import DAYS_PER_WEEK, NO_DATA_NAME, NO_DATA_URLNAME


class HashtagCount(BaseModel):
    """Occurrences of one hashtag across active articles."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    count: Annotated[int, Field(ge=0)]

    @classmethod
    def no_data(cls) -> "HashtagCount":
        """Sentinel entry for an empty ranking."""
        return cls(name=NO_DATA_NAME, count=0)


class CreatorCount(BaseModel):
    """Saved-article count for one creator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    urlname: str
    count: Annotated[int, Field(ge=0)]

    @classmethod
    def no_data(cls) -> "CreatorCount":
        """Sentinel entry for an empty ranking."""
        return cls(name=NO_DATA_NAME, urlname=NO_DATA_URLNAME, count=0)


class ReadingStats(BaseModel):
    """Read-only statistics snapshot for one derivation pass.

    Attributes:
        total_read: Articles with status read.
        total_saved: Active articles, floored at 1 for safe division.
        unread_count: Active articles with status unread.
        top_hashtags: Most frequent hashtags (sentinel when empty).
        top_creators: Most saved creators (sentinel when empty).
        weekly_read: Reads in the last 7 days by weekday, Monday first.
        weekly_growth_percent: This week's reads vs. the previous week.
        streak: Current run of consecutive reading days.
        best_streak: Longest run of consecutive reading days.
        average_reading_time: Mean reading minutes of read articles.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_read: Annotated[int, Field(ge=0)] = 0
    total_saved: Annotated[int, Field(ge=1)] = 1
    unread_count: Annotated[int, Field(ge=0)] = 0
    top_hashtags: list[HashtagCount] = Field(
        default_factory=lambda: [HashtagCount.no_data()]
    )
    top_creators: list[CreatorCount] = Field(
        default_factory=lambda: [CreatorCount.no_data()]
    )
    weekly_read: list[int] = Field(
        default_factory=lambda: [0] * DAYS_PER_WEEK,
        min_length=DAYS_PER_WEEK,
        max_length=DAYS_PER_WEEK,
    )
    weekly_growth_percent: int = 0
    streak: Annotated[int, Field(ge=0)] = 0
    best_streak: Annotated[int, Field(ge=0)] = 0
    average_reading_time: Annotated[int, Field(ge=0)] = 0

    @property
    def read_ratio(self) -> float:
        """Share of active articles that have been read."""
        return self.total_read / self.total_saved
