"""Data models for saved articles."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class ArticleStatus(str, Enum):
    """Reading status of a saved article.

    - UNREAD: Saved, not started
    - READING: Partially read (progress between 0 and 1)
    - READ: Finished; read_at is set
    - ARCHIVED: Removed from active views (terminal)
    """

    UNREAD = "unread"
    READING = "reading"
    READ = "read"
    ARCHIVED = "archived"

    @property
    def is_active(self) -> bool:
        """Check if the status counts as an active item."""
        return self != ArticleStatus.ARCHIVED


class ArchiveReason(str, Enum):
    """Why an article is proposed for archival."""

    UNREAD_30_DAYS = "unread_30_days"
    LOW_FRESHNESS = "low_freshness"


class Creator(BaseModel):
    """Author of a saved article.

    The urlname is the stable aggregation key; nickname is for display.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    urlname: Annotated[str, Field(min_length=1, description="Stable creator key")]
    nickname: Annotated[str, Field(min_length=1, description="Display name")]
    profile_image_url: str | None = None


class Article(BaseModel):
    """A bookmarked article owned by exactly one reader.

    freshness_score and priority are derived values. They are recomputed on
    every derivation pass and never used as a ranking source of truth.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[str, Field(min_length=1, description="Opaque unique key")]
    owner_id: Annotated[str, Field(min_length=1, description="Owning reader")]
    url: Annotated[str, Field(min_length=1, description="Source URL")]
    note_id: Annotated[str, Field(min_length=1, description="Source-side id")]
    title: Annotated[str, Field(min_length=1)]
    excerpt: str | None = None
    cover_image_url: str | None = None
    creator: Creator
    hashtags: list[str] = Field(default_factory=list)
    is_paid: bool = False
    like_count: Annotated[int, Field(ge=0)] = 0
    word_count: Annotated[int, Field(ge=0)] = 0
    reading_time_minutes: Annotated[int, Field(ge=0)] = 0
    status: ArticleStatus = ArticleStatus.UNREAD
    progress: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0
    memo: str | None = None
    saved_at: AwareDatetime
    read_at: AwareDatetime | None = None
    updated_at: AwareDatetime = Field(default_factory=lambda: datetime.now(UTC))
    freshness_score: Annotated[float, Field(ge=0.0, le=1.0)] = 1.0
    priority: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> ArticleStatus:
        """Coerce string to ArticleStatus enum."""
        if isinstance(v, ArticleStatus):
            return v
        if isinstance(v, str):
            return ArticleStatus(v.lower())
        msg = f"Invalid status: {v}"
        raise ValueError(msg)

    @property
    def expiry_score(self) -> float:
        """Staleness view of the freshness decay, used for UI warnings."""
        return self.freshness_score

    @property
    def is_active(self) -> bool:
        """Check if the article is not archived."""
        return self.status.is_active


class ArchiveSuggestion(BaseModel):
    """An article proposed (not automatically moved) for archival."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    article: Article
    archive_reason: ArchiveReason
