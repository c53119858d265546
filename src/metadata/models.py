"""Data models for fetched article metadata."""

import re
from typing import Annotated
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field

from src.metadata.constants import UNKNOWN_URLNAME


# /<creator urlname>/n/<note id>
_NOTE_PATH_PATTERN = re.compile(r"^/([^/]+)/n/([^/?#]+)")


class ArticleMetadata(BaseModel):
    """Metadata scraped from an article page."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Annotated[str, Field(min_length=1)]
    excerpt: str | None = None
    cover_image_url: str | None = None
    creator_nickname: Annotated[str, Field(min_length=1)]
    creator_urlname: Annotated[str, Field(min_length=1)]
    creator_profile_image_url: str | None = None
    hashtags: list[str] = Field(default_factory=list)
    is_paid: bool = False
    like_count: Annotated[int, Field(ge=0)] = 0
    word_count: Annotated[int, Field(ge=0)] = 0
    reading_time_minutes: Annotated[int, Field(ge=0)] = 0


def parse_note_url(url: str) -> tuple[str | None, str | None]:
    """Split an article URL into creator urlname and note id.

    Args:
        url: Article URL.

    Returns:
        Tuple of (urlname, note_id); both None when the path does not
        have the /<urlname>/n/<note_id> shape.
    """
    match = _NOTE_PATH_PATTERN.match(urlparse(url).path)
    if match is None:
        return None, None
    return match.group(1), match.group(2)


def fallback_metadata(url: str) -> ArticleMetadata:
    """Metadata used when the page cannot be fetched or parsed."""
    urlname = parse_note_url(url)[0] or UNKNOWN_URLNAME
    return ArticleMetadata(
        title=url,
        creator_nickname=urlname,
        creator_urlname=urlname,
    )
