"""Metadata extraction from article HTML."""

import json
import re
from typing import Any
from urllib.parse import unquote, urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from src.analytics.dates import round_half_up
from src.metadata.constants import (
    DEFAULT_WORD_COUNT,
    MAX_HASHTAGS,
    MIN_READING_TIME_MINUTES,
    PAID_MARKERS,
    UNKNOWN_URLNAME,
    UNTITLED,
    WORDS_PER_EXCERPT_CHAR,
    WORDS_PER_MINUTE,
)
from src.metadata.models import ArticleMetadata, parse_note_url


logger = structlog.get_logger()

_HASHTAG_PATH_PATTERN = re.compile(r"/hashtag/([^/?#\s]+)")


def _meta_content(soup: BeautifulSoup, key: str) -> str | None:
    """Read a <meta> content by property or name attribute."""
    for attr in ("property", "name"):
        meta = soup.find("meta", attrs={attr: key})
        if isinstance(meta, Tag):
            content = meta.get("content")
            if isinstance(content, str) and content:
                return content
    return None


def _json_ld_author(soup: BeautifulSoup) -> dict[str, Any]:
    """Find the first JSON-LD author object on the page."""
    for script in soup.find_all("script", type="application/ld+json"):
        content = script.string
        if not content:
            continue
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            continue

        objects = data if isinstance(data, list) else [data]
        for obj in objects:
            if not isinstance(obj, dict):
                continue
            author = obj.get("author")
            if isinstance(author, list):
                author = author[0] if author else None
            if isinstance(author, dict):
                return author
    return {}


def _next_data_note(soup: BeautifulSoup) -> dict[str, Any]:
    """Find the note object embedded in the __NEXT_DATA__ script."""
    script = soup.find("script", id="__NEXT_DATA__")
    if not isinstance(script, Tag) or not script.string:
        return {}
    try:
        data = json.loads(script.string)
    except json.JSONDecodeError:
        return {}

    props = data.get("props") if isinstance(data, dict) else None
    page_props = props.get("pageProps") if isinstance(props, dict) else None
    if not isinstance(page_props, dict):
        return {}
    note = page_props.get("note") or page_props.get("noteBody")
    return note if isinstance(note, dict) else {}


def _author_image(author: dict[str, Any]) -> str | None:
    """JSON-LD image may be a URL string or an ImageObject."""
    image = author.get("image")
    if isinstance(image, dict):
        image = image.get("url")
    return image if isinstance(image, str) and image else None


def _hashtags(soup: BeautifulSoup) -> list[str]:
    """Collect unique hashtags from /hashtag/<tag> links, first-seen order."""
    tags: list[str] = []
    for link in soup.find_all("a", href=True):
        href = link["href"]
        if not isinstance(href, str):
            continue
        match = _HASHTAG_PATH_PATTERN.search(urlparse(href).path)
        if match is None:
            continue
        tag = unquote(match.group(1))
        if tag not in tags:
            tags.append(tag)
        if len(tags) >= MAX_HASHTAGS:
            break
    return tags


def estimate_word_count(excerpt: str | None) -> int:
    """Guess article length from its excerpt."""
    if excerpt:
        return len(excerpt) * WORDS_PER_EXCERPT_CHAR
    return DEFAULT_WORD_COUNT


def estimate_reading_time(word_count: int) -> int:
    """Convert a word count to whole reading minutes, at least one."""
    return max(MIN_READING_TIME_MINUTES, round_half_up(word_count / WORDS_PER_MINUTE))


def extract_metadata(html: str, url: str) -> ArticleMetadata:
    """Extract article metadata from a fetched page.

    Lookup order per field:
        title: og:title, then <title>, then "Untitled"
        creator nickname: JSON-LD author, __NEXT_DATA__ user,
            note:creator, twitter:creator, then the urlname
        creator urlname: URL path, __NEXT_DATA__ user, then "unknown"

    Args:
        html: Page HTML.
        url: URL the page was fetched from.

    Returns:
        Extracted ArticleMetadata.
    """
    soup = BeautifulSoup(html, "lxml")

    title = _meta_content(soup, "og:title")
    if not title and soup.title is not None and soup.title.string:
        title = soup.title.string.strip()
    excerpt = _meta_content(soup, "og:description") or _meta_content(
        soup, "description"
    )

    author = _json_ld_author(soup)
    note = _next_data_note(soup)
    user = note.get("user") if isinstance(note.get("user"), dict) else {}

    urlname = parse_note_url(url)[0] or user.get("urlname") or UNKNOWN_URLNAME
    nickname = (
        author.get("name")
        or user.get("nickname")
        or _meta_content(soup, "note:creator")
        or _meta_content(soup, "twitter:creator")
        or urlname
    )
    profile_image = _author_image(author) or user.get("userProfileImagePath")
    if not isinstance(profile_image, str):
        profile_image = None

    like_count = note.get("likeCount")
    if not isinstance(like_count, int) or like_count < 0:
        like_count = 0

    word_count = estimate_word_count(excerpt)

    metadata = ArticleMetadata(
        title=title or UNTITLED,
        excerpt=excerpt,
        cover_image_url=_meta_content(soup, "og:image"),
        creator_nickname=str(nickname),
        creator_urlname=str(urlname),
        creator_profile_image_url=profile_image,
        hashtags=_hashtags(soup),
        is_paid=any(marker in html for marker in PAID_MARKERS),
        like_count=like_count,
        word_count=word_count,
        reading_time_minutes=estimate_reading_time(word_count),
    )

    logger.debug(
        "metadata_extracted",
        component="metadata",
        subcomponent="extractor",
        url=url,
        creator_urlname=metadata.creator_urlname,
        hashtag_count=len(metadata.hashtags),
        is_paid=metadata.is_paid,
    )

    return metadata
