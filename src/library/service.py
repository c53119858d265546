"""Reading library: the owning process of one reader's collection.

Every mutation goes through the store first. Only after the store accepts
it is the collection reloaded and every derived view recomputed from
scratch, so a failed write leaves the previous snapshot untouched.
"""

import threading
import uuid
from collections.abc import Callable, Generator, Iterable
from contextlib import contextmanager
from datetime import UTC, datetime, tzinfo
from urllib.parse import urlparse

import structlog

from src.analytics.models import ReadingStats
from src.config.schemas.engine import EngineConfig
from src.library.errors import InvalidArticleUrlError
from src.library.models import (
    ArchiveSuggestion,
    Article,
    ArticleStatus,
    Creator,
)
from src.library.state_machine import status_for_progress, transition
from src.metadata.client import MetadataFetcher
from src.metadata.models import ArticleMetadata, fallback_metadata, parse_note_url
from src.prioritizer.metrics import PrioritizerMetrics
from src.prioritizer.models import DerivedViews
from src.prioritizer.pipeline import derive_views
from src.store.errors import ArticleStoreError
from src.store.store import ArticleStore


logger = structlog.get_logger()

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_article_url(url: str) -> str:
    """Check that a URL is an absolute http(s) URL.

    Args:
        url: Candidate URL; surrounding whitespace is ignored.

    Returns:
        The stripped URL.

    Raises:
        InvalidArticleUrlError: If the scheme or host is missing or wrong.
    """
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.netloc:
        raise InvalidArticleUrlError(url)
    return candidate


class ReadingLibrary:
    """Single-writer owner of one reader's articles and derived views.

    The clock is sampled once per derivation pass and that instant is used
    for freshness, time-fit and statistics alike.
    """

    def __init__(
        self,
        store: ArticleStore,
        owner_id: str,
        fetcher: MetadataFetcher | None = None,
        config: EngineConfig | None = None,
        tz: tzinfo = UTC,
        clock: Callable[[], datetime] | None = None,
        metrics: PrioritizerMetrics | None = None,
    ) -> None:
        """Initialize the library and run the first derivation pass.

        Args:
            store: Connected article store.
            owner_id: Reader whose collection this library manages.
            fetcher: Metadata fetcher; URL-only metadata is used when None.
            config: Engine configuration.
            tz: Reader's timezone, used by the default clock.
            clock: Callable returning the current aware datetime.
            metrics: Optional prioritizer metrics instance.

        Raises:
            ArticleStoreError: If the initial load fails.
        """
        self._store = store
        self._owner_id = owner_id
        self._fetcher = fetcher
        self._config = config or EngineConfig()
        self._clock = clock or (lambda: datetime.now(tz))
        self._metrics = metrics
        self._lock = threading.Lock()
        self._log = logger.bind(component="library", owner_id=owner_id)

        self._views = self._reload()

    # ===== Derived views =====

    @property
    def owner_id(self) -> str:
        """Reader whose collection this library manages."""
        return self._owner_id

    @property
    def views(self) -> DerivedViews:
        """Views of the most recent successful derivation pass."""
        return self._views

    @property
    def articles(self) -> list[Article]:
        """Scored articles, newest saved first."""
        return list(self._views.articles)

    @property
    def queue(self) -> list[Article]:
        """Read-next queue."""
        return list(self._views.queue)

    @property
    def archive_suggestions(self) -> list[ArchiveSuggestion]:
        """Articles proposed for archival."""
        return list(self._views.archive_suggestions)

    @property
    def stats(self) -> ReadingStats:
        """Reading statistics snapshot."""
        return self._views.stats

    def get(self, article_id: str) -> Article:
        """Get one article as stored.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        return self._store.get_or_raise(article_id)

    # ===== Triggering events =====

    def refresh(self) -> DerivedViews:
        """Reload the collection and recompute every view.

        Returns:
            The new DerivedViews.
        """
        with self._operation("refresh"):
            return self._reload()

    def save(self, url: str) -> Article:
        """Fetch metadata for a URL and save it as an unread article.

        Args:
            url: Absolute http(s) article URL.

        Returns:
            The saved article.

        Raises:
            InvalidArticleUrlError: If the URL is not http(s).
            ArticleStoreError: If the store rejects the insert.
        """
        url = validate_article_url(url)
        # Fetch outside the lock; only insert + reload are serialized
        metadata = self._fetcher.fetch(url) if self._fetcher else fallback_metadata(url)

        with self._operation("save", url=url):
            now = self._clock()
            article = self._build_article(url, metadata, now)
            self._store.insert(article)
            self._reload(now)
            article = self._scored(article)

        self._log.info(
            "article_saved",
            article_id=article.id,
            creator_urlname=article.creator.urlname,
            reading_time_minutes=article.reading_time_minutes,
        )
        return article

    def mark_read(self, article_id: str) -> Article:
        """Mark an article finished.

        Raises:
            ArticleNotFoundError: If the article does not exist.
            StatusTransitionError: If the article is archived.
        """
        return self._move(article_id, ArticleStatus.READ, "mark_read")

    def mark_unread(self, article_id: str) -> Article:
        """Return an article to the unread state, clearing read_at.

        Raises:
            ArticleNotFoundError: If the article does not exist.
            StatusTransitionError: If the article is archived.
        """
        return self._move(article_id, ArticleStatus.UNREAD, "mark_unread")

    def update_progress(self, article_id: str, progress: float) -> Article:
        """Record reading progress; the status follows from it.

        Args:
            article_id: Article to update.
            progress: Progress in [0, 1].

        Returns:
            The updated article.

        Raises:
            ValueError: If progress is outside [0, 1].
            ArticleNotFoundError: If the article does not exist.
            StatusTransitionError: If the implied status change is illegal.
        """
        if not 0.0 <= progress <= 1.0:
            msg = f"progress must be within [0, 1], got {progress}"
            raise ValueError(msg)
        return self._move(
            article_id,
            status_for_progress(progress),
            "update_progress",
            progress=progress,
        )

    def update_memo(self, article_id: str, memo: str | None) -> Article:
        """Attach a memo to an article; blank memos are cleared.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        memo = memo.strip() if memo else None
        with self._operation("update_memo", article_id=article_id):
            now = self._clock()
            updated = self._store.update_fields(
                article_id, memo=memo or None, updated_at=now
            )
            self._reload(now)
        return self._scored(updated)

    def archive(self, article_ids: Iterable[str]) -> int:
        """Archive articles, e.g. accepted archive suggestions.

        Already archived articles are skipped.

        Args:
            article_ids: Articles to archive.

        Returns:
            Number of articles newly archived.

        Raises:
            ArticleNotFoundError: If any article does not exist. Nothing is
                archived in that case.
        """
        ids = list(dict.fromkeys(article_ids))
        with self._operation("archive", count=len(ids)):
            now = self._clock()
            pending = [
                article_id
                for article_id in ids
                if self._store.get_or_raise(article_id).status.is_active
            ]
            archived = self._store.update_status_many(
                pending, ArticleStatus.ARCHIVED, now
            )
            self._reload(now)
        return archived

    def delete(self, article_id: str) -> None:
        """Delete one article.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        with self._operation("delete", article_id=article_id):
            self._store.delete(article_id)
            self._reload()

    def delete_all(self) -> int:
        """Delete the whole collection of this owner.

        Returns:
            Number of articles deleted.
        """
        with self._operation("delete_all"):
            deleted = self._store.delete_all(self._owner_id)
            self._reload()
        return deleted

    # ===== Internals =====

    @contextmanager
    def _operation(self, name: str, **context: object) -> Generator[None]:
        """Serialize one mutation and log store failures.

        Store errors are logged and re-raised; the previous snapshot stays
        in place because it is only replaced by a completed reload.
        """
        with self._lock:
            try:
                yield
            except ArticleStoreError as e:
                self._log.error(
                    "library_operation_failed",
                    op=name,
                    error=str(e),
                    error_type=type(e).__name__,
                    **context,
                )
                raise

    def _move(
        self,
        article_id: str,
        target: ArticleStatus,
        operation: str,
        progress: float | None = None,
    ) -> Article:
        """Apply a status transition and persist it."""
        with self._operation(operation, article_id=article_id):
            now = self._clock()
            current = self._store.get_or_raise(article_id)
            moved = transition(current, target, now, progress=progress)
            updated = self._store.update_fields(
                article_id,
                status=moved.status,
                progress=moved.progress,
                read_at=moved.read_at,
                updated_at=moved.updated_at,
            )
            self._reload(now)
            updated = self._scored(updated)

        self._log.info(
            "article_status_changed",
            article_id=article_id,
            op=operation,
            from_status=current.status.value,
            to_status=updated.status.value,
            progress=updated.progress,
        )
        return updated

    def _reload(self, now: datetime | None = None) -> DerivedViews:
        """Reload from the store and run a full derivation pass.

        Must be called with the lock held.
        """
        articles = self._store.list_by_owner(self._owner_id)
        views = derive_views(
            articles,
            now or self._clock(),
            config=self._config,
            metrics=self._metrics,
        )
        self._views = views
        return views

    def _build_article(
        self, url: str, metadata: ArticleMetadata, now: datetime
    ) -> Article:
        """Assemble a new unread article from fetched metadata."""
        note_id = parse_note_url(url)[1] or f"n{int(now.timestamp() * 1000)}"
        return Article(
            id=uuid.uuid4().hex,
            owner_id=self._owner_id,
            url=url,
            note_id=note_id,
            title=metadata.title or url,
            excerpt=metadata.excerpt,
            cover_image_url=metadata.cover_image_url,
            creator=Creator(
                urlname=metadata.creator_urlname,
                nickname=metadata.creator_nickname,
                profile_image_url=metadata.creator_profile_image_url,
            ),
            hashtags=list(metadata.hashtags),
            is_paid=metadata.is_paid,
            like_count=metadata.like_count,
            word_count=metadata.word_count,
            reading_time_minutes=metadata.reading_time_minutes,
            status=ArticleStatus.UNREAD,
            progress=0.0,
            saved_at=now,
            updated_at=now,
        )

    def _scored(self, article: Article) -> Article:
        """Return the scored copy of an article from the current views."""
        for candidate in self._views.articles:
            if candidate.id == article.id:
                return candidate
        return article
