"""SQLite article store implementation."""

import json
import sqlite3
import time
import uuid
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from src.library.models import Article, ArticleStatus, Creator
from src.store.errors import (
    ArticleNotFoundError,
    ArticleStoreError,
    StoreConnectionError,
)
from src.store.metrics import StoreMetrics, TransactionContext
from src.store.migrations import CURRENT_VERSION, MigrationManager


logger = structlog.get_logger()

# Columns that update_fields may touch. id, owner_id, url, note_id,
# creator and saved_at never change after insert.
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "excerpt",
        "cover_image_url",
        "hashtags",
        "is_paid",
        "like_count",
        "word_count",
        "reading_time_minutes",
        "status",
        "progress",
        "memo",
        "read_at",
        "updated_at",
    }
)


def _to_db_time(value: datetime | None) -> str | None:
    """Serialize a datetime as a sortable UTC ISO string."""
    if value is None:
        return None
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _from_db_time(value: str | None) -> datetime | None:
    """Parse a stored ISO string back into an aware datetime."""
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _to_column(name: str, value: Any) -> tuple[str, Any]:
    """Map an Article field and value to its column and stored value."""
    if name == "hashtags":
        return "hashtags_json", json.dumps(list(value), ensure_ascii=False)
    if name == "status":
        return "status", ArticleStatus(value).value
    if name == "is_paid":
        return "is_paid", int(bool(value))
    if isinstance(value, datetime) or (
        value is None and name in ("read_at", "updated_at")
    ):
        return name, _to_db_time(value)
    return name, value


class ArticleStore:
    """SQLite store for saved articles.

    Provides transactional APIs for the reading library. Uses WAL mode for
    reliability and supports schema migrations. Timestamps are stored as
    UTC ISO strings so ordering in SQL matches chronological order.
    """

    def __init__(self, db_path: Path | str, run_id: str | None = None) -> None:
        """Initialize the article store.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
            run_id: Optional run ID for logging context.
        """
        self._db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self._run_id = run_id or str(uuid.uuid4())
        self._conn: sqlite3.Connection | None = None
        self._metrics = StoreMetrics.get_instance()
        self._log = logger.bind(
            component="store",
            run_id=self._run_id,
            db_path=str(self._db_path),
        )

    @property
    def db_path(self) -> Path:
        """Get the database path."""
        return self._db_path

    @property
    def is_connected(self) -> bool:
        """Check if connected to database."""
        return self._conn is not None

    def connect(self) -> None:
        """Open connection to database and apply migrations.

        Creates the database file and parent directories if they don't exist.

        Raises:
            StoreConnectionError: If the database cannot be opened.
            MigrationError: If a schema migration fails.
        """
        if self._conn is not None:
            return

        in_memory = str(self._db_path) == ":memory:"
        if not in_memory:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)

        self._log.info("connecting_to_database")

        try:
            self._conn = sqlite3.connect(
                str(self._db_path), check_same_thread=False
            )
        except sqlite3.Error as e:
            self._log.error("database_connect_failed", error=str(e))
            raise StoreConnectionError(f"Cannot open {self._db_path}: {e}") from e

        self._conn.row_factory = sqlite3.Row
        if not in_memory:
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")

        migration_mgr = MigrationManager(self._conn)
        old_version = migration_mgr.get_current_version()
        applied = migration_mgr.apply_migrations()

        self._log.info(
            "database_connected",
            old_version=old_version,
            new_version=CURRENT_VERSION,
            migrations_applied=applied,
        )

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._log.info("database_closed")

    def __enter__(self) -> "ArticleStore":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()

    def _ensure_connected(self) -> sqlite3.Connection:
        """Ensure database is connected.

        Returns:
            The database connection.

        Raises:
            StoreConnectionError: If not connected.
        """
        if self._conn is None:
            raise StoreConnectionError("Database not connected. Call connect() first.")
        return self._conn

    @contextmanager
    def _transaction(self, operation: str) -> Generator[TransactionContext]:
        """Context manager for transactions with timing and logging.

        sqlite errors roll back and surface as ArticleStoreError; any other
        exception rolls back and propagates unchanged.

        Args:
            operation: Name of the operation for logging.

        Yields:
            Transaction context with timing information.
        """
        conn = self._ensure_connected()
        tx_id = str(uuid.uuid4())[:8]
        start_ns = time.perf_counter_ns()
        ctx = TransactionContext(
            tx_id=tx_id, start_time_ns=start_ns, operation=operation
        )

        self._log.debug(
            "transaction_started",
            tx_id=tx_id,
            op=operation,
        )

        try:
            yield ctx
            conn.commit()
        except Exception as e:
            conn.rollback()
            self._metrics.record_tx_failed()
            self._log.error(
                "transaction_failed",
                tx_id=tx_id,
                op=operation,
                error=str(e),
                duration_ms=round((time.perf_counter_ns() - start_ns) / 1_000_000, 2),
            )
            if isinstance(e, sqlite3.Error):
                raise ArticleStoreError(f"{operation} failed: {e}") from e
            raise

        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        self._metrics.record_tx_duration(duration_ms)
        self._log.info(
            "transaction_complete",
            tx_id=tx_id,
            op=operation,
            affected_rows=ctx.affected_rows,
            duration_ms=round(duration_ms, 2),
        )

    # ===== Writes =====

    def insert(self, article: Article) -> Article:
        """Insert a new article.

        Args:
            article: The article to persist. Derived scores are not stored.

        Returns:
            The article as given.

        Raises:
            ArticleStoreError: If the insert fails (e.g. duplicate id).
        """
        with self._transaction("insert") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute(
                """
                INSERT INTO articles (
                    id, owner_id, url, note_id, title, excerpt, cover_image_url,
                    creator_urlname, creator_nickname, creator_profile_image_url,
                    hashtags_json, is_paid, like_count, word_count,
                    reading_time_minutes, status, progress, memo,
                    saved_at, read_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    article.id,
                    article.owner_id,
                    article.url,
                    article.note_id,
                    article.title,
                    article.excerpt,
                    article.cover_image_url,
                    article.creator.urlname,
                    article.creator.nickname,
                    article.creator.profile_image_url,
                    json.dumps(article.hashtags, ensure_ascii=False),
                    int(article.is_paid),
                    article.like_count,
                    article.word_count,
                    article.reading_time_minutes,
                    article.status.value,
                    article.progress,
                    article.memo,
                    _to_db_time(article.saved_at),
                    _to_db_time(article.read_at),
                    _to_db_time(article.updated_at),
                ),
            )
            ctx.add_affected_rows(cursor.rowcount)

        self._metrics.record_inserted()
        return article

    def update_fields(self, article_id: str, **fields: Any) -> Article:
        """Update selected fields of one article.

        Args:
            article_id: The article to update.
            **fields: Article field names and their new values.

        Returns:
            The article as stored after the update.

        Raises:
            ValueError: If a field is unknown or immutable.
            ArticleNotFoundError: If the article does not exist.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            msg = f"Fields cannot be updated: {sorted(unknown)}"
            raise ValueError(msg)
        if not fields:
            return self.get_or_raise(article_id)

        columns = [_to_column(name, value) for name, value in fields.items()]
        assignments = ", ".join(f"{column} = ?" for column, _ in columns)
        params = [value for _, value in columns]

        with self._transaction("update_fields") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute(
                f"UPDATE articles SET {assignments} WHERE id = ?",  # noqa: S608
                (*params, article_id),
            )
            if cursor.rowcount == 0:
                raise ArticleNotFoundError(article_id)
            ctx.add_affected_rows(cursor.rowcount)

        self._metrics.record_updated(1)
        return self.get_or_raise(article_id)

    def update_status_many(
        self,
        article_ids: Iterable[str],
        status: ArticleStatus,
        updated_at: datetime,
    ) -> int:
        """Set the status of several articles in one transaction.

        Args:
            article_ids: Articles to update. Unknown ids are skipped.
            status: New status.
            updated_at: Modification timestamp.

        Returns:
            Number of rows changed.
        """
        ids = list(article_ids)
        if not ids:
            return 0

        with self._transaction("update_status_many") as ctx:
            conn = self._ensure_connected()
            cursor = conn.executemany(
                "UPDATE articles SET status = ?, updated_at = ? WHERE id = ?",
                [(status.value, _to_db_time(updated_at), i) for i in ids],
            )
            ctx.add_affected_rows(cursor.rowcount)

        self._metrics.record_updated(ctx.affected_rows)
        return ctx.affected_rows

    def delete(self, article_id: str) -> None:
        """Delete one article.

        Args:
            article_id: The article to delete.

        Raises:
            ArticleNotFoundError: If the article does not exist.
        """
        with self._transaction("delete") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
            if cursor.rowcount == 0:
                raise ArticleNotFoundError(article_id)
            ctx.add_affected_rows(cursor.rowcount)

        self._metrics.record_deleted(1)

    def delete_all(self, owner_id: str) -> int:
        """Delete every article of one owner.

        Args:
            owner_id: The owner whose collection is cleared.

        Returns:
            Number of articles deleted.
        """
        with self._transaction("delete_all") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute(
                "DELETE FROM articles WHERE owner_id = ?", (owner_id,)
            )
            ctx.add_affected_rows(cursor.rowcount)

        self._metrics.record_deleted(ctx.affected_rows)
        return ctx.affected_rows

    # ===== Reads =====

    def get(self, article_id: str) -> Article | None:
        """Get an article by id.

        Args:
            article_id: The article to look up.

        Returns:
            The Article, or None if not found.
        """
        conn = self._ensure_connected()
        row = conn.execute(
            "SELECT * FROM articles WHERE id = ?", (article_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_article(row)

    def get_or_raise(self, article_id: str) -> Article:
        """Get an article by id or raise ArticleNotFoundError."""
        article = self.get(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    def list_by_owner(self, owner_id: str) -> list[Article]:
        """List an owner's articles, newest saved first.

        Args:
            owner_id: The owner to filter by.

        Returns:
            Articles ordered by saved_at descending.
        """
        conn = self._ensure_connected()
        cursor = conn.execute(
            """
            SELECT * FROM articles
            WHERE owner_id = ?
            ORDER BY saved_at DESC, id
            """,
            (owner_id,),
        )
        return [self._row_to_article(row) for row in cursor.fetchall()]

    def _row_to_article(self, row: sqlite3.Row) -> Article:
        """Convert a database row to an Article."""
        return Article(
            id=row["id"],
            owner_id=row["owner_id"],
            url=row["url"],
            note_id=row["note_id"],
            title=row["title"],
            excerpt=row["excerpt"],
            cover_image_url=row["cover_image_url"],
            creator=Creator(
                urlname=row["creator_urlname"],
                nickname=row["creator_nickname"],
                profile_image_url=row["creator_profile_image_url"],
            ),
            hashtags=json.loads(row["hashtags_json"]),
            is_paid=bool(row["is_paid"]),
            like_count=row["like_count"],
            word_count=row["word_count"],
            reading_time_minutes=row["reading_time_minutes"],
            status=row["status"],
            progress=row["progress"],
            memo=row["memo"],
            saved_at=_from_db_time(row["saved_at"]),
            read_at=_from_db_time(row["read_at"]),
            updated_at=_from_db_time(row["updated_at"]),
        )

    # ===== Stats =====

    def get_stats(self) -> dict[str, int]:
        """Get article counts overall and per status.

        Returns:
            Dictionary with an "articles" total and one entry per status.
        """
        conn = self._ensure_connected()

        stats: dict[str, int] = {status.value: 0 for status in ArticleStatus}
        cursor = conn.execute(
            "SELECT status, COUNT(*) FROM articles GROUP BY status"
        )
        for status, count in cursor.fetchall():
            stats[status] = count
        stats["articles"] = sum(stats[status.value] for status in ArticleStatus)

        return stats

    def get_schema_version(self) -> int:
        """Get current schema version.

        Returns:
            Current schema version number.
        """
        conn = self._ensure_connected()
        return MigrationManager(conn).get_current_version()
