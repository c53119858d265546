"""Domain exceptions for the article store.

Infrastructure errors (database issues) and domain errors (missing
records) share the ArticleStoreError base so callers can handle every
store failure in one place.
"""


class ArticleStoreError(Exception):
    """Base exception for all article store errors."""


class StoreConnectionError(ArticleStoreError):
    """Raised when the database connection fails or is not established."""

    def __init__(self, message: str = "Database not connected") -> None:
        """Initialize the connection error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)


class ArticleNotFoundError(ArticleStoreError):
    """Raised when a requested article does not exist."""

    def __init__(self, article_id: str) -> None:
        """Initialize the error with the missing article ID.

        Args:
            article_id: The article ID that was not found.
        """
        self.article_id = article_id
        super().__init__(f"Article not found: {article_id}")


class MigrationError(ArticleStoreError):
    """Raised when a schema migration fails."""

    def __init__(self, version: int, message: str) -> None:
        """Initialize the migration error.

        Args:
            version: The migration version that failed.
            message: Human-readable error message.
        """
        self.version = version
        super().__init__(f"Migration {version} failed: {message}")
