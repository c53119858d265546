"""Errors raised by the reading library."""

from src.library.state_machine import StatusTransitionError
from src.store.errors import ArticleNotFoundError


class LibraryError(Exception):
    """Base exception for reading library errors."""


class InvalidArticleUrlError(LibraryError, ValueError):
    """Raised when a URL to save is not an absolute http(s) URL."""

    def __init__(self, url: str) -> None:
        """Initialize the error.

        Args:
            url: The rejected URL.
        """
        self.url = url
        super().__init__(f"Not an http(s) article URL: {url!r}")


__all__ = [
    "ArticleNotFoundError",
    "InvalidArticleUrlError",
    "LibraryError",
    "StatusTransitionError",
]
