"""SQLite article store.

This module provides persistent storage for saved articles with
transactional writes, schema migrations and per-owner listing.
"""

from src.store.errors import (
    ArticleNotFoundError,
    ArticleStoreError,
    MigrationError,
    StoreConnectionError,
)
from src.store.metrics import StoreMetrics
from src.store.store import ArticleStore


__all__ = [
    # Errors
    "ArticleNotFoundError",
    "ArticleStoreError",
    "MigrationError",
    "StoreConnectionError",
    # Metrics
    "StoreMetrics",
    # Store
    "ArticleStore",
]
