"""Saved articles and their reading status lifecycle."""

from src.library.models import (
    ArchiveReason,
    ArchiveSuggestion,
    Article,
    ArticleStatus,
    Creator,
)
from src.library.state_machine import (
    StatusTransitionError,
    can_transition,
    status_for_progress,
    transition,
)


__all__ = [
    "ArchiveReason",
    "ArchiveSuggestion",
    "Article",
    "ArticleStatus",
    "Creator",
    "StatusTransitionError",
    "can_transition",
    "status_for_progress",
    "transition",
]
