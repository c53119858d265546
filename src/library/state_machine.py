"""State machine for article reading status."""

from datetime import datetime

import structlog

from src.library.models import Article, ArticleStatus


logger = structlog.get_logger()


# Valid status transitions. Same-state moves are handled separately.
_VALID_TRANSITIONS: dict[ArticleStatus, set[ArticleStatus]] = {
    ArticleStatus.UNREAD: {
        ArticleStatus.READING,
        ArticleStatus.READ,
        ArticleStatus.ARCHIVED,
    },
    ArticleStatus.READING: {
        ArticleStatus.UNREAD,
        ArticleStatus.READ,
        ArticleStatus.ARCHIVED,
    },
    ArticleStatus.READ: {ArticleStatus.UNREAD, ArticleStatus.ARCHIVED},
    ArticleStatus.ARCHIVED: set(),  # Terminal state
}


class StatusTransitionError(ValueError):
    """Raised when an illegal status transition is attempted."""

    def __init__(
        self,
        article_id: str,
        from_status: ArticleStatus,
        to_status: ArticleStatus,
    ) -> None:
        """Initialize the transition error.

        Args:
            article_id: Identifier of the article.
            from_status: Current status.
            to_status: Attempted target status.
        """
        self.article_id = article_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Illegal status transition for article '{article_id}': "
            f"{from_status.value} -> {to_status.value}"
        )


def can_transition(from_status: ArticleStatus, to_status: ArticleStatus) -> bool:
    """Check if a status transition is valid.

    Staying in the same active status is allowed (e.g. progress updates
    while reading). Nothing leaves ARCHIVED.

    Args:
        from_status: Current status.
        to_status: Target status.

    Returns:
        True if the transition is valid.
    """
    if from_status == to_status:
        return from_status.is_active
    return to_status in _VALID_TRANSITIONS.get(from_status, set())


def status_for_progress(progress: float) -> ArticleStatus:
    """Map reading progress to the status it implies.

    Args:
        progress: Reading progress in [0, 1].

    Returns:
        READ when finished, READING when started, UNREAD otherwise.
    """
    if progress >= 1.0:
        return ArticleStatus.READ
    if progress > 0.0:
        return ArticleStatus.READING
    return ArticleStatus.UNREAD


def transition(
    article: Article,
    target: ArticleStatus,
    now: datetime,
    progress: float | None = None,
) -> Article:
    """Return a copy of the article moved to the target status.

    read_at is set when entering READ and cleared when returning to UNREAD.
    Re-entering READ from READ keeps the original read_at.

    Args:
        article: Article to transition.
        target: Target status.
        now: Timestamp for read_at/updated_at.
        progress: Optional explicit progress; derived from target otherwise.

    Returns:
        New Article with updated status fields.

    Raises:
        StatusTransitionError: If the transition is invalid.
    """
    if not can_transition(article.status, target):
        logger.warning(
            "illegal_status_transition",
            component="library",
            article_id=article.id,
            from_status=article.status.value,
            to_status=target.value,
        )
        raise StatusTransitionError(article.id, article.status, target)

    update: dict[str, object] = {"status": target, "updated_at": now}

    if target == ArticleStatus.READ:
        update["progress"] = 1.0
        if article.status != ArticleStatus.READ or article.read_at is None:
            update["read_at"] = now
    elif target == ArticleStatus.UNREAD:
        update["progress"] = 0.0
        update["read_at"] = None

    if progress is not None and target != ArticleStatus.ARCHIVED:
        update["progress"] = progress

    return article.model_copy(update=update)
