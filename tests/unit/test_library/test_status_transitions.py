"""Tests for the article status state machine."""

import pytest

from src.library.models import ArticleStatus
from src.library.state_machine import (
    StatusTransitionError,
    can_transition,
    status_for_progress,
    transition,
)
from tests.helpers.articles import make_article
from tests.helpers.time import FIXED_NOW, days_ago


class TestCanTransition:
    """Tests for can_transition."""

    @pytest.mark.parametrize(
        ("from_status", "to_status"),
        [
            (ArticleStatus.UNREAD, ArticleStatus.READING),
            (ArticleStatus.UNREAD, ArticleStatus.READ),
            (ArticleStatus.UNREAD, ArticleStatus.ARCHIVED),
            (ArticleStatus.READING, ArticleStatus.READ),
            (ArticleStatus.READING, ArticleStatus.UNREAD),
            (ArticleStatus.READING, ArticleStatus.ARCHIVED),
            (ArticleStatus.READ, ArticleStatus.UNREAD),
            (ArticleStatus.READ, ArticleStatus.ARCHIVED),
            (ArticleStatus.READING, ArticleStatus.READING),
            (ArticleStatus.READ, ArticleStatus.READ),
        ],
    )
    def test_valid(self, from_status: ArticleStatus, to_status: ArticleStatus) -> None:
        """Test allowed transitions."""
        assert can_transition(from_status, to_status)

    @pytest.mark.parametrize(
        ("from_status", "to_status"),
        [
            (ArticleStatus.READ, ArticleStatus.READING),
            (ArticleStatus.ARCHIVED, ArticleStatus.UNREAD),
            (ArticleStatus.ARCHIVED, ArticleStatus.READ),
            (ArticleStatus.ARCHIVED, ArticleStatus.ARCHIVED),
        ],
    )
    def test_invalid(
        self, from_status: ArticleStatus, to_status: ArticleStatus
    ) -> None:
        """Test forbidden transitions; archived is terminal."""
        assert not can_transition(from_status, to_status)


class TestStatusForProgress:
    """Tests for status_for_progress."""

    @pytest.mark.parametrize(
        ("progress", "status"),
        [
            (0.0, ArticleStatus.UNREAD),
            (0.01, ArticleStatus.READING),
            (0.99, ArticleStatus.READING),
            (1.0, ArticleStatus.READ),
        ],
    )
    def test_mapping(self, progress: float, status: ArticleStatus) -> None:
        """Test progress thresholds."""
        assert status_for_progress(progress) == status


class TestTransition:
    """Tests for transition."""

    def test_read_sets_read_at_and_progress(self) -> None:
        """Test entering READ stamps read_at and completes progress."""
        moved = transition(make_article(), ArticleStatus.READ, FIXED_NOW)

        assert moved.status == ArticleStatus.READ
        assert moved.progress == 1.0
        assert moved.read_at == FIXED_NOW
        assert moved.updated_at == FIXED_NOW

    def test_read_again_keeps_first_read_at(self) -> None:
        """Test re-marking a read article keeps its original read_at."""
        first = days_ago(3)
        article = make_article(status=ArticleStatus.READ, read_at=first)

        moved = transition(article, ArticleStatus.READ, FIXED_NOW)

        assert moved.read_at == first

    def test_unread_clears_read_at(self) -> None:
        """Test returning to UNREAD resets progress and read_at."""
        article = make_article(status=ArticleStatus.READ, read_at=days_ago(1))

        moved = transition(article, ArticleStatus.UNREAD, FIXED_NOW)

        assert moved.read_at is None
        assert moved.progress == 0.0

    def test_reading_with_progress(self) -> None:
        """Test explicit progress is applied."""
        moved = transition(
            make_article(), ArticleStatus.READING, FIXED_NOW, progress=0.4
        )

        assert moved.status == ArticleStatus.READING
        assert moved.progress == 0.4
        assert moved.read_at is None

    def test_archive_keeps_progress(self) -> None:
        """Test archiving leaves progress untouched."""
        article = make_article(status=ArticleStatus.READING, progress=0.6)

        moved = transition(article, ArticleStatus.ARCHIVED, FIXED_NOW, progress=0.9)

        assert moved.progress == 0.6

    def test_original_untouched(self) -> None:
        """Test the input article is not modified."""
        article = make_article()

        transition(article, ArticleStatus.READ, FIXED_NOW)

        assert article.status == ArticleStatus.UNREAD
        assert article.read_at is None

    def test_illegal_transition_raises(self) -> None:
        """Test leaving ARCHIVED raises StatusTransitionError."""
        article = make_article("x1", status=ArticleStatus.ARCHIVED)

        with pytest.raises(StatusTransitionError) as exc_info:
            transition(article, ArticleStatus.UNREAD, FIXED_NOW)

        assert exc_info.value.article_id == "x1"
        assert exc_info.value.from_status == ArticleStatus.ARCHIVED
        assert "archived -> unread" in str(exc_info.value)
