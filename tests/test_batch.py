"""
Tests for BatchExecutor

Covers the unit-of-work contract:
- one session per batch, committed once when every item succeeds
- any failure rolls back the whole batch and raises BATCH_FAILED
- the session is closed on both paths
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from app.errors import BookServiceError, ErrorKind
from app.models import Book
from app.schemas import BookCreate
from app.services.batch import BatchExecutor


def _draft(publisher_id: int, user_id: int, title: str) -> BookCreate:
    return BookCreate(
        title=title,
        title_kana="テスト",
        author="Batch Author",
        publisher_id=publisher_id,
        user_id=user_id,
        price=100,
    )


def _count_books(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(Book)).scalar_one()


class TestBatchExecutorWithMockSession:
    """Sequencing checks against a mocked session."""

    def test_commits_once_and_closes(self):
        session = MagicMock()
        executor = BatchExecutor(lambda: session, repository_class=MagicMock())
        operation = MagicMock()

        count = executor.run_batch(["a", "b", "c"], operation)

        assert count == 3
        assert operation.call_count == 3
        session.commit.assert_called_once()
        session.rollback.assert_not_called()
        session.close.assert_called_once()

    def test_failure_rolls_back_and_closes(self):
        session = MagicMock()
        executor = BatchExecutor(lambda: session, repository_class=MagicMock())
        operation = MagicMock(side_effect=[None, RuntimeError("boom"), None])

        with pytest.raises(BookServiceError) as exc_info:
            executor.run_batch(["a", "b", "c"], operation)

        assert exc_info.value.kind is ErrorKind.BATCH_FAILED
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        # Stops at the failing item
        assert operation.call_count == 2
        session.commit.assert_not_called()
        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_commit_failure_rolls_back(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("commit failed")
        executor = BatchExecutor(lambda: session, repository_class=MagicMock())

        with pytest.raises(BookServiceError) as exc_info:
            executor.run_batch(["a"], MagicMock())

        assert "commit failed" in exc_info.value.detail
        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_empty_batch(self):
        session = MagicMock()
        executor = BatchExecutor(lambda: session, repository_class=MagicMock())

        assert executor.run_batch([], MagicMock()) == 0
        session.close.assert_called_once()


class TestBatchExecutorWithDatabase:
    """Atomicity checks against SQLite."""

    def test_all_items_saved(self, session_factory, db_session, publisher, user):
        executor = BatchExecutor(session_factory)
        drafts = [_draft(publisher.id, user.id, f"Book {i}") for i in range(3)]

        count = executor.run_batch(drafts, lambda repository, draft: repository.save(draft))

        assert count == 3
        assert _count_books(db_session) == 3

    def test_invalid_item_saves_nothing(self, session_factory, db_session, publisher, user):
        """A foreign key failure on the second item discards the first."""
        executor = BatchExecutor(session_factory)
        drafts = [
            _draft(publisher.id, user.id, "Valid"),
            _draft(99999, user.id, "Unknown publisher"),
        ]

        with pytest.raises(BookServiceError) as exc_info:
            executor.run_batch(drafts, lambda repository, draft: repository.save(draft))

        assert exc_info.value.kind is ErrorKind.BATCH_FAILED
        assert _count_books(db_session) == 0
