"""
Book Services

BookQueryService answers reads, BookWriteService performs writes.

Both sit on top of BookRepository. Single writes run in the request
session and commit it; batch writes go through BatchExecutor, which
opens a separate session so the batch is committed or rolled back as
a whole.

Soft-delete and update return affected row counts instead of raising:
0 means the book was missing or already soft-deleted. It is up to the
caller (the router) to decide whether that is an error.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import BookServiceError, ErrorKind, translate_integrity_error
from app.repositories import BookRepository
from app.schemas import (
    BatchOutcome,
    BookBatchUpdate,
    BookCondition,
    BookCreate,
    BookUpdate,
    BookView,
    Page,
)
from app.services.batch import BatchExecutor
from app.services.pagination import paginate

logger = logging.getLogger(__name__)


class BookQueryService:
    """Read side: single lookup and paginated listing."""

    def __init__(self, repository: BookRepository) -> None:
        self.repository = repository

    def get_by_id(self, book_id: int) -> BookView | None:
        """Return the book, or None if it doesn't exist or is soft-deleted."""
        return self.repository.get_by_id(book_id)

    def get_by_condition(self, condition: BookCondition) -> Page[BookView]:
        """
        Return one page of books matching the condition.

        The count query runs first. If nothing matches, the empty page
        (page 0 of 0) is returned without running the list query. A
        page number past the end is clamped to the last page, and the
        rows returned are the rows of that clamped page.

        Raises:
            BookServiceError: INVALID_PARAM for negative or inverted price bounds
        """
        self._validate_price_range(condition)

        total_count = self.repository.get_count_by_condition(condition)
        actual_page, total_pages = paginate(
            total_count, condition.page_size, condition.current_page
        )

        if total_count == 0:
            content: list[BookView] = []
        else:
            content = self.repository.get_list_by_condition(
                condition,
                offset=(actual_page - 1) * condition.page_size,
            )

        return Page[BookView](
            page_size=condition.page_size,
            current_page=actual_page,
            total_count=total_count,
            total_pages=total_pages,
            content=content,
        )

    @staticmethod
    def _validate_price_range(condition: BookCondition) -> None:
        if condition.min_price is not None and condition.min_price < 0:
            raise BookServiceError(
                ErrorKind.INVALID_PARAM, field="minPrice", value=condition.min_price
            )
        if condition.max_price is not None and condition.max_price < 0:
            raise BookServiceError(
                ErrorKind.INVALID_PARAM, field="maxPrice", value=condition.max_price
            )
        if (
            condition.min_price is not None
            and condition.max_price is not None
            and condition.min_price > condition.max_price
        ):
            raise BookServiceError(
                ErrorKind.INVALID_PARAM, field="minPrice", value=condition.min_price
            )


class BookWriteService:
    """
    Write side: create, update and soft-delete, single and batch.

    Args:
        session: Request session, committed by single-item writes
        batch_executor: Runs batch writes in their own unit of work
    """

    def __init__(self, session: Session, batch_executor: BatchExecutor) -> None:
        self.session = session
        self.repository = BookRepository(session)
        self.batch_executor = batch_executor

    def create(self, draft: BookCreate) -> int:
        """
        Register a book.

        Returns:
            The id of the new book

        Raises:
            BookServiceError: DUPLICATE_KEY if the explicit id is taken,
                FOREIGN_KEY_VIOLATION if publisher or user doesn't exist
        """
        try:
            book_id = self.repository.save(draft)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            error = translate_integrity_error(exc, draft)
            logger.info(f"Create rejected: {error!r}")
            raise error from exc

        logger.info(f"Created book {book_id}")
        return book_id

    def create_batch(self, drafts: Sequence[BookCreate]) -> BatchOutcome:
        """Register several books; all or none are saved."""
        count = self.batch_executor.run_batch(
            drafts, lambda repository, draft: repository.save(draft)
        )
        return BatchOutcome(processed_count=count)

    def update(self, book_id: int, data: BookUpdate) -> int:
        """
        Overwrite a book's fields.

        Returns:
            1 if updated, 0 if the book is missing or soft-deleted

        Raises:
            BookServiceError: FOREIGN_KEY_VIOLATION for an unknown publisher/user
        """
        try:
            affected = self.repository.update(book_id, data)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            error = translate_integrity_error(exc, data)
            logger.info(f"Update of book {book_id} rejected: {error!r}")
            raise error from exc

        logger.info(f"Updated book {book_id}: {affected} row(s)")
        return affected

    def update_batch(self, records: Sequence[BookBatchUpdate]) -> BatchOutcome:
        """Update several books; all or none are applied."""
        count = self.batch_executor.run_batch(
            records, lambda repository, record: repository.update(record.id, record)
        )
        return BatchOutcome(processed_count=count)

    def soft_delete(self, book_id: int) -> int:
        """
        Flag a book as deleted.

        Returns:
            1 if flagged, 0 if it was missing or already deleted
        """
        affected = self.repository.delete_logically(book_id)
        self.session.commit()
        logger.info(f"Soft-deleted book {book_id}: {affected} row(s)")
        return affected

    def soft_delete_batch(self, book_ids: Sequence[int]) -> int:
        """Flag several books as deleted; returns how many were live."""
        affected = self.repository.delete_batch_logically(book_ids)
        self.session.commit()
        logger.info(f"Soft-deleted {affected} of {len(book_ids)} book(s)")
        return affected
