"""
Batch Executor

Runs a list of single-row writes as one unit of work.

The executor opens its own session (it does not reuse the request
session), hands a repository bound to that session to the operation
for every item, and then makes one decision for the whole batch:

- every item succeeded  -> commit once, return the number of items
- any item raised       -> roll back everything, raise BATCH_FAILED

Callers can therefore rely on batches being all-or-nothing. Which item
failed is logged but not reported back to the client.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from app.errors import BookServiceError, ErrorKind
from app.repositories import BookRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchExecutor:
    """
    Applies an operation to each item inside a single session.

    Args:
        session_factory: Callable returning a new Session (e.g. a sessionmaker)
        repository_class: Repository type handed to the operation
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        repository_class: type[BookRepository] = BookRepository,
    ) -> None:
        self.session_factory = session_factory
        self.repository_class = repository_class

    def run_batch(
        self,
        items: Sequence[T],
        operation: Callable[[BookRepository, T], Any],
    ) -> int:
        """
        Apply operation(repository, item) to every item, atomically.

        Returns:
            Number of items processed (len(items))

        Raises:
            BookServiceError: BATCH_FAILED, chained to the first failure
        """
        session = self.session_factory()
        index = -1
        try:
            repository = self.repository_class(session)
            for index, item in enumerate(items):
                operation(repository, item)
            session.commit()
        except Exception as exc:
            session.rollback()
            logger.warning(
                f"Batch of {len(items)} rolled back, item {index} failed: {exc}"
            )
            raise BookServiceError(ErrorKind.BATCH_FAILED, detail=str(exc)) from exc
        finally:
            session.close()

        logger.info(f"Batch of {len(items)} committed")
        return len(items)
