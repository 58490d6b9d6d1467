"""
Books Router

CRUD endpoints for books, including batch variants.

Routes only translate between HTTP and the services:
- a missing book on GET/PUT raises NOT_FOUND (404)
- a soft-delete that touched fewer books than asked answers 500
- every other failure is raised by the services and mapped by the
  global exception handlers (see app/errors.py)

The /batch routes are declared before /{book_id} so that the literal
path wins.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Request, status

from app.config import get_settings
from app.dependencies import BookQueries, BookWrites, Condition
from app.errors import BookServiceError, ErrorKind
from app.schemas import (
    BatchOutcome,
    BookBatchUpdate,
    BookCreate,
    BookCreatedResponse,
    BooksDelete,
    BookUpdate,
    BookView,
    Page,
)
from app.schemas.common import MAX_DB_INT
from app.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"description": "Invalid parameter"},
    },
)

BookId = Annotated[int, Path(ge=1, le=MAX_DB_INT, description="Book ID")]


# =============================================================================
# Reads
# =============================================================================
@router.get(
    "",
    response_model=Page[BookView],
    summary="List books",
    description="Get a page of books matching the filters.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    condition: Condition,
    queries: BookQueries,
) -> Page[BookView]:
    """
    List books with filters and pagination.

    A currentPage past the end is clamped to the last page; the
    response's currentPage tells which page was served. With no
    matches the response is an empty page with currentPage = 0.

    Examples:
        GET /api/v1/books?pageSize=10&currentPage=1
        GET /api/v1/books?author=Smith&minPrice=1000&pageSize=5&currentPage=2
    """
    return queries.get_by_condition(condition)


@router.get(
    "/{book_id}",
    response_model=BookView,
    summary="Get a book by ID",
    responses={404: {"description": "Book not found"}},
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    queries: BookQueries,
    book_id: BookId,
) -> BookView:
    """
    Get a single book.

    Soft-deleted books are reported as not found.
    """
    book = queries.get_by_id(book_id)
    if book is None:
        raise BookServiceError(ErrorKind.NOT_FOUND, field="id", value=book_id)
    return book


# =============================================================================
# Creates
# =============================================================================
@router.post(
    "",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a book",
    responses={409: {"description": "Duplicate id or unknown publisher/user"}},
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    writes: BookWrites,
) -> BookCreatedResponse:
    """Register a new book and return its id and title."""
    book_id = writes.create(book_data)
    return BookCreatedResponse(id=book_id, title=book_data.title)


@router.post(
    "/batch",
    response_model=BatchOutcome,
    summary="Register several books",
    responses={500: {"description": "Batch failed, nothing was saved"}},
)
@limiter.limit(settings.rate_limit_write)
def create_books(
    request: Request,
    books_data: list[BookCreate],
    writes: BookWrites,
) -> BatchOutcome:
    """Register books in one transaction: either all are saved or none."""
    return writes.create_batch(books_data)


# =============================================================================
# Updates
# =============================================================================
@router.put(
    "/batch",
    response_model=BatchOutcome,
    summary="Update several books",
    responses={500: {"description": "Batch failed, nothing was changed"}},
)
@limiter.limit(settings.rate_limit_write)
def update_books(
    request: Request,
    books_data: list[BookBatchUpdate],
    writes: BookWrites,
) -> BatchOutcome:
    """Update books in one transaction: either all are applied or none."""
    return writes.update_batch(books_data)


@router.put(
    "/{book_id}",
    response_model=BookView,
    summary="Update a book",
    responses={
        404: {"description": "Book not found or soft-deleted"},
        409: {"description": "Unknown publisher/user"},
    },
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_data: BookUpdate,
    writes: BookWrites,
    queries: BookQueries,
    book_id: BookId,
) -> BookView:
    """
    Replace a book's fields and return the updated view.

    Soft-deleted books cannot be updated (404).
    """
    if writes.update(book_id, book_data) == 0:
        raise BookServiceError(ErrorKind.NOT_FOUND, field="id", value=book_id)

    book = queries.get_by_id(book_id)
    if book is None:
        raise BookServiceError(ErrorKind.NOT_FOUND, field="id", value=book_id)
    return book


# =============================================================================
# Deletes
# =============================================================================
@router.delete(
    "/batch",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft-delete several books",
    responses={500: {"description": "Some books were missing or already deleted"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_books(
    request: Request,
    delete_data: BooksDelete,
    writes: BookWrites,
) -> None:
    """
    Soft-delete books.

    Live books in the list are flagged even when others are missing;
    the response is 500 if any requested id was not a live book.
    """
    requested = len(set(delete_data.ids))
    affected = writes.soft_delete_batch(delete_data.ids)
    if affected != requested:
        raise BookServiceError(
            ErrorKind.UNEXPECTED,
            field="ids",
            value=delete_data.ids,
            detail=f"deleted {affected} of {requested} books",
        )


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft-delete a book",
    responses={500: {"description": "Book missing or already deleted"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    writes: BookWrites,
    book_id: BookId,
) -> None:
    """Soft-delete a book. Returns 204 No Content on success."""
    if writes.soft_delete(book_id) == 0:
        raise BookServiceError(
            ErrorKind.UNEXPECTED,
            field="id",
            value=book_id,
            detail=f"book {book_id} was not deleted",
        )
