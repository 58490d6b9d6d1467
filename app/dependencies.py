"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: per-request SQLAlchemy session
- Condition: listing filters/pagination parsed from the query string
- BookQueries / BookWrites: the service objects routes call into
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session, sessionmaker

from app.database import get_db, get_session_factory
from app.repositories import BookRepository
from app.schemas import BookCondition
from app.schemas.common import MAX_DB_INT
from app.services.batch import BatchExecutor
from app.services.books import BookQueryService, BookWriteService

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
# you can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]
SessionFactory = Annotated[sessionmaker, Depends(get_session_factory)]


# =============================================================================
# Listing Condition
# =============================================================================
def get_book_condition(
    page_size: int = Query(
        ...,
        alias="pageSize",
        ge=1,
        description="Number of items per page",
        examples=[10],
    ),
    current_page: int = Query(
        ...,
        alias="currentPage",
        ge=1,
        description="Page number (1-indexed)",
        examples=[1],
    ),
    title: str | None = Query(
        default=None,
        description="Filter by title (substring)",
    ),
    title_kana: str | None = Query(
        default=None,
        alias="titleKana",
        description="Filter by title reading (substring)",
    ),
    author: str | None = Query(
        default=None,
        description="Filter by author (substring)",
    ),
    publisher_id: int | None = Query(
        default=None,
        alias="publisherId",
        ge=1,
        le=MAX_DB_INT,
        description="Filter by publisher ID",
    ),
    user_id: int | None = Query(
        default=None,
        alias="userId",
        ge=1,
        le=MAX_DB_INT,
        description="Filter by registering user ID",
    ),
    min_price: int | None = Query(
        default=None,
        alias="minPrice",
        le=MAX_DB_INT,
        description="Minimum price (inclusive)",
    ),
    max_price: int | None = Query(
        default=None,
        alias="maxPrice",
        le=MAX_DB_INT,
        description="Maximum price (inclusive)",
    ),
) -> BookCondition:
    """
    Build a BookCondition from query parameters.

    Usage:
        GET /api/v1/books?author=Smith&pageSize=10&currentPage=2

    pageSize and currentPage are required and must be >= 1. pageSize
    has no upper bound. Ids and prices must fit an INTEGER column.
    Anything else answers 400 through the validation handler.
    """
    return BookCondition(
        title=title,
        title_kana=title_kana,
        author=author,
        publisher_id=publisher_id,
        user_id=user_id,
        min_price=min_price,
        max_price=max_price,
        page_size=page_size,
        current_page=current_page,
    )


Condition = Annotated[BookCondition, Depends(get_book_condition)]


# =============================================================================
# Services
# =============================================================================
def get_book_query_service(db: DbSession) -> BookQueryService:
    return BookQueryService(BookRepository(db))


def get_book_write_service(
    db: DbSession,
    session_factory: SessionFactory,
) -> BookWriteService:
    return BookWriteService(db, BatchExecutor(session_factory))


BookQueries = Annotated[BookQueryService, Depends(get_book_query_service)]
BookWrites = Annotated[BookWriteService, Depends(get_book_write_service)]
