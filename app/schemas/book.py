"""
Book Pydantic Schemas

Request bodies, query conditions and responses for /books.

Validation rules:
- title / titleKana / author: required, not blank
- publisherId / userId / id: positive integers that fit an INTEGER column
- price: non-negative integer, same upper bound
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from app.schemas.common import MAX_DB_INT, CamelModel


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v


class BookFields(CamelModel):
    """Writable book fields shared by create and update."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book title",
        examples=["Kotlin in Action"],
    )

    title_kana: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Phonetic reading of the title",
        examples=["コトリン イン アクション"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Dmitry Jemerov"],
    )

    publisher_id: int = Field(
        ...,
        ge=1,
        le=MAX_DB_INT,
        description="ID of an existing publisher",
        examples=[1],
    )

    user_id: int = Field(
        ...,
        ge=1,
        le=MAX_DB_INT,
        description="ID of the registering user",
        examples=[100],
    )

    price: int | None = Field(
        default=None,
        ge=0,
        le=MAX_DB_INT,
        description="Price (whole number, free books allowed)",
        examples=[2500],
    )

    @field_validator("title", "title_kana", "author")
    @classmethod
    def text_must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only text. Accepted text is stored as sent."""
        return _not_blank(v)


class BookCreate(BookFields):
    """
    Schema for registering a new book.

    id is optional: leave it out to let the database assign one.
    Sending an id that is already taken fails with 409.

    Example request body:
    {
        "title": "Kotlin in Action",
        "titleKana": "コトリン イン アクション",
        "author": "Dmitry Jemerov",
        "publisherId": 1,
        "userId": 100,
        "price": 2500
    }
    """

    id: int | None = Field(
        default=None,
        ge=1,
        le=MAX_DB_INT,
        description="Explicit id (optional)",
    )


class BookUpdate(BookFields):
    """
    Schema for replacing a book's fields (PUT semantics).

    The target id comes from the URL path.
    """


class BookBatchUpdate(BookFields):
    """One entry of a batch update: the fields plus the target id."""

    id: int = Field(..., ge=1, le=MAX_DB_INT, description="ID of the book to update")


class BooksDelete(CamelModel):
    """Request body for batch soft-delete."""

    ids: list[int] = Field(
        ...,
        min_length=1,
        description="IDs of the books to delete",
        examples=[[1, 2, 3]],
    )

    @field_validator("ids")
    @classmethod
    def ids_must_be_in_range(cls, v: list[int]) -> list[int]:
        if any(book_id < 1 or book_id > MAX_DB_INT for book_id in v):
            raise ValueError(f"ids must be between 1 and {MAX_DB_INT}")
        return v


class BookCondition(CamelModel):
    """
    Filter and pagination parameters for listing books.

    Text filters are substring matches, id filters exact matches,
    price bounds inclusive. Unset filters are ignored.
    """

    title: str | None = None
    title_kana: str | None = None
    author: str | None = None
    publisher_id: int | None = Field(default=None, ge=1, le=MAX_DB_INT)
    user_id: int | None = Field(default=None, ge=1, le=MAX_DB_INT)
    min_price: int | None = Field(default=None, le=MAX_DB_INT)
    max_price: int | None = Field(default=None, le=MAX_DB_INT)
    page_size: int = Field(..., ge=1)
    current_page: int = Field(..., ge=1)


class BookView(CamelModel):
    """
    Read projection of a book with publisher and user names.

    publisherId/publisherName (and userId/userName) are null when the
    referenced publisher (or user) has been soft-deleted.
    """

    id: int
    title: str
    title_kana: str
    author: str
    publisher_id: int | None = None
    publisher_name: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    price: int | None = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Kotlin in Action",
                "titleKana": "コトリン イン アクション",
                "author": "Dmitry Jemerov",
                "publisherId": 1,
                "publisherName": "Tech Press",
                "userId": 100,
                "userName": "Test User",
                "price": 2500,
                "isDeleted": False,
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookCreatedResponse(CamelModel):
    """Response body for a single create."""

    id: int
    title: str


class BatchOutcome(CamelModel):
    """Response body for batch create/update: how many items were applied."""

    processed_count: int = Field(..., ge=0)
