"""
Book Model

The central model of the Books Registry API.

Books are never physically deleted. Deleting a book sets is_deleted,
and every read path filters on that flag, so a soft-deleted book
behaves as if it did not exist.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.publisher import Publisher
    from app.models.user import User


# Text columns searched with LIKE. Binary collation on MySQL keeps the
# match case-sensitive.
SearchableText = String(255).with_variant(
    mysql.VARCHAR(255, collation="utf8mb4_bin"), "mysql", "mariadb"
)


class Book(Base):
    """
    Book model representing registered books.

    Table: books

    Fields:
    - title / title_kana: Title and its phonetic reading (required)
    - author: Author name as free text (required)
    - publisher_id: FK to publishers.id
    - user_id: FK to users.id (who registered the book)
    - price: Price as a whole number, optional
    - is_deleted: Soft-delete flag

    Example:
        book = Book(
            title="Kotlin in Action",
            title_kana="コトリン イン アクション",
            author="Dmitry Jemerov",
            publisher_id=1,
            user_id=100,
            price=2500,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # Assigned by the database unless the client sends an explicit id
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        SearchableText,
        index=True,
        nullable=False,
        comment="Book title"
    )

    title_kana: Mapped[str] = mapped_column(
        SearchableText,
        nullable=False,
        comment="Phonetic reading of the title"
    )

    author: Mapped[str] = mapped_column(
        SearchableText,
        index=True,
        nullable=False,
        comment="Author name"
    )

    publisher_id: Mapped[int] = mapped_column(
        ForeignKey("publishers.id"),
        index=True,
        nullable=False,
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        index=True,
        nullable=False,
    )

    price: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Book price"
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="0",
        nullable=False,
        comment="Soft-delete flag"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    publisher: Mapped["Publisher"] = relationship(
        "Publisher",
        back_populates="books",
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', is_deleted={self.is_deleted})"
