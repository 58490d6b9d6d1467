"""
User Model

Represents the user who registered a book.

Only what the book registry needs is kept here: a display name and
the soft-delete flag. Account management lives in another service.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.book import Book


class User(Base):
    """
    User model.

    Table: users

    Relationships:
    - books: One-to-Many (books registered by this user)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    # A soft-deleted user keeps its row so book foreign keys stay valid,
    # but book views stop showing it.
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="0",
        nullable=False,
        comment="Soft-delete flag"
    )

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

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, name='{self.name}')"
