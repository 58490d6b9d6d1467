"""
Publisher Model

Represents a publishing house that books reference.

Publishers are soft-deleted like books: the row stays in place (so
existing foreign keys remain valid) but it is hidden from book views.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.book import Book


class Publisher(Base):
    """
    Publisher model.

    Table: publishers

    Relationships:
    - books: One-to-Many (a publisher publishes many books)

    Example:
        publisher = Publisher(name="Tech Press")
        db.add(publisher)
        db.commit()
    """

    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Publisher name"
    )

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
        back_populates="publisher",
    )

    def __repr__(self) -> str:
        return f"Publisher(id={self.id}, name='{self.name}')"
