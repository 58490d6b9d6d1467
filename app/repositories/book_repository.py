"""
Book Repository

SQL for the books table. Writes go through Core insert/update
statements so that the database, not the session's identity map, is
the one to report duplicate keys and missing references.

Every read filters out soft-deleted books. Publisher and user are
LEFT JOINed on "exists and not soft-deleted", so a book whose
publisher was soft-deleted still shows up, just without publisher data.
"""

from collections.abc import Sequence

from sqlalchemy import Select, and_, func, insert, select, update
from sqlalchemy.orm import Session

from app.models import Book, Publisher, User
from app.schemas.book import BookCondition, BookCreate, BookFields, BookView

# Largest LIMIT the drivers accept (signed 64-bit). pageSize itself is
# unbounded; a page larger than this returns every row anyway.
MAX_SQL_LIMIT = 2**63 - 1


class BookRepository:
    """Book data access bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    @staticmethod
    def _view_statement() -> Select:
        return (
            select(
                Book.id,
                Book.title,
                Book.title_kana,
                Book.author,
                Publisher.id.label("publisher_id"),
                Publisher.name.label("publisher_name"),
                User.id.label("user_id"),
                User.name.label("user_name"),
                Book.price,
                Book.is_deleted,
                Book.created_at,
                Book.updated_at,
            )
            .select_from(Book)
            .outerjoin(
                Publisher,
                and_(Publisher.id == Book.publisher_id, Publisher.is_deleted.is_(False)),
            )
            .outerjoin(
                User,
                and_(User.id == Book.user_id, User.is_deleted.is_(False)),
            )
            .where(Book.is_deleted.is_(False))
        )

    @staticmethod
    def _apply_condition(stmt: Select, condition: BookCondition) -> Select:
        """
        Add the WHERE clauses for a listing condition.

        Filters reference books columns only, so the same function
        serves both the count and the list query.

        Text filters are case-sensitive substring matches on every
        backend: SQLite connections run with case_sensitive_like, and
        on MySQL the text columns use a binary collation.
        """
        if condition.title:
            stmt = stmt.where(Book.title.contains(condition.title, autoescape=True))
        if condition.title_kana:
            stmt = stmt.where(Book.title_kana.contains(condition.title_kana, autoescape=True))
        if condition.author:
            stmt = stmt.where(Book.author.contains(condition.author, autoescape=True))
        if condition.publisher_id is not None:
            stmt = stmt.where(Book.publisher_id == condition.publisher_id)
        if condition.user_id is not None:
            stmt = stmt.where(Book.user_id == condition.user_id)
        if condition.min_price is not None:
            stmt = stmt.where(Book.price >= condition.min_price)
        if condition.max_price is not None:
            stmt = stmt.where(Book.price <= condition.max_price)
        return stmt

    def get_by_id(self, book_id: int) -> BookView | None:
        row = self.session.execute(
            self._view_statement().where(Book.id == book_id)
        ).one_or_none()
        return BookView.model_validate(dict(row._mapping)) if row else None

    def get_count_by_condition(self, condition: BookCondition) -> int:
        stmt = select(func.count()).select_from(Book).where(Book.is_deleted.is_(False))
        stmt = self._apply_condition(stmt, condition)
        return self.session.execute(stmt).scalar_one()

    def get_list_by_condition(
        self,
        condition: BookCondition,
        offset: int,
    ) -> list[BookView]:
        """
        Fetch one page of books, ordered by id ascending.

        Args:
            condition: Filters plus page_size
            offset: Row offset of the page to serve
        """
        stmt = (
            self._apply_condition(self._view_statement(), condition)
            .order_by(Book.id.asc())
            .limit(min(condition.page_size, MAX_SQL_LIMIT))
            .offset(offset)
        )
        rows = self.session.execute(stmt).all()
        return [BookView.model_validate(dict(row._mapping)) for row in rows]

    # -------------------------------------------------------------------------
    # Writes (no commit here)
    # -------------------------------------------------------------------------
    def save(self, draft: BookCreate) -> int:
        """Insert a book and return its id (explicit or assigned)."""
        values = draft.model_dump(exclude={"id"})
        if draft.id is not None:
            values["id"] = draft.id
        result = self.session.execute(insert(Book.__table__).values(**values))
        return result.inserted_primary_key[0]

    def update(self, book_id: int, fields: BookFields) -> int:
        """
        Overwrite the writable fields of a live book.

        Returns:
            Number of rows updated: 0 when the book is missing or
            soft-deleted, which are never brought back.
        """
        stmt = (
            update(Book)
            .where(Book.id == book_id, Book.is_deleted.is_(False))
            .values(
                title=fields.title,
                title_kana=fields.title_kana,
                author=fields.author,
                publisher_id=fields.publisher_id,
                user_id=fields.user_id,
                price=fields.price,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount

    def delete_logically(self, book_id: int) -> int:
        """Soft-delete one book. Returns 0 if it was missing or already deleted."""
        return self.delete_batch_logically([book_id])

    def delete_batch_logically(self, book_ids: Sequence[int]) -> int:
        """Soft-delete several books. Returns how many live books were flagged."""
        stmt = (
            update(Book)
            .where(Book.id.in_(book_ids), Book.is_deleted.is_(False))
            .values(is_deleted=True, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount
