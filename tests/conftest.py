"""
pytest Fixtures for Books Registry API Tests

Shared fixtures: test database, HTTP client, sample data.

FIXTURE SCOPES:
- engine, sessions and client are function scoped: every test gets a
  fresh in-memory database. Batch writes open their own session and
  commit for real, so rolling back an outer transaction would not
  isolate tests; a new database per test does.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, get_session_factory
from app.main import app
from app.models import Book, Publisher, User


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine():
    """
    SQLite in-memory engine.

    StaticPool keeps a single connection alive, otherwise the in-memory
    database would disappear between connections. Foreign keys are
    switched on by the connect listener in app.database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    """Session factory bound to the test engine (used by batch writes)."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Session used by fixtures and as the per-request session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(db_session: Session, session_factory) -> Generator[TestClient, None, None]:
    """
    Test client wired to the test database.

    get_db yields the test session; get_session_factory returns the
    test factory so batch units of work hit the same database.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
def _add(db_session: Session, obj):
    db_session.add(obj)
    db_session.commit()
    db_session.refresh(obj)
    return obj


@pytest.fixture
def publisher(db_session: Session) -> Publisher:
    return _add(db_session, Publisher(name="Tech Press"))


@pytest.fixture
def deleted_publisher(db_session: Session) -> Publisher:
    """A publisher that still exists but is soft-deleted."""
    return _add(db_session, Publisher(name="Closed Press", is_deleted=True))


@pytest.fixture
def user(db_session: Session) -> User:
    return _add(db_session, User(name="Test User"))


@pytest.fixture
def deleted_user(db_session: Session) -> User:
    return _add(db_session, User(name="Gone User", is_deleted=True))


@pytest.fixture
def book_payload(publisher: Publisher, user: User):
    """
    Build a camelCase request body for a book.

    Usage:
        book_payload(title="Other", price=100)
    """
    publisher_id = publisher.id
    user_id = user.id

    def make(**overrides) -> dict:
        payload = {
            "title": "Kotlin in Action",
            "titleKana": "コトリン イン アクション",
            "author": "Dmitry Jemerov",
            "publisherId": publisher_id,
            "userId": user_id,
            "price": 2500,
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def sample_book(db_session: Session, publisher: Publisher, user: User) -> Book:
    return _add(
        db_session,
        Book(
            title="Kotlin in Action",
            title_kana="コトリン イン アクション",
            author="Dmitry Jemerov",
            publisher_id=publisher.id,
            user_id=user.id,
            price=2500,
        ),
    )


@pytest.fixture
def deleted_book(db_session: Session, publisher: Publisher, user: User) -> Book:
    return _add(
        db_session,
        Book(
            title="Deleted Book",
            title_kana="デリーテッド ブック",
            author="Nobody",
            publisher_id=publisher.id,
            user_id=user.id,
            price=1000,
            is_deleted=True,
        ),
    )


@pytest.fixture
def multiple_books(db_session: Session, publisher: Publisher, user: User) -> list[Book]:
    """Five live books, ids ascending in insertion order."""
    books = [
        Book(
            title=f"Test Book {i + 1}",
            title_kana=f"テスト ブック {i + 1}",
            author="Jane Smith" if i % 2 == 0 else "John Doe",
            publisher_id=publisher.id,
            user_id=user.id,
            price=1000 * (i + 1),
        )
        for i in range(5)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
