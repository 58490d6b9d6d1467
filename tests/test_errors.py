"""
Tests for error classification and error responses

Driver exceptions are faked: IntegrityError only needs an `orig` that
looks like what MySQL, PostgreSQL or SQLite would raise.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from app.config import ErrorMessages
from app.errors import (
    BookServiceError,
    ErrorKind,
    ErrorResponder,
    register_exception_handlers,
    translate_integrity_error,
)
from app.schemas import BookCreate
from app.utils.db_errors import (
    extract_foreign_key_column,
    is_duplicate_key,
    is_foreign_key_violation,
)
from app.utils.strings import to_camel_case


class FakeDriverError(Exception):
    """Stand-in for a DBAPI exception."""

    def __init__(self, *args, pgcode=None):
        super().__init__(*args)
        self.pgcode = pgcode


def _integrity_error(*args, pgcode=None) -> IntegrityError:
    return IntegrityError("INSERT INTO books ...", {}, FakeDriverError(*args, pgcode=pgcode))


MYSQL_FK = _integrity_error(
    1452,
    "Cannot add or update a child row: a foreign key constraint fails "
    "(`books`, CONSTRAINT `fk_publisher` FOREIGN KEY (`publisher_id`) "
    "REFERENCES `publishers` (`id`))",
)
MYSQL_DUPLICATE = _integrity_error(1062, "Duplicate entry '1' for key 'PRIMARY'")
PG_FK = _integrity_error(
    'insert or update on table "books" violates foreign key constraint\n'
    "DETAIL:  Key (user_id)=(999) is not present in table \"users\".",
    pgcode="23503",
)
PG_DUPLICATE = _integrity_error(
    'duplicate key value violates unique constraint "books_pkey"', pgcode="23505"
)
SQLITE_FK = _integrity_error("FOREIGN KEY constraint failed")
SQLITE_DUPLICATE = _integrity_error("UNIQUE constraint failed: books.id")
NOT_NULL = _integrity_error("NOT NULL constraint failed: books.title")


def _draft(**overrides) -> BookCreate:
    fields = {
        "title": "Title",
        "title_kana": "タイトル",
        "author": "Author",
        "publisher_id": 999,
        "user_id": 999,
        "price": 100,
    }
    fields.update(overrides)
    return BookCreate(**fields)


class TestClassification:

    @pytest.mark.parametrize("exc", [MYSQL_FK, PG_FK, SQLITE_FK])
    def test_foreign_key_violation(self, exc):
        assert is_foreign_key_violation(exc)
        assert not is_duplicate_key(exc)

    @pytest.mark.parametrize("exc", [MYSQL_DUPLICATE, PG_DUPLICATE, SQLITE_DUPLICATE])
    def test_duplicate_key(self, exc):
        assert is_duplicate_key(exc)
        assert not is_foreign_key_violation(exc)

    def test_other_integrity_error(self):
        assert not is_duplicate_key(NOT_NULL)
        assert not is_foreign_key_violation(NOT_NULL)

    def test_extract_column_mysql(self):
        assert extract_foreign_key_column(str(MYSQL_FK.orig)) == "publisher_id"

    def test_extract_column_postgresql(self):
        assert extract_foreign_key_column(str(PG_FK.orig)) == "user_id"

    def test_extract_column_sqlite(self):
        assert extract_foreign_key_column(str(SQLITE_FK.orig)) is None

    @pytest.mark.parametrize(
        "name,expected",
        [("publisher_id", "publisherId"), ("id", "id"), ("title_kana", "titleKana")],
    )
    def test_to_camel_case(self, name, expected):
        assert to_camel_case(name) == expected


class TestTranslateIntegrityError:

    def test_foreign_key_reports_field_and_value(self):
        error = translate_integrity_error(MYSQL_FK, _draft(publisher_id=42))

        assert error.kind is ErrorKind.FOREIGN_KEY_VIOLATION
        assert error.field == "publisherId"
        assert error.value == 42

    def test_foreign_key_without_column(self):
        error = translate_integrity_error(SQLITE_FK, _draft())

        assert error.kind is ErrorKind.FOREIGN_KEY_VIOLATION
        assert error.field is None

    def test_duplicate_reports_id(self):
        error = translate_integrity_error(PG_DUPLICATE, _draft(id=5))

        assert error.kind is ErrorKind.DUPLICATE_KEY
        assert error.field == "id"
        assert error.value == 5

    def test_other_is_unexpected(self):
        error = translate_integrity_error(NOT_NULL, _draft())

        assert error.kind is ErrorKind.UNEXPECTED
        assert "NOT NULL" in error.detail


class TestErrorResponses:
    """Handlers installed on a bare app with a custom message catalog."""

    @pytest.fixture
    def messages(self) -> ErrorMessages:
        return ErrorMessages(
            invalid_value="bad value",
            non_existent_book="no such book",
            unexpected_error="boom: ",
        )

    @pytest.fixture
    def error_client(self, messages) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app, messages)

        @app.get("/service/{kind}")
        def raise_service_error(kind: ErrorKind):
            raise BookServiceError(kind, field="id", value=7, detail="driver said no")

        @app.get("/integrity")
        def raise_integrity_error():
            raise SQLITE_DUPLICATE

        @app.get("/crash")
        def crash():
            raise RuntimeError("kaput")

        @app.get("/typed")
        def typed(count: int):
            return {"count": count}

        return TestClient(app, raise_server_exceptions=False)

    def test_not_found(self, error_client):
        response = error_client.get("/service/not_found")

        assert response.status_code == 404
        assert response.json() == {"detail": "no such book", "field": "id", "value": 7}

    def test_invalid_param_keys_by_field(self, error_client):
        response = error_client.get("/service/invalid_param")

        assert response.status_code == 400
        assert response.json() == {"detail": {"id": "bad value"}}

    def test_unexpected_appends_detail(self, error_client):
        response = error_client.get("/service/unexpected")

        assert response.status_code == 500
        assert response.json() == {"detail": "boom: driver said no"}

    def test_escaped_integrity_error_is_conflict(self, error_client):
        response = error_client.get("/integrity")

        assert response.status_code == 409

    def test_unhandled_exception(self, error_client):
        response = error_client.get("/crash")

        assert response.status_code == 500
        assert response.json() == {"detail": "boom: kaput"}

    def test_validation_error(self, error_client):
        response = error_client.get("/typed?count=abc")

        assert response.status_code == 400
        assert response.json() == {"detail": {"count": "bad value"}}

    def test_message_for_every_kind(self, messages):
        responder = ErrorResponder(messages)

        for kind in ErrorKind:
            assert isinstance(responder.message_for(kind), str)
