"""
Database Error Classification

SQLAlchemy wraps every constraint failure in IntegrityError, whatever
the driver. To tell a duplicate primary key from a missing foreign key
we have to look at the driver's own exception (exc.orig):

- MySQL (PyMySQL / mysqlclient): numeric error code in args[0]
    1062 = duplicate entry, 1452 = cannot add or update child row
- PostgreSQL (psycopg2): SQLSTATE in pgcode
    23505 = unique_violation, 23503 = foreign_key_violation
- SQLite: no codes, only the message text
"""

import re

from sqlalchemy.exc import IntegrityError

MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_NO_REFERENCED_ROW = 1452

PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"

# MySQL: ... FOREIGN KEY (`publisher_id`) REFERENCES `publishers` (`id`)
_MYSQL_FK_COLUMN = re.compile(r"FOREIGN KEY \(`(\w+)`\)")
# PostgreSQL: DETAIL:  Key (publisher_id)=(999) is not present in table ...
_PG_FK_COLUMN = re.compile(r"Key \((\w+)\)=\(.*?\) is not present")


def _vendor_code(exc: IntegrityError) -> int | None:
    args = getattr(exc.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _sqlstate(exc: IntegrityError) -> str | None:
    return getattr(exc.orig, "pgcode", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """Check whether the failure is a reference to a non-existent row."""
    if _vendor_code(exc) == MYSQL_NO_REFERENCED_ROW:
        return True
    if _sqlstate(exc) == PG_FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(exc.orig)


def is_duplicate_key(exc: IntegrityError) -> bool:
    """Check whether the failure is a unique/primary key collision."""
    if _vendor_code(exc) == MYSQL_DUPLICATE_ENTRY:
        return True
    if _sqlstate(exc) == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def extract_foreign_key_column(error_message: str) -> str | None:
    """
    Pull the offending column name out of a driver error message.

    Returns None when the driver does not report it (SQLite).
    """
    for pattern in (_MYSQL_FK_COLUMN, _PG_FK_COLUMN):
        match = pattern.search(error_message)
        if match:
            return match.group(1)
    return None
