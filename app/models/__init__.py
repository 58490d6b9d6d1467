"""
SQLAlchemy Models Package

This package contains all database models for the Books Registry API.

Model Relationships:
- Publisher -> Book: One-to-Many (books.publisher_id)
- User -> Book: One-to-Many (books.user_id, the registering user)

All three tables carry an is_deleted flag; nothing is physically deleted.

Import all models here so Alembic discovers them for migrations.
"""

from app.models.publisher import Publisher
from app.models.user import User
from app.models.book import Book

__all__ = [
    "Publisher",
    "User",
    "Book",
]
