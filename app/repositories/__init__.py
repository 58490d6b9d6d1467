"""
Repositories Package

Data access for the service layer. A repository wraps one SQLAlchemy
session and never commits: the caller owns the transaction.
"""

from app.repositories.book_repository import BookRepository

__all__ = ["BookRepository"]
