"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Control exactly what data is exposed in API responses
2. Different rules for create vs update vs response
3. Database schema can evolve independently of the API
4. Schemas generate the OpenAPI documentation

All schemas derive from CamelModel: snake_case in Python, camelCase in JSON.
"""

from app.schemas.book import (
    BatchOutcome,
    BookBatchUpdate,
    BookCondition,
    BookCreate,
    BookCreatedResponse,
    BookUpdate,
    BooksDelete,
    BookView,
)
from app.schemas.common import CamelModel, Page

__all__ = [
    "CamelModel",
    "Page",
    "BookCreate",
    "BookUpdate",
    "BookBatchUpdate",
    "BooksDelete",
    "BookCondition",
    "BookView",
    "BookCreatedResponse",
    "BatchOutcome",
]
