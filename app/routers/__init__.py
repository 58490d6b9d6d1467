"""
API Routers Package

FastAPI routers grouped by resource. Each router is imported and
registered in main.py.

Router Structure:
- books.py: /api/v1/books/* endpoints
"""

from app.routers.books import router as books_router

__all__ = [
    "books_router",
]
