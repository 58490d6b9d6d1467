"""
Books Registry API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and dependencies
- errors.py: Service error type and global exception handlers
- main.py: FastAPI application factory
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- repositories/: SQL access for books
- routers/: API route handlers
- services/: Business logic (queries, writes, batches, pagination, rate limiting)
- utils/: Helper functions
"""

__version__ = "0.1.0"
