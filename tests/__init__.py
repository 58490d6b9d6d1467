"""
Test Suite for Books Registry API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: Tests for /api/v1/books endpoints
- test_book_services.py: Query and write services
- test_repository.py: BookRepository against SQLite
- test_batch.py: BatchExecutor unit of work
- test_pagination.py: Page arithmetic
- test_errors.py: Integrity error classification and error responses

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
