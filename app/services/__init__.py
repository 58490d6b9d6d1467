"""
Services Package

Business logic kept separate from HTTP handling.

Current services:
- books.py: BookQueryService (reads) and BookWriteService (writes)
- batch.py: BatchExecutor, one unit of work per batch
- pagination.py: Page arithmetic
- rate_limiter.py: Rate limiting with slowapi
"""
