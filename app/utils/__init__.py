"""
Utilities Package

Helper functions used across the application:
- db_errors.py: Classify driver integrity errors (duplicate key, foreign key)
- strings.py: Identifier case conversion
"""
