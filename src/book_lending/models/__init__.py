"""
Book Lending models.

- Book: a stored book record
- BookInput: a candidate book submitted by a caller
- validate_book: field rules for candidates
"""

from .book import Book, BookInput
from .validation import NULL_OBJECT_MESSAGE, ValidationResult, validate_book

__all__ = [
    "NULL_OBJECT_MESSAGE",
    "Book",
    "BookInput",
    "ValidationResult",
    "validate_book",
]
