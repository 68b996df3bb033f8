"""
Store package for the Book Lending service.

- schema.py: item layout, key derivation and request builders
- repository.py: store exceptions and the guarded call helper
- book_repository.py: book reads and writes
- session.py: boto3 handles for a configuration
"""

from .book_repository import BookRepository
from .repository import (
    ConditionFailedError,
    RepositoryException,
    StoreError,
    store_safe_call,
)
from .schema import book_key, from_item, to_item
from .session import TableManager

__all__ = [
    "BookRepository",
    "ConditionFailedError",
    "RepositoryException",
    "StoreError",
    "TableManager",
    "book_key",
    "from_item",
    "store_safe_call",
    "to_item",
]
