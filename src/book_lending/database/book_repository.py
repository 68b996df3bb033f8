"""
Book repository for the Book Lending service.

Each method issues exactly one logical store request built by
:mod:`.schema` and returns domain models. Store errors surface as the
exceptions defined in :mod:`.repository`.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..models.book import Book
from .repository import StoreError, store_safe_call
from .schema import (
    from_item,
    put_book_request,
    scan_books_request,
    set_checked_out_request,
)

logger = logging.getLogger(__name__)


class BookRepository:
    """Data access for book records stored in a DynamoDB table."""

    def __init__(self, table: Any):
        """
        Args:
            table: A boto3 ``Table`` resource (or an object with the same
                ``put_item``/``scan``/``update_item`` methods)
        """
        self.table = table

    @property
    def table_name(self) -> str:
        return getattr(self.table, "name", "books")

    def put(self, book: Book) -> Book:
        """
        Write a book unconditionally.

        Last writer wins; callers only ever write freshly generated ids.
        """
        request = put_book_request(book)
        store_safe_call(self.table_name, "put_item", lambda: self.table.put_item(**request))
        return book

    def scan_books(self) -> list[Book]:
        """
        Return every top-level book record, in the store's order.

        Follows ``LastEvaluatedKey`` so that results spanning several scan
        pages come back together.

        Raises:
            StoreError: The scan failed or an item could not be decoded
        """
        items: list[dict[str, Any]] = []
        start_key: dict[str, Any] | None = None
        while True:
            request = scan_books_request(start_key)
            response = store_safe_call(self.table_name, "scan", lambda: self.table.scan(**request))
            items.extend(response.get("Items", []))
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break

        try:
            return [from_item(item) for item in items]
        except (KeyError, ValidationError) as e:
            logger.exception("Malformed book item in %s", self.table_name)
            raise StoreError(f"Malformed book item: {e!s}") from e

    def set_checked_out(self, book_id: str, checked_out: bool) -> None:
        """
        Flip the checked-out flag if the record exists and holds the opposite value.

        Raises:
            ConditionFailedError: Record missing, or already in the target state
            StoreError: Any other store error
        """
        request = set_checked_out_request(book_id, checked_out)
        store_safe_call(
            self.table_name, "update_item", lambda: self.table.update_item(**request)
        )
