"""
Lending service: the add / list / checkout / return operations.

Each operation performs at most one store request and answers with a
:mod:`~book_lending.results` value instead of raising. Checkout and return
rely on the store's conditional update for atomicity; there is no
application-level locking, retrying or pre-read.
"""

import logging
import uuid
from collections.abc import Callable
from typing import Any

from ..config import LendingConfig
from ..database.book_repository import BookRepository
from ..database.repository import RepositoryException
from ..database.session import TableManager
from ..models.book import Book
from ..models.validation import validate_book
from ..observability import record_outcome
from ..results import (
    Ok,
    Operation,
    Result,
    not_available,
    project_store_error,
    validation_rejected,
)

logger = logging.getLogger(__name__)


def new_book_id() -> str:
    return str(uuid.uuid4())


class LendingService:
    """State-transition core for book records."""

    def __init__(
        self,
        repository: BookRepository,
        id_factory: Callable[[], str] = new_book_id,
    ):
        self.repository = repository
        self.id_factory = id_factory

    @classmethod
    def from_config(cls, config: LendingConfig) -> "LendingService":
        """Build a service bound to the table described by ``config``."""
        manager = TableManager(config)
        return cls(BookRepository(manager.table))

    def _finish(self, operation: Operation, result: Result) -> Result:
        record_outcome(operation.value, result.kind)
        return result

    def add_book(self, candidate: Any) -> Result:
        """
        Validate and store a new book.

        The caller's ``id`` and ``isCheckedOut`` values are ignored: a fresh id
        is generated and the book starts out available.

        Returns:
            Ok(Book) with the stored record, Rejected(VALIDATION) listing every
            violated rule (the store is not touched), or Failed
        """
        validation = validate_book(candidate)
        if not validation.is_valid:
            logger.warning("Validation failed: %s", ", ".join(validation.errors))
            return self._finish(Operation.ADD, validation_rejected(validation.errors))

        draft = validation.book
        book = Book(
            id=self.id_factory(),
            title=draft.title,
            author=draft.author,
            isbn=draft.isbn,
            is_checked_out=False,
        )

        try:
            self.repository.put(book)
        except RepositoryException as e:
            logger.error("Error adding book: %s", e)
            return self._finish(Operation.ADD, project_store_error(Operation.ADD, e))

        logger.info("Book added successfully: %s", book.id)
        return self._finish(Operation.ADD, Ok(value=book))

    def list_books(self) -> Result:
        """
        Return all book records.

        Order is whatever the store's scan yields, and the snapshot is not
        transactionally consistent with concurrent writes.
        """
        try:
            books = self.repository.scan_books()
        except RepositoryException as e:
            logger.error("Error retrieving books: %s", e)
            return self._finish(Operation.LIST, project_store_error(Operation.LIST, e))

        logger.info("Retrieved %d books", len(books))
        return self._finish(Operation.LIST, Ok(value=books))

    def checkout_book(self, book_id: str | None) -> Result:
        """
        Mark a book as checked out.

        Returns:
            Ok() on success; Rejected(NOT_AVAILABLE) if the book does not exist
            or is already checked out (the two are indistinguishable); Failed
            on any other store error
        """
        return self._set_checked_out(Operation.CHECKOUT, book_id, checked_out=True)

    def return_book(self, book_id: str | None) -> Result:
        """
        Mark a book as returned.

        Returns:
            Ok() on success; Rejected(NOT_AVAILABLE) if the book does not exist
            or is not checked out; Failed on any other store error
        """
        return self._set_checked_out(Operation.RETURN, book_id, checked_out=False)

    def _set_checked_out(
        self, operation: Operation, book_id: str | None, checked_out: bool
    ) -> Result:
        if not book_id or not book_id.strip():
            # no record can have a blank id
            logger.warning("Book %s rejected for blank id", operation.value)
            return self._finish(operation, not_available(operation))

        try:
            self.repository.set_checked_out(book_id, checked_out)
        except RepositoryException as e:
            result = project_store_error(operation, e)
            if result.kind == "rejected":
                logger.warning("Book %s failed: %s", operation.value, book_id)
            else:
                logger.error("Error during book %s of %s: %s", operation.value, book_id, e)
            return self._finish(operation, result)

        logger.info("Book %s succeeded: %s", operation.value, book_id)
        return self._finish(operation, Ok())
