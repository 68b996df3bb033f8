"""
Lending tools for the Book Lending MCP server.

Tools:
1. add_book: register a new book
2. list_books: list every book with its checked-out flag
3. checkout_book: mark a book as checked out
4. return_book: mark a book as returned

Each handler calls one lending operation and renders its result as MCP tool
content. Rejected and failed results are returned with ``isError`` set
rather than raised, so the client sees the message.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from ..results import Failed, Ok, Rejected, Result
from ..services.provider import get_lending_service

logger = logging.getLogger(__name__)


class AddBookInput(BaseModel):
    """Input schema for the add_book tool. Field rules are enforced by the service."""

    title: str = Field(
        ...,
        description="Title of the book (1-500 characters)",
        examples=["The Pragmatic Programmer"],
    )
    author: str = Field(
        ...,
        description="Author of the book (1-200 characters)",
        examples=["David Thomas"],
    )
    isbn: str = Field(
        ...,
        description="ISBN of the book",
        examples=["978-0135957059"],
    )


class BookIdInput(BaseModel):
    """Input schema for tools that act on one book."""

    book_id: str = Field(
        ...,
        description="Identifier returned by add_book or list_books",
        examples=["5f0c6a7e-3a53-4c1b-9a43-2b7d0f3f1d0e"],
    )


def _error_response(text: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {
        "isError": True,
        "content": [{"type": "text", "text": text}],
    }
    if data is not None:
        response["data"] = data
    return response


def _render(result: Result, success_text: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    if isinstance(result, Rejected):
        return _error_response(result.message, {"reason": result.reason.value, "errors": result.errors})
    if isinstance(result, Failed):
        return _error_response(result.cause)
    return {
        "content": [{"type": "text", "text": success_text}],
        "data": data or {},
    }


async def add_book_handler(title: str, author: str, isbn: str) -> dict[str, Any]:
    """Handler for the add_book tool."""
    params = {"title": title, "author": author, "isbn": isbn}
    result = get_lending_service().add_book(params)

    if isinstance(result, Ok):
        book = result.value
        return _render(
            result,
            f"Added '{book.title}' by {book.author} with id {book.id}",
            {"book": book.model_dump(by_alias=True)},
        )
    return _render(result, "")


async def list_books_handler() -> dict[str, Any]:
    """Handler for the list_books tool."""
    result = get_lending_service().list_books()

    if isinstance(result, Ok):
        books = result.value
        lines = [
            f"- {book.title} by {book.author} ({'checked out' if book.is_checked_out else 'available'})"
            f" [{book.id}]"
            for book in books
        ]
        text = f"Found {len(books)} book(s)" + ("\n" + "\n".join(lines) if lines else "")
        return _render(result, text, {"books": [b.model_dump(by_alias=True) for b in books]})
    return _render(result, "")


async def checkout_book_handler(book_id: str) -> dict[str, Any]:
    """Handler for the checkout_book tool."""
    result = get_lending_service().checkout_book(book_id)
    return _render(result, "Book checked out successfully", {"book_id": book_id})


async def return_book_handler(book_id: str) -> dict[str, Any]:
    """Handler for the return_book tool."""
    result = get_lending_service().return_book(book_id)
    return _render(result, "Book returned successfully", {"book_id": book_id})


add_book = {
    "name": "add_book",
    "description": (
        "Register a new book. Title, author and ISBN are required; the book is "
        "assigned an id and starts out available."
    ),
    "inputSchema": AddBookInput.model_json_schema(),
    "handler": add_book_handler,
}

list_books = {
    "name": "list_books",
    "description": "List every book in the catalog with its checked-out status.",
    "inputSchema": {"type": "object", "properties": {}},
    "handler": list_books_handler,
}

checkout_book = {
    "name": "checkout_book",
    "description": (
        "Check out a book by id. Fails if the book is already checked out or "
        "does not exist."
    ),
    "inputSchema": BookIdInput.model_json_schema(),
    "handler": checkout_book_handler,
}

return_book = {
    "name": "return_book",
    "description": (
        "Return a checked-out book by id. Fails if the book is not checked out "
        "or does not exist."
    ),
    "inputSchema": BookIdInput.model_json_schema(),
    "handler": return_book_handler,
}
