"""
MCP tools for the Book Lending server.

Each tool is a dictionary with name, description, input schema and handler;
the server registers everything in ``all_tools``.
"""

from .lending import add_book, checkout_book, list_books, return_book

all_tools = [
    add_book,
    list_books,
    checkout_book,
    return_book,
]

__all__ = [
    "add_book",
    "all_tools",
    "checkout_book",
    "list_books",
    "return_book",
]
