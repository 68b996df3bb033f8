"""
Book model for the Book Lending service.

A book is the only entity in the system. Callers submit a candidate
(``BookInput``); the service assigns the identifier and the initial
checked-out flag and hands back a stored ``Book``.

Both models use camelCase aliases on the wire (``isCheckedOut``) and accept
snake_case names from Python callers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 500
AUTHOR_MAX_LENGTH = 200


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class BookInput(BaseModel):
    """
    A book as submitted by a caller, before it is stored.

    Every rule is checked per field so that a single validation pass reports
    all violations. Identifier and checked-out values sent by the caller are
    ignored; the service owns both.
    """

    title: str | None = Field(
        default=None,
        validate_default=True,
        description="The title of the book",
        examples=["The Pragmatic Programmer"],
    )

    author: str | None = Field(
        default=None,
        validate_default=True,
        description="The book's author",
        examples=["David Thomas"],
    )

    isbn: str | None = Field(
        default=None,
        validate_default=True,
        description="ISBN of the book (format is not checked)",
        examples=["978-0135957059"],
    )

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        if _is_blank(v):
            raise PydanticCustomError("title_required", "Title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_length", "Title must be between 1 and 500 characters"
            )
        return v

    @field_validator("author", mode="before")
    @classmethod
    def validate_author(cls, v: Any) -> str:
        if _is_blank(v):
            raise PydanticCustomError("author_required", "Author is required")
        if len(v) > AUTHOR_MAX_LENGTH:
            raise PydanticCustomError(
                "author_length", "Author must be between 1 and 200 characters"
            )
        return v

    @field_validator("isbn", mode="before")
    @classmethod
    def validate_isbn(cls, v: Any) -> str:
        if _is_blank(v):
            raise PydanticCustomError("isbn_required", "ISBN is required")
        return v

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "The Pragmatic Programmer",
                "author": "David Thomas",
                "isbn": "978-0135957059",
            }
        },
    )


class Book(BaseModel):
    """A stored book record."""

    id: str = Field(..., min_length=1, description="Service-assigned unique identifier")
    title: str
    author: str
    isbn: str
    is_checked_out: bool = Field(
        default=False,
        description="Whether the book is currently lent out",
    )

    @property
    def is_available(self) -> bool:
        return not self.is_checked_out

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5f0c6a7e-3a53-4c1b-9a43-2b7d0f3f1d0e",
                "title": "The Pragmatic Programmer",
                "author": "David Thomas",
                "isbn": "978-0135957059",
                "isCheckedOut": False,
            }
        },
    )
