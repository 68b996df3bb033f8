"""
DynamoDB item layout for book records.

Each book is one item under a two-part key::

    PK = "BOOK#" + id
    SK = "METADATA#" + id

The ``METADATA#`` sort-key prefix marks top-level book records, leaving the
rest of the partition free for per-book sub-records. Listing filters on that
prefix. The attribute names below are shared with existing data and must not
change.
"""

from typing import Any

from ..models.book import Book

PARTITION_KEY = "PK"
SORT_KEY = "SK"

BOOK_PREFIX = "BOOK#"
METADATA_PREFIX = "METADATA#"

ID = "Id"
TITLE = "Title"
AUTHOR = "Author"
ISBN = "ISBN"
IS_CHECKED_OUT = "IsCheckedOut"

RETURN_CONDITION = f"attribute_exists({PARTITION_KEY}) AND {IS_CHECKED_OUT} = :expected"
# a record without the flag reads as not checked out, so it may be checked out
CHECKOUT_CONDITION = (
    f"attribute_exists({PARTITION_KEY}) AND "
    f"({IS_CHECKED_OUT} = :expected OR attribute_not_exists({IS_CHECKED_OUT}))"
)
CHECKED_OUT_UPDATE = f"SET {IS_CHECKED_OUT} = :value"
METADATA_FILTER = f"begins_with({SORT_KEY}, :metadata)"

TABLE_DEFINITION: dict[str, Any] = {
    "KeySchema": [
        {"AttributeName": PARTITION_KEY, "KeyType": "HASH"},
        {"AttributeName": SORT_KEY, "KeyType": "RANGE"},
    ],
    "AttributeDefinitions": [
        {"AttributeName": PARTITION_KEY, "AttributeType": "S"},
        {"AttributeName": SORT_KEY, "AttributeType": "S"},
    ],
    "BillingMode": "PAY_PER_REQUEST",
}


def book_key(book_id: str) -> dict[str, str]:
    return {
        PARTITION_KEY: f"{BOOK_PREFIX}{book_id}",
        SORT_KEY: f"{METADATA_PREFIX}{book_id}",
    }


def to_item(book: Book) -> dict[str, Any]:
    """Encode a book as a DynamoDB item (resource-level types)."""
    return {
        **book_key(book.id),
        ID: book.id,
        TITLE: book.title,
        AUTHOR: book.author,
        ISBN: book.isbn,
        IS_CHECKED_OUT: book.is_checked_out,
    }


def from_item(item: dict[str, Any]) -> Book:
    """
    Decode a DynamoDB item into a book.

    Items written before the flag existed carry no ``IsCheckedOut``; those
    read as not checked out.

    Raises:
        KeyError: A required attribute is missing
        pydantic.ValidationError: An attribute has the wrong type
    """
    return Book(
        id=item[ID],
        title=item[TITLE],
        author=item[AUTHOR],
        isbn=item[ISBN],
        is_checked_out=bool(item.get(IS_CHECKED_OUT, False)),
    )


def put_book_request(book: Book) -> dict[str, Any]:
    """Unconditional write of a freshly identified book."""
    return {"Item": to_item(book)}


def scan_books_request(exclusive_start_key: dict[str, Any] | None = None) -> dict[str, Any]:
    request: dict[str, Any] = {
        "FilterExpression": METADATA_FILTER,
        "ExpressionAttributeValues": {":metadata": METADATA_PREFIX},
    }
    if exclusive_start_key:
        request["ExclusiveStartKey"] = exclusive_start_key
    return request


def set_checked_out_request(book_id: str, checked_out: bool) -> dict[str, Any]:
    """
    Conditional flip of ``IsCheckedOut`` to ``checked_out``.

    Existence and the old value are tested in the same condition, so two
    racing requests on one record cannot both succeed.
    """
    return {
        "Key": book_key(book_id),
        "UpdateExpression": CHECKED_OUT_UPDATE,
        "ConditionExpression": CHECKOUT_CONDITION if checked_out else RETURN_CONDITION,
        "ExpressionAttributeValues": {
            ":value": checked_out,
            ":expected": not checked_out,
        },
    }
