"""Test configuration and fixtures for the Book Lending service.

The store is replaced by ``FakeBooksTable``, an in-memory stand-in for a
boto3 ``Table`` resource. It evaluates the same key scheme, scan filter and
condition expressions the repository sends, and raises botocore
``ClientError`` the way DynamoDB does, so the lending state machine can be
tested without a network.
"""

import os
import re
import threading
from collections.abc import Generator
from typing import Any

import pytest
from botocore.exceptions import ClientError

from book_lending.config import LendingConfig, reset_config
from book_lending.database import BookRepository
from book_lending.services import LendingService, set_lending_service

# === Fake DynamoDB table ===


def _split_top_level(expression: str, separator: str) -> list[str]:
    parts, depth, start = [], 0, 0
    i = 0
    while i < len(expression):
        char = expression[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and expression.startswith(separator, i):
            parts.append(expression[start:i])
            i += len(separator)
            start = i
            continue
        i += 1
    parts.append(expression[start:])
    return [part.strip() for part in parts]


def _strip_parens(expression: str) -> str:
    expression = expression.strip()
    while expression.startswith("(") and expression.endswith(")"):
        depth = 0
        for i, char in enumerate(expression):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            if depth == 0 and i < len(expression) - 1:
                # the leading paren closes before the end
                return expression
        expression = expression[1:-1].strip()
    return expression


def evaluate_condition(expression: str, item: dict[str, Any], values: dict[str, Any]) -> bool:
    """Evaluate the subset of DynamoDB condition syntax the repository uses."""
    expression = _strip_parens(expression)

    clauses = _split_top_level(expression, " OR ")
    if len(clauses) > 1:
        return any(evaluate_condition(clause, item, values) for clause in clauses)

    clauses = _split_top_level(expression, " AND ")
    if len(clauses) > 1:
        return all(evaluate_condition(clause, item, values) for clause in clauses)

    if match := re.fullmatch(r"attribute_exists\((\w+)\)", expression):
        return match.group(1) in item
    if match := re.fullmatch(r"attribute_not_exists\((\w+)\)", expression):
        return match.group(1) not in item
    if match := re.fullmatch(r"begins_with\((\w+), (:\w+)\)", expression):
        value = item.get(match.group(1))
        return isinstance(value, str) and value.startswith(values[match.group(2)])
    if match := re.fullmatch(r"(\w+) = (:\w+)", expression):
        # comparisons against a missing attribute are false
        return match.group(1) in item and item[match.group(1)] == values[match.group(2)]
    raise AssertionError(f"Unsupported expression in fake table: {expression}")


def client_error(code: str, operation: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeBooksTable:
    """In-memory stand-in for a boto3 DynamoDB ``Table``."""

    def __init__(self, name: str = "TestBooks", page_size: int | None = None):
        self.name = name
        self.page_size = page_size
        self.items: dict[tuple[str, str], dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.errors: dict[str, Exception] = {}
        # stands in for DynamoDB's per-item atomicity
        self._lock = threading.Lock()

    def fail_next(self, operation: str, error: Exception) -> None:
        """Make the next call to ``operation`` raise ``error``."""
        self.errors[operation] = error

    def _enter(self, operation: str, kwargs: dict[str, Any]) -> None:
        self.calls.append((operation, kwargs))
        if operation in self.errors:
            raise self.errors.pop(operation)

    @staticmethod
    def _key(key: dict[str, Any]) -> tuple[str, str]:
        return key["PK"], key["SK"]

    def put_item(self, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]:  # noqa: N803
        with self._lock:
            self._enter("put_item", {"Item": Item, **kwargs})
            self.items[self._key(Item)] = dict(Item)
        return {}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        with self._lock:
            self._enter("scan", kwargs)
            candidates = list(self.items.items())

        start_key = kwargs.get("ExclusiveStartKey")
        if start_key:
            keys = [key for key, _ in candidates]
            candidates = candidates[keys.index(self._key(start_key)) + 1 :]

        response: dict[str, Any] = {}
        if self.page_size is not None and len(candidates) > self.page_size:
            candidates = candidates[: self.page_size]
            last_key = candidates[-1][0]
            response["LastEvaluatedKey"] = {"PK": last_key[0], "SK": last_key[1]}

        expression = kwargs.get("FilterExpression")
        values = kwargs.get("ExpressionAttributeValues", {})
        items = [
            dict(item)
            for _, item in candidates
            if expression is None or evaluate_condition(expression, item, values)
        ]
        response.update({"Items": items, "Count": len(items)})
        return response

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        with self._lock:
            self._enter("update_item", kwargs)
            key = self._key(kwargs["Key"])
            values = kwargs.get("ExpressionAttributeValues", {})
            item = self.items.get(key, {})

            condition = kwargs.get("ConditionExpression")
            if condition and not evaluate_condition(condition, item, values):
                raise client_error(
                    "ConditionalCheckFailedException",
                    "UpdateItem",
                    "The conditional request failed",
                )

            match = re.fullmatch(r"SET (\w+) = (:\w+)", kwargs["UpdateExpression"])
            assert match, kwargs["UpdateExpression"]
            updated = {**kwargs["Key"], **item, match.group(1): values[match.group(2)]}
            self.items[key] = updated
        return {}

    def seed(self, item: dict[str, Any]) -> None:
        """Insert a raw item, bypassing the repository."""
        self.items[self._key(item)] = dict(item)


# === Store fixtures ===


@pytest.fixture
def fake_table() -> FakeBooksTable:
    return FakeBooksTable()


@pytest.fixture
def book_repository(fake_table: FakeBooksTable) -> BookRepository:
    return BookRepository(fake_table)


@pytest.fixture
def lending_service(book_repository: BookRepository) -> LendingService:
    return LendingService(book_repository)


@pytest.fixture
def installed_service(lending_service: LendingService) -> Generator[LendingService, None, None]:
    """Install the test service as the process-wide instance used by the surfaces."""
    set_lending_service(lending_service)
    yield lending_service
    set_lending_service(None)


@pytest.fixture
def valid_book_data() -> dict[str, str]:
    return {"title": "T", "author": "A", "isbn": "123"}


# === Configuration fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide an environment without BOOK_LENDING_* or TABLE_NAME variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("BOOK_LENDING_") or key == "TABLE_NAME":
            del os.environ[key]

    reset_config()
    yield
    reset_config()

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_config(clean_env) -> LendingConfig:
    return LendingConfig(
        table_name="TestBooks",
        endpoint_url="http://localhost:8000",
        server_name="test-book-lending",
        debug=True,
        log_level="DEBUG",
    )
