"""
Store-layer exceptions and the guarded call helper.

``store_safe_call`` is the single place where botocore errors are inspected.
Everything above the repository only sees this module's exception types.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from ..observability import trace_store_operation

logger = logging.getLogger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

T = TypeVar("T")


class RepositoryException(Exception):
    """Base exception for store operations."""


class ConditionFailedError(RepositoryException):
    """Raised when a conditional write's predicate does not hold."""


class StoreError(RepositoryException):
    """Raised for any other store-communication or decoding error."""


def is_conditional_check_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


def store_safe_call(table_name: str, operation: str, call: Callable[[], T]) -> T:
    """
    Run one store call, translating botocore errors.

    Args:
        table_name: Table the call targets (for tracing)
        operation: Short operation name, e.g. ``"update_item"``
        call: Zero-argument callable performing the request

    Returns:
        Whatever ``call`` returns

    Raises:
        ConditionFailedError: The request's condition expression was false
        StoreError: Any other client or transport error
    """
    with trace_store_operation(operation, table_name):
        try:
            return call()
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise ConditionFailedError(f"Condition failed for {operation}") from e
            logger.exception("DynamoDB %s failed", operation)
            raise StoreError(f"{operation} failed: {e!s}") from e
        except BotoCoreError as e:
            logger.exception("DynamoDB %s failed", operation)
            raise StoreError(f"{operation} failed: {e!s}") from e
