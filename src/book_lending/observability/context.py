"""Context managers for tracing store operations."""

from contextlib import contextmanager

import logfire


@contextmanager
def trace_store_operation(operation: str, table: str):
    """Wrap a single DynamoDB call in a logfire span."""
    with logfire.span(
        "db.books.{db_operation}",
        db_operation=operation,
        db_table=table,
        db_system="dynamodb",
    ) as span:
        try:
            yield span
        except Exception as e:
            span.set_attribute("db.error", str(e))
            raise
