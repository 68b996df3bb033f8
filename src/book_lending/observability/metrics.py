"""Custom metrics for the Book Lending service."""

import logfire

lending_outcomes = logfire.metric_counter(
    "lending.outcomes", description="Lending operation results by operation and kind"
)


def record_outcome(operation: str, kind: str) -> None:
    """Count one operation result."""
    lending_outcomes.add(1, {"operation": operation, "kind": kind})
