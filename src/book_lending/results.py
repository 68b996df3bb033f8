"""
Result values returned by the lending operations.

Every operation answers with exactly one of three kinds:

- ``Ok``: the operation happened; ``value`` carries the payload, if any
- ``Rejected``: the request was refused for an expected reason (field rule
  violations, or a conditional write whose precondition did not hold)
- ``Failed``: the store could not be reached or answered with an error

Callers switch on ``kind`` (or ``isinstance``) to pick a response; the
status codes themselves belong to the surface that renders the result.
"""

import enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from .database.repository import ConditionFailedError, RepositoryException

T = TypeVar("T")


class Operation(str, enum.Enum):
    ADD = "add"
    LIST = "list"
    CHECKOUT = "checkout"
    RETURN = "return"


class RejectionReason(str, enum.Enum):
    VALIDATION = "validation"
    NOT_AVAILABLE = "not_available"


NOT_AVAILABLE_MESSAGES = {
    Operation.CHECKOUT: "Book is already checked out or does not exist",
    Operation.RETURN: "Book is not checked out or does not exist",
}

FAILURE_MESSAGES = {
    Operation.ADD: "Could not add book",
    Operation.LIST: "Could not retrieve books",
    Operation.CHECKOUT: "Could not checkout book",
    Operation.RETURN: "Could not return book",
}


class Ok(BaseModel, Generic[T]):
    kind: Literal["ok"] = "ok"
    value: T | None = None


class Rejected(BaseModel):
    kind: Literal["rejected"] = "rejected"
    reason: RejectionReason
    errors: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


class Failed(BaseModel):
    kind: Literal["failed"] = "failed"
    operation: Operation
    cause: str = Field(..., description="Generic, caller-safe failure message")
    detail: str | None = Field(
        default=None,
        description="Underlying store error text, for logs only",
        repr=False,
    )


Result = Ok[Any] | Rejected | Failed


def validation_rejected(errors: list[str]) -> Rejected:
    return Rejected(reason=RejectionReason.VALIDATION, errors=errors)


def not_available(operation: Operation) -> Rejected:
    return Rejected(
        reason=RejectionReason.NOT_AVAILABLE,
        errors=[NOT_AVAILABLE_MESSAGES[operation]],
    )


def project_store_error(operation: Operation, error: RepositoryException) -> Rejected | Failed:
    """
    Map a store-layer exception onto a result.

    A failed condition becomes ``Rejected(NOT_AVAILABLE)``. The store cannot
    tell a missing record from one in the wrong state, so neither can this.
    Everything else is an opaque ``Failed``.
    """
    if isinstance(error, ConditionFailedError) and operation in NOT_AVAILABLE_MESSAGES:
        return not_available(operation)
    return Failed(operation=operation, cause=FAILURE_MESSAGES[operation], detail=str(error))
