"""Lending operations exposed to the MCP and API Gateway surfaces."""

from .lending_service import LendingService, new_book_id
from .provider import get_lending_service, set_lending_service

__all__ = [
    "LendingService",
    "get_lending_service",
    "new_book_id",
    "set_lending_service",
]
