"""Process-wide service instance for the outer surfaces."""

from ..config import get_config
from .lending_service import LendingService

_service: LendingService | None = None


def get_lending_service() -> LendingService:
    """
    Get the shared lending service, building it from the global config.

    Serverless containers and the MCP server reuse one instance so that the
    boto3 handles are created once per process.
    """
    global _service  # noqa: PLW0603

    if _service is None:
        _service = LendingService.from_config(get_config())
    return _service


def set_lending_service(service: LendingService | None) -> None:
    """Install (or clear, with ``None``) the shared service; used by tests."""
    global _service  # noqa: PLW0603
    _service = service
