"""Logging and logfire observability for the Book Lending service."""

import logging
import sys

import logfire

from ..config import LendingConfig
from .context import trace_store_operation
from .metrics import record_outcome

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def initialize_observability(config: LendingConfig) -> None:
    """Set up stdlib logging and, when enabled, logfire."""
    # stderr keeps stdout clean for the stdio MCP transport
    logging.basicConfig(
        level=logging.DEBUG if config.debug else config.log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if not config.logfire_enabled:
        logger.debug("Logfire disabled via configuration")
        return

    logfire.configure(
        token=config.logfire_token,
        service_name=config.server_name,
        service_version=config.server_version,
        environment=config.environment,
        send_to_logfire="if-token-present",
        console=False,
    )
    logger.info("Logfire configured for environment %s", config.environment)


__all__ = [
    "initialize_observability",
    "record_outcome",
    "trace_store_operation",
]
