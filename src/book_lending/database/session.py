"""
DynamoDB connection management for the Book Lending service.

``TableManager`` owns the boto3 session, resource and ``Table`` handle for
one configuration. Handles are created lazily and reused, which suits both a
long-running MCP server and warm serverless containers.
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import LendingConfig
from .schema import TABLE_DEFINITION

logger = logging.getLogger(__name__)


class TableManager:
    """Creates and caches the DynamoDB handles for a configuration."""

    def __init__(self, config: LendingConfig):
        self.config = config
        self._resource: Any | None = None
        self._table: Any | None = None

    @property
    def resource(self) -> Any:
        """The boto3 DynamoDB service resource."""
        if self._resource is None:
            session = boto3.session.Session(region_name=self.config.region_name)
            self._resource = session.resource("dynamodb", endpoint_url=self.config.endpoint_url)
            if self.config.uses_local_store:
                logger.info("Using DynamoDB endpoint at: %s", self.config.endpoint_url)
        return self._resource

    @property
    def table(self) -> Any:
        """The ``Table`` handle for the configured table name."""
        if self._table is None:
            self._table = self.resource.Table(self.config.table_name)
        return self._table

    def create_table(self) -> Any:
        """
        Provision the books table and wait until it is active.

        Intended for local development against DynamoDB Local; deployed
        tables are provisioned by infrastructure code.
        """
        logger.info("Creating table %s...", self.config.table_name)
        table = self.resource.create_table(TableName=self.config.table_name, **TABLE_DEFINITION)
        table.wait_until_exists()
        self._table = table
        logger.info("Table %s is ready", self.config.table_name)
        return table

    def verify_connection(self) -> bool:
        """
        Check that the table is reachable.

        Returns:
            True if the table description could be loaded, False otherwise
        """
        try:
            self.table.load()
            logger.info("Table %s reachable", self.config.table_name)
            return True
        except (ClientError, BotoCoreError):
            logger.exception("Table %s not reachable", self.config.table_name)
            return False

    def close(self) -> None:
        """Drop cached handles."""
        self._table = None
        self._resource = None
