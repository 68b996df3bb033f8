"""Tests for server construction and observability setup."""

import logging

import pytest

from book_lending.database import StoreError
from book_lending.observability import initialize_observability, trace_store_operation
from book_lending.server import create_server
from tests.conftest import client_error


class TestServer:
    def test_create_server_uses_config(self, test_config):
        mcp = create_server(test_config)

        assert mcp.name == "test-book-lending"

    def test_servers_are_independent(self, test_config):
        assert create_server(test_config) is not create_server(test_config)


class TestObservability:
    def test_initialize_without_logfire(self, test_config, monkeypatch):
        configured = []
        monkeypatch.setattr("book_lending.observability.logfire.configure", lambda **kw: configured.append(kw))

        initialize_observability(test_config)

        assert configured == []

    def test_initialize_with_logfire(self, test_config, monkeypatch):
        configured = []
        monkeypatch.setattr("book_lending.observability.logfire.configure", lambda **kw: configured.append(kw))
        config = test_config.model_copy(update={"logfire_enabled": True, "environment": "test"})

        initialize_observability(config)

        assert len(configured) == 1
        assert configured[0]["service_name"] == "test-book-lending"
        assert configured[0]["environment"] == "test"
        assert configured[0]["send_to_logfire"] == "if-token-present"

    def test_trace_reraises(self):
        with pytest.raises(ValueError, match="boom"), trace_store_operation("scan", "TestBooks"):
            raise ValueError("boom")

    def test_store_failure_is_logged(self, book_repository, fake_table, caplog):
        fake_table.fail_next("scan", client_error("InternalServerError", "Scan"))

        with caplog.at_level(logging.ERROR), pytest.raises(StoreError):
            book_repository.scan_books()

        assert any(record.getMessage() == "DynamoDB scan failed" for record in caplog.records)
