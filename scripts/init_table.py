#!/usr/bin/env python3
"""
Provision the book table for local development.

This script:
1. Creates the table with the PK/SK key schema (unless it already exists)
2. Optionally loads a few sample books through the lending service
3. Verifies the table is reachable

Usage:
    python scripts/init_table.py [--endpoint-url http://localhost:8000] [--sample-data]
"""

import argparse
import logging
import sys

from botocore.exceptions import ClientError

from book_lending.config import LendingConfig
from book_lending.database import BookRepository, TableManager
from book_lending.observability import initialize_observability
from book_lending.results import Ok
from book_lending.services import LendingService

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {"title": "The Pragmatic Programmer", "author": "David Thomas", "isbn": "978-0135957059"},
    {"title": "Designing Data-Intensive Applications", "author": "Martin Kleppmann", "isbn": "978-1449373320"},
    {"title": "Refactoring", "author": "Martin Fowler", "isbn": "978-0134757599"},
]


def main():
    """Main entry point for table initialization."""
    parser = argparse.ArgumentParser(description="Initialize the book lending table")
    parser.add_argument("--endpoint-url", help="Override the DynamoDB endpoint")
    parser.add_argument("--table-name", help="Override the table name")
    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample books after creating the table",
    )
    args = parser.parse_args()

    overrides = {}
    if args.endpoint_url:
        overrides["endpoint_url"] = args.endpoint_url
    if args.table_name:
        overrides["table_name"] = args.table_name
    config = LendingConfig(**overrides)
    initialize_observability(config)

    manager = TableManager(config)
    try:
        manager.create_table()
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") != "ResourceInUseException":
            logger.exception("Failed to create table %s", config.table_name)
            sys.exit(1)
        logger.info("Table %s already exists", config.table_name)

    if not manager.verify_connection():
        sys.exit(1)

    if args.sample_data:
        service = LendingService(BookRepository(manager.table))
        for candidate in SAMPLE_BOOKS:
            result = service.add_book(candidate)
            if not isinstance(result, Ok):
                logger.error("Could not add sample book %s: %s", candidate["title"], result)
                sys.exit(1)
        logger.info("Added %d sample books", len(SAMPLE_BOOKS))


if __name__ == "__main__":
    main()
