"""
Book Lending package.

Registers books, lists them, and toggles their checked-out flag with
conditional writes against a DynamoDB table.

Key Components:
- models: Book entity and candidate validation
- database: DynamoDB item layout, repository and connection handling
- services: the lending operations
- results: Ok / Rejected / Failed outcome values
- tools, server: MCP surface
- handlers: API Gateway surface
"""

__version__ = "0.1.0"
