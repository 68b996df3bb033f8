"""Configuration management for the Book Lending service.

Settings are loaded from the environment (``BOOK_LENDING_`` prefix) or a
local ``.env`` file. The serverless deployment passes the table name as a
bare ``TABLE_NAME`` variable, so that name is accepted as well.

Only the outer surfaces (MCP server, API Gateway handlers, scripts) read the
process-wide instance returned by :func:`get_config`. The lending core is
always handed its configuration explicitly.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LendingConfig(BaseSettings):
    """Settings for the store connection, the MCP surface and logging."""

    model_config = SettingsConfigDict(
        env_prefix="BOOK_LENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # === Store ===

    table_name: str = Field(
        default="Books",
        description="DynamoDB table holding the book records",
        validation_alias=AliasChoices("table_name", "BOOK_LENDING_TABLE_NAME", "TABLE_NAME"),
        pattern=r"^[a-zA-Z0-9_.-]{3,255}$",
    )

    region_name: str = Field(
        default="us-east-1",
        description="AWS region of the table",
    )

    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint, e.g. DynamoDB Local at http://localhost:8000",
    )

    # === MCP server ===

    server_name: str = Field(
        default="book-lending",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(default="127.0.0.1")

    http_port: int = Field(default=8080, ge=1024, le=65535)

    # === Logging / observability ===

    debug: bool = Field(default=False, description="Enable debug logging")

    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    logfire_enabled: bool = Field(
        default=False,
        description="Configure logfire tracing on startup",
    )

    logfire_token: str | None = Field(
        default=None,
        repr=False,
    )

    environment: str = Field(default="development")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: str | None) -> str | None:
        """Endpoint overrides must be http(s) URLs."""
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("Endpoint URL must start with http:// or https://")
        return v

    @property
    def is_development(self) -> bool:
        return self.debug or self.log_level == "DEBUG"

    @property
    def uses_local_store(self) -> bool:
        """True when pointed at a DynamoDB Local style endpoint."""
        return self.endpoint_url is not None


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LendingConfig | None = None


def get_config() -> LendingConfig:
    """Get or create the process-wide configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LendingConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Drop the cached configuration (used by tests)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
