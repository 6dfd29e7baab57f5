"""Application configuration via environment variables with Pydantic validation.

All configuration is loaded from environment variables (with .env file support).
Every value has a default, so the server starts with no configuration at all;
invalid values fail loudly at startup.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_TRANSPORTS = ("stdio", "http", "sse")
VALID_LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Tailscale MCP settings. All values sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # External CLI, resolved through PATH unless an absolute path is given
    tailscale_binary: str = "tailscale"

    # MCP Server
    mcp_server_name: str = "tailscale"
    mcp_server_version: str = "0.0.1"
    mcp_transport: str = "stdio"
    mcp_server_host: str = "127.0.0.1"
    mcp_server_port: int = 8001

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("tailscale_binary")
    @classmethod
    def binary_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("TAILSCALE_BINARY must not be empty")
        return v.strip()

    @field_validator("mcp_transport")
    @classmethod
    def transport_supported(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_TRANSPORTS:
            raise ValueError(f"MCP_TRANSPORT must be one of {', '.join(VALID_TRANSPORTS)}")
        return v

    @field_validator("mcp_server_port")
    @classmethod
    def port_in_range(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("MCP_SERVER_PORT must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL is not a valid level: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def log_format_known(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {', '.join(VALID_LOG_FORMATS)}")
        return v


def get_settings() -> Settings:
    """Create and return a validated Settings instance.

    Raises ValidationError with clear messages if an env var is invalid.
    """
    return Settings()
