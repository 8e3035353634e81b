"""
Application settings and configuration.

Loads configuration from environment variables (prefix AWSDAC_MCP_) and an
optional .env file, with sensible defaults. Command line flags are applied
on top by config.loaders.
"""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from ..core.protocol.mcp_constants import DEFAULT_MCP_ENDPOINT, DEFAULT_MCP_HOST, DEFAULT_MCP_PORT

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AWSDAC_MCP_",
        env_file=".env",
        extra="ignore",
    )

    # HTTP transport
    host: str = Field(default=DEFAULT_MCP_HOST)
    port: int = Field(default=DEFAULT_MCP_PORT)
    endpoint: str = Field(default=DEFAULT_MCP_ENDPOINT, description="Path of the MCP endpoint")
    stateless: bool = Field(default=False, description="Serve without sessions")

    # Logging
    log_file: Optional[str] = Field(default=None, description="Log file path (temp dir default)")
    log_level: str = Field(default="INFO")
    log_to_console: bool = Field(default=False, description="Mirror the log to stderr")

    # CORS
    cors_origin: Optional[str] = Field(
        default=None,
        description="Allowed origin (defaults to http://localhost:<port>)"
    )

    # Rendering
    awsdac_path: str = Field(default="awsdac", description="awsdac executable")
    render_timeout: float = Field(default=120)
    scratch_dir: Optional[str] = Field(default=None, description="Parent directory of scratch workspaces")
    scratch_prefix: str = Field(default="awsdac-mcp")

    @model_validator(mode="after")
    def _validate(self) -> "Settings":
        if not 1 <= self.port <= 65535:
            raise ConfigurationError("port", f"must be between 1 and 65535, got {self.port}")
        if not self.endpoint.startswith("/"):
            raise ConfigurationError("endpoint", f"must start with '/', got '{self.endpoint}'")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                "log_level",
                f"must be one of {', '.join(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )
        if self.render_timeout <= 0:
            raise ConfigurationError("render_timeout", "must be positive")
        return self

    @property
    def allowed_origin(self) -> str:
        """Origin sent in Access-Control-Allow-Origin."""
        return self.cors_origin or f"http://localhost:{self.port}"
