"""
Command line configuration.

Flags override values from the environment and .env, which override the
defaults in Settings.
"""

import argparse
from typing import Any, Dict, List, Optional

from .settings import VALID_LOG_LEVELS, Settings


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server command."""
    parser = argparse.ArgumentParser(
        prog="awsdac-mcp-server",
        description="AWS Diagram-as-Code MCP server (streamable HTTP transport)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to log file (default: <tmpdir>/awsdac-mcp-server-streamable.log)",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default=None,
        help="Set logging level (default: INFO)",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="HTTP server host (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="HTTP server port (default: 8080)",
    )

    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="HTTP endpoint path (default: /mcp)",
    )

    parser.add_argument(
        "--stateless",
        action="store_true",
        default=None,
        help="Enable stateless mode",
    )

    parser.add_argument(
        "--awsdac-path",
        type=str,
        default=None,
        help="Path to the awsdac executable (default: awsdac on PATH)",
    )

    return parser


# argparse destination -> Settings field
_FLAG_FIELDS = {
    "log_file": "log_file",
    "log_level": "log_level",
    "host": "host",
    "port": "port",
    "endpoint": "endpoint",
    "stateless": "stateless",
    "awsdac_path": "awsdac_path",
}


def load_from_args(settings: Settings, argv: Optional[List[str]] = None) -> Settings:
    """Apply command line flags on top of loaded settings.

    Args:
        settings: Settings loaded from the environment
        argv: Arguments to parse (sys.argv[1:] if None)

    Returns:
        Settings: A new, re-validated settings object

    Raises:
        ConfigurationError: If the combined values are invalid
    """
    args = build_parser().parse_args(argv)

    overrides: Dict[str, Any] = {}
    for dest, field in _FLAG_FIELDS.items():
        value = getattr(args, dest)
        if value is not None:
            overrides[field] = value

    if not overrides:
        return settings
    return Settings(**{**settings.model_dump(), **overrides})
