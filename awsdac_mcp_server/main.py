"""
Server entry point.

Loads settings (environment, then command line), configures the log file
and serves the application with uvicorn.
"""

import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from .api.main import create_app
from .config import Settings, load_from_args
from .core.exceptions import ConfigurationError
from .utils.logging import configure_logging, get_structured_logger

logger = get_structured_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the server until interrupted.

    Returns:
        int: Process exit status
    """
    try:
        settings = load_from_args(Settings(), argv)
    except (ConfigurationError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        log_file = configure_logging(
            settings.log_level,
            log_file=settings.log_file,
            console=settings.log_to_console,
        )
    except OSError as e:
        print(f"Failed to open log file: {e}", file=sys.stderr)
        return 1

    app = create_app(settings)
    logger.info(
        "Starting MCP server",
        host=settings.host,
        port=settings.port,
        endpoint=settings.endpoint,
        stateless=settings.stateless,
        log_file=log_file,
    )

    try:
        # log_config=None keeps uvicorn on the handlers configured above
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except SystemExit as e:
        # uvicorn exits this way when it cannot bind or start the app
        logger.error("Server failed", exit_code=e.code)
        return e.code if isinstance(e.code, int) and e.code != 0 else 1

    logger.info("Server shut down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
