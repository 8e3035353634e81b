"""
Logging configuration for the server.

Provides the file-based operational log used by the gateway and a small
adapter that keeps the "structured" call style (e.g.,
logger.info("msg", key=value)). Keyword arguments are flattened into a single
formatted string and handed to the standard Python logging backend, whose
handlers are safe for concurrent writers.
"""

import logging
import sys
import tempfile
from pathlib import Path
from typing import Dict, Any, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_FILENAME = "awsdac-mcp-server-streamable.log"


def default_log_file() -> str:
    """Return the log destination used when none is configured."""
    return str(Path(tempfile.gettempdir()) / DEFAULT_LOG_FILENAME)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = False,
) -> str:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the append-only log file (temp dir default)
        console: Also mirror log records to stderr

    Returns:
        str: The log file actually in use

    Raises:
        ValueError: If the level name is unknown
        OSError: If the log file cannot be opened
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    actual_log_file = log_file or default_log_file()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.FileHandler(actual_log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    for logger_name in ("uvicorn", "uvicorn.error", "fastapi", "awsdac_mcp_server"):
        logging.getLogger(logger_name).setLevel(numeric_level)

    # Access lines duplicate our own request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info(f"Logging configured with level: {level}")
    return actual_log_file


class StructuredLoggerAdapter:
    """Lightweight adapter to allow logger.info("msg", key=value) usage.

    Converts keyword arguments into a simple " key=value" suffix appended to the
    log message and forwards to the standard library logger.
    """

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    @property
    def name(self) -> str:
        return self._logger.name

    @staticmethod
    def _merge_message(msg: str, kwargs: Dict[str, Any]) -> str:
        if not kwargs:
            return msg
        suffix_parts = []
        for k, v in kwargs.items():
            try:
                text = str(v)
            except Exception:
                text = repr(v)
            suffix_parts.append(f"{k}={text}")
        return f"{msg} | " + " ".join(suffix_parts)

    def debug(self, msg: str, *args: Any, exc_info: Optional[bool] = None, stack_info: bool = False, stacklevel: int = 1, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.debug(self._merge_message(msg, kwargs), *args, exc_info=exc_info, stack_info=stack_info, stacklevel=stacklevel, extra=extra)

    def info(self, msg: str, *args: Any, exc_info: Optional[bool] = None, stack_info: bool = False, stacklevel: int = 1, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.info(self._merge_message(msg, kwargs), *args, exc_info=exc_info, stack_info=stack_info, stacklevel=stacklevel, extra=extra)

    def warning(self, msg: str, *args: Any, exc_info: Optional[bool] = None, stack_info: bool = False, stacklevel: int = 1, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.warning(self._merge_message(msg, kwargs), *args, exc_info=exc_info, stack_info=stack_info, stacklevel=stacklevel, extra=extra)

    def error(self, msg: str, *args: Any, exc_info: Optional[bool] = None, stack_info: bool = False, stacklevel: int = 1, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.error(self._merge_message(msg, kwargs), *args, exc_info=exc_info, stack_info=stack_info, stacklevel=stacklevel, extra=extra)


def get_structured_logger(name: str) -> StructuredLoggerAdapter:
    """Get a structured logger adapter that supports key=value kwargs.

    Args:
        name: Logger name

    Returns:
        StructuredLoggerAdapter
    """
    return StructuredLoggerAdapter(logging.getLogger(name))
