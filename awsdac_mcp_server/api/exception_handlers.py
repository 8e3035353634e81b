"""
Exception handlers for the FastAPI application.

Errors inside an MCP message are answered in JSON-RPC form by the mcp
library and never reach these handlers. What does reach them is an
exception escaping a plain route (health) or the MCP endpoint itself.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import ConfigurationError, MCPException
from ..utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


async def mcp_exception_handler(request: Request, exc: MCPException) -> JSONResponse:
    """Handle MCP exceptions and convert to appropriate HTTP responses."""

    logger.warning(
        "MCP exception occurred",
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        details=exc.details,
        path=request.url.path,
    )

    status_map = {
        ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    status_code = status_map.get(type(exc), status.HTTP_400_BAD_REQUEST)

    error_detail = {
        "error": type(exc).__name__,
        "message": str(exc),
        "details": exc.details,
    }
    if exc.__cause__:
        error_detail["cause"] = str(exc.__cause__)

    return JSONResponse(status_code=status_code, content=error_detail)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""

    logger.error(
        "Unexpected exception occurred",
        exception_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "type": "InternalServerError",
                "message": "An unexpected error occurred",
            }
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(MCPException, mcp_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
