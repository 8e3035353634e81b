"""Fault boundary around tool handlers.

Every registered handler is wrapped here. A wrapped handler always returns
exactly one ToolResult:

- the handler's own result, unchanged;
- an Error result carrying the message of a ToolError the handler raised;
- a generic Error result when anything else escapes the handler. The full
  diagnostic context goes to the operational log only.

Nothing raised inside a handler reaches the transport or other in-flight
invocations.
"""

import traceback
from functools import wraps
from typing import Any, Dict

from ...utils.logging import StructuredLoggerAdapter
from ..exceptions import ToolError
from .tool_interface import ErrorKind, ToolContext, ToolHandler, ToolResult

RECOVERED_FAULT_MESSAGE = (
    "An unexpected error occurred while processing your request.\n\n"
    "The server has recovered and is ready to process new requests.\n"
    "Please check the server logs for detailed diagnostic information."
)


class FaultBoundary:
    """Wraps handlers so faults become caller-safe error results."""

    def __init__(self, logger: StructuredLoggerAdapter) -> None:
        """Initialize the boundary.

        Args:
            logger: Operational log receiving fault diagnostics
        """
        self.logger = logger

    def wrap(self, handler_name: str, handler: ToolHandler) -> ToolHandler:
        """Return handler wrapped in the fault boundary.

        Args:
            handler_name: Name recorded in fault diagnostics
            handler: The handler to protect
        """

        @wraps(handler)
        async def isolated(arguments: Dict[str, Any], context: ToolContext) -> ToolResult:
            try:
                result = await handler(arguments, context)
                if not isinstance(result, ToolResult):
                    raise TypeError(
                        f"handler returned {type(result).__name__}, expected ToolResult"
                    )
                return result
            except ToolError as e:
                self.logger.info(
                    "Tool reported error",
                    handler=handler_name,
                    request_id=context.request_id,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return ToolResult.error(str(e), ErrorKind.REPORTED)
            except Exception as e:
                self.logger.error(
                    f"Fault recovered in handler: {e!r}\nStack trace:\n{traceback.format_exc()}",
                    handler=handler_name,
                    tool=context.tool_name,
                    request_id=context.request_id,
                    session_id=context.session_id,
                    exception_type=type(e).__name__,
                )
                return ToolResult.error(RECOVERED_FAULT_MESSAGE, ErrorKind.RECOVERED)

        return isolated
