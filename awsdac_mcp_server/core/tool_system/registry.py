"""Tool registry and dispatch.

The registry maps tool names to descriptors and fault-isolated handlers.
It is filled once during application startup and frozen before the first
request is served; afterwards it is only read, so concurrent requests can
resolve tools without locking.
"""

import asyncio
from typing import Dict, List, Optional

from ...utils.logging import StructuredLoggerAdapter, get_structured_logger
from ...utils.timing import track_async_operation
from ..exceptions import ArgumentError, ConfigurationError, DuplicateToolError, UnknownToolError
from .arguments import validate_arguments
from .isolation import FaultBoundary
from .tool_interface import (
    InvocationRequest,
    LogSink,
    Tool,
    ToolContext,
    ToolDescriptor,
    ToolHandler,
    ToolResult,
)


class ToolRegistry:
    """Dispatch table for the tools served by the gateway."""

    def __init__(self, logger: Optional[StructuredLoggerAdapter] = None) -> None:
        """Initialize an empty registry.

        Args:
            logger: Operational log used for dispatch and fault diagnostics
        """
        self.logger = logger or get_structured_logger(__name__)
        self.fault_boundary = FaultBoundary(self.logger)
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._handlers: Dict[str, ToolHandler] = {}
        self._frozen = False

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """Add a tool.

        Args:
            descriptor: The tool's name and parameter schema
            handler: Async handler invoked for calls to the tool

        Raises:
            DuplicateToolError: If the name is already registered
            ConfigurationError: If the registry has been frozen
        """
        if self._frozen:
            raise ConfigurationError(
                "tools", f"cannot register '{descriptor.name}' after startup"
            )
        if descriptor.name in self._descriptors:
            raise DuplicateToolError(descriptor.name)

        self._descriptors[descriptor.name] = descriptor
        self._handlers[descriptor.name] = self.fault_boundary.wrap(descriptor.name, handler)
        self.logger.info(
            "Registered tool",
            name=descriptor.name,
            parameters=[spec.name for spec in descriptor.parameters],
        )

    def register_tool(self, tool: Tool) -> None:
        """Register a Tool object under its descriptor's name."""
        self.register(tool.get_descriptor(), tool.execute)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True
        self.logger.info("Tool registry frozen", tools=len(self._descriptors))

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> ToolHandler:
        """Return the fault-isolated handler for a tool.

        Raises:
            UnknownToolError: If no tool has that name
        """
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def get_descriptor(self, name: str) -> ToolDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_descriptors(self) -> List[ToolDescriptor]:
        """Descriptors in registration order."""
        return list(self._descriptors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    async def dispatch(
        self,
        request: InvocationRequest,
        log_sink: Optional[LogSink] = None
    ) -> ToolResult:
        """Resolve, validate and invoke one tool call.

        Args:
            request: The decoded call
            log_sink: Receiver for log notifications addressed to the caller

        Returns:
            ToolResult: Exactly one result for the call

        Raises:
            UnknownToolError: The tool name is not registered
            ArgumentError: The argument bag fails validation
        """
        self.logger.info("beforeAny", method="tools/call", tool=request.name, request_id=request.request_id)

        try:
            handler = self.resolve(request.name)
            arguments = validate_arguments(request.arguments, self._descriptors[request.name])
        except (UnknownToolError, ArgumentError) as e:
            self.logger.info(
                "onError",
                method="tools/call",
                tool=request.name,
                request_id=request.request_id,
                error=str(e),
            )
            raise

        context = ToolContext(
            tool_name=request.name,
            request_id=request.request_id,
            session_id=request.session_id,
            log_sink=log_sink,
        )

        async with track_async_operation(f"tools/call {request.name}", self.logger) as tracker:
            tracker.add_metadata(request_id=request.request_id)
            # The handler finishes even if the caller goes away mid-call
            result = await asyncio.shield(handler(arguments, context))
            tracker.add_metadata(is_error=result.is_error)

        if result.is_error:
            self.logger.info(
                "onError",
                method="tools/call",
                tool=request.name,
                request_id=request.request_id,
                error_kind=result.error_kind.value if result.error_kind else None,
            )
        else:
            self.logger.info("onSuccess", method="tools/call", tool=request.name, request_id=request.request_id)
        return result
