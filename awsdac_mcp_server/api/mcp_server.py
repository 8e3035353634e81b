"""
MCP protocol surface built on the mcp library.

A low-level mcp Server answers tools/list and tools/call from the tool
registry, and a StreamableHTTPSessionManager carries it over HTTP. JSON-RPC
framing, initialize negotiation, Mcp-Session-Id sessions and event streams
belong to the library; this module only maps registry calls and results
onto it.

In stateful mode log notifications emitted by a tool go to the session's
GET stream and are dropped by the library when no stream is open. In
stateless mode they are always dropped.
"""

import weakref
from typing import Any, Dict, List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.session import ServerSession
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.shared.exceptions import McpError

from ..core.exceptions import ArgumentError, UnknownToolError
from ..core.protocol.mcp_constants import (
    NOTIFICATION_LOGGER,
    SERVER_INSTRUCTIONS,
    SERVER_NAME,
    SERVER_VERSION,
    LogLevel,
    MCPHeaders,
)
from ..core.tool_system import InvocationRequest, LogSink, ToolRegistry
from ..utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class MCPGateway:
    """Serves a frozen tool registry over MCP streamable HTTP.

    The instance is the ASGI app mounted at the MCP endpoint; its
    session manager must be running (see `run`) before requests arrive.
    """

    def __init__(self, registry: ToolRegistry, stateless: bool = False) -> None:
        """Initialize the gateway.

        Args:
            registry: Frozen tool registry
            stateless: Serve every request on a fresh transport without a session
        """
        self.registry = registry
        self.stateless = stateless
        self.server: Server = Server(SERVER_NAME, version=SERVER_VERSION, instructions=SERVER_INSTRUCTIONS)
        # Level set by logging/setLevel, per client session
        self.log_levels: "weakref.WeakKeyDictionary[ServerSession, LogLevel]" = weakref.WeakKeyDictionary()

        self.server.list_tools()(self.list_tools)
        self.server.set_logging_level()(self.set_logging_level)
        # Registered directly so unknown tools and bad arguments are answered
        # with a JSON-RPC error instead of an error result
        self.server.request_handlers[types.CallToolRequest] = self.call_tool

        self.session_manager = StreamableHTTPSessionManager(
            app=self.server,
            json_response=True,
            stateless=stateless,
        )

    def run(self):
        """Context manager running the session manager's task group."""
        return self.session_manager.run()

    async def __call__(self, scope, receive, send) -> None:
        await self.session_manager.handle_request(scope, receive, send)

    async def list_tools(self) -> List[types.Tool]:
        return [descriptor.to_mcp() for descriptor in self.registry.list_descriptors()]

    async def set_logging_level(self, level: types.LoggingLevel) -> None:
        session = self.server.request_context.session
        self.log_levels[session] = LogLevel(level)
        logger.info("Client log level set", level=level)

    async def call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        """Dispatch one tools/call to the registry.

        Raises:
            McpError: INVALID_PARAMS for an unknown tool or a bad argument bag
        """
        ctx = self.server.request_context
        http_request = ctx.request
        request = InvocationRequest(
            request_id=str(ctx.request_id),
            name=req.params.name,
            arguments=req.params.arguments or {},
            session_id=http_request.headers.get(MCPHeaders.SESSION_ID.value) if http_request is not None else None,
        )

        try:
            result = await self.registry.dispatch(request, log_sink=self.log_sink(ctx.session))
        except (UnknownToolError, ArgumentError) as e:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e), data=e.details)) from e
        return types.ServerResult(result.to_mcp())

    def log_sink(self, session: ServerSession) -> LogSink:
        """Build the sink that forwards tool notifications to a client session."""

        async def send(level: LogLevel, message: str, data: Dict[str, Any]) -> None:
            threshold = self.log_levels.get(session, LogLevel.INFO)
            if level.severity < threshold.severity:
                return
            try:
                await session.send_log_message(
                    level=level.value,
                    data={"message": message, **data},
                    logger=NOTIFICATION_LOGGER,
                )
            except Exception as e:
                # The invocation outlives a caller that went away
                logger.debug("Log notification not delivered", error=str(e))

        return send
