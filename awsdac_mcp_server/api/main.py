"""
FastAPI application assembly.

Builds the registry of diagram tools, the MCP endpoint, the cross-origin
filter and request logging into one application object.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from .. import __version__
from ..config.settings import Settings
from ..core.protocol.mcp_constants import SERVER_NAME
from ..core.tool_system import ToolRegistry
from ..core.workspace import ScratchWorkspaceManager
from ..rendering import AwsdacRenderer, Renderer
from ..tools import register_builtin_tools
from ..utils.logging import get_structured_logger
from .cors import add_cors_middleware
from .exception_handlers import generic_exception_handler, register_exception_handlers
from .mcp_server import MCPGateway

logger = get_structured_logger(__name__)


def build_registry(
    settings: Settings,
    renderer: Optional[Renderer] = None,
    workspaces: Optional[ScratchWorkspaceManager] = None,
) -> ToolRegistry:
    """Register the built-in tools and freeze the registry."""
    registry = ToolRegistry(logger=get_structured_logger("awsdac_mcp_server.dispatch"))
    register_builtin_tools(
        registry,
        renderer or AwsdacRenderer(settings.awsdac_path, timeout=settings.render_timeout),
        workspaces or ScratchWorkspaceManager(settings.scratch_dir, prefix=settings.scratch_prefix),
    )
    registry.freeze()
    return registry


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ToolRegistry] = None,
    renderer: Optional[Renderer] = None,
    workspaces: Optional[ScratchWorkspaceManager] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Server settings (loaded from the environment if None)
        registry: Pre-built registry; built from the other arguments if None
        renderer: Rendering collaborator for the built-in tools
        workspaces: Scratch workspace manager for the built-in tools

    Returns:
        FastAPI: The configured application
    """
    settings = settings or Settings()
    if registry is None:
        registry = build_registry(settings, renderer, workspaces)
    elif not registry.is_frozen:
        registry.freeze()

    gateway = MCPGateway(registry, stateless=settings.stateless)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Server starting",
            endpoint=settings.endpoint,
            mode="stateless" if settings.stateless else "stateful",
            tools=len(registry),
        )
        async with gateway.run():
            try:
                yield
            finally:
                logger.info("Server stopped")

    app = FastAPI(
        title=SERVER_NAME,
        description="AWS Diagram-as-Code MCP server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.gateway = gateway

    # Raw ASGI endpoint; the library answers every method itself
    app.add_route(settings.endpoint, gateway, include_in_schema=False)
    register_exception_handlers(app)

    @app.get("/health", include_in_schema=False)
    async def health():
        """Health check endpoint."""
        return {
            "status": "ok",
            "tools": len(registry),
            "mode": "stateless" if settings.stateless else "stateful",
        }

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests."""
        logger.info(
            "Request",
            method=request.method,
            path=request.url.path,
            session_id=request.headers.get("Mcp-Session-Id"),
        )
        try:
            response = await call_next(request)
        except Exception as e:
            # Answered here, inside the CORS filter, so the 500 carries its headers
            response = await generic_exception_handler(request, e)
        logger.info("Response", status_code=response.status_code, path=request.url.path)
        return response

    # Added last so it is outermost and answers preflight first
    add_cors_middleware(app, settings.allowed_origin)

    return app
