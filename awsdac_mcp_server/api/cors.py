"""
Cross-origin policy for the MCP endpoint.

CORSMiddleware applies the header policy for the one allowed origin.
OPTIONS requests are answered first with an empty 200 carrying the policy
headers, preflight or not, and never reach the MCP endpoint.
"""

from typing import Dict, List

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from ..core.protocol.mcp_constants import MCPHeaders

ALLOWED_METHODS: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
ALLOWED_HEADERS: List[str] = [
    MCPHeaders.CONTENT_TYPE.value,
    MCPHeaders.SESSION_ID.value,
    MCPHeaders.PROTOCOL_VERSION.value,
    MCPHeaders.ACCEPT.value,
    "Authorization",
]
EXPOSED_HEADERS: List[str] = [MCPHeaders.SESSION_ID.value]


def options_headers(origin: str) -> Dict[str, str]:
    """Headers of the short-circuited OPTIONS response."""
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
        "Access-Control-Expose-Headers": ", ".join(EXPOSED_HEADERS),
    }


def add_cors_middleware(app: FastAPI, origin: str) -> None:
    """Install the cross-origin filter; call after all other middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin],
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
    )

    headers = options_headers(origin)

    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=headers)
        return await call_next(request)
