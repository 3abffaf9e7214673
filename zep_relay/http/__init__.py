"""
Zep Relay HTTP Server

FastAPI application serving the MCP plain request/response endpoints and,
when given one, the MCP SSE transport app mounted at the root.
"""

from typing import Optional

from fastapi import FastAPI
from starlette.types import ASGIApp

from zep_relay import __version__
from zep_relay.http.mcp_protocol import router as mcp_router


def create_app(sse_app: Optional[ASGIApp] = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        sse_app: ASGI app serving /sse and /messages/ (FastMCP's SSE app)

    Returns:
        FastAPI application. Unknown paths answer 404.
    """
    app = FastAPI(
        title="Zep Relay",
        description="MCP front door for a remote Zep memory server",
        version=__version__,
    )

    app.include_router(mcp_router, prefix="/mcp", tags=["mcp"])

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    # Mounted last so the routes above take precedence
    if sse_app is not None:
        app.mount("/", sse_app)

    return app
