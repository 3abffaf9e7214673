"""
Zep Relay MCP Server

Exposes the memory tools over MCP and relays every call to the backend
Zep memory server.

Transports:
    http   FastAPI app with the SSE transport (/sse, /messages/) and the
           plain JSON-RPC endpoint (/mcp)
    stdio  FastMCP stdio transport for local MCP clients

Environment variables:
    ZEP_RELAY_BACKEND_URL: Backend base address (default: https://mcp-zep.halfcab.dev)
    ZEP_RELAY_HOST / ZEP_RELAY_PORT: Listener for the http transport
    ZEP_RELAY_DEBUG: Enable debug logging (default: false)
    ZEP_RELAY_LOG_FILE: Log file path (default: $ZEP_RELAY_DATA_PATH/relay.log)
"""

import argparse
from typing import Optional

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from zep_relay.configs.constants import SERVER_NAME
from zep_relay.configs.logging import get_logger, setup_logging
from zep_relay.configs.services import configure_services, get_settings
from zep_relay.configs.settings import RelaySettings, load_settings
from zep_relay.http import create_app as create_http_app
from zep_relay.tools import add_memory, get_episodes, search_memory_facts, search_memory_nodes

logger = get_logger("server")


def create_mcp(settings: Optional[RelaySettings] = None) -> FastMCP:
    """Build the FastMCP server with the memory tools registered."""
    settings = settings or get_settings()
    mcp = FastMCP(SERVER_NAME, host=settings.host, port=settings.port)

    # --- Register Tools ---

    mcp.tool()(add_memory)
    mcp.tool()(search_memory_facts)
    mcp.tool()(search_memory_nodes)
    mcp.tool()(get_episodes)

    return mcp


def create_app(settings: Optional[RelaySettings] = None) -> FastAPI:
    """Build the HTTP application (usable as a uvicorn factory)."""
    if settings is not None:
        configure_services(settings)
    return create_http_app(sse_app=create_mcp(settings).sse_app())


# --- Entry Point ---


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Zep Relay MCP Server")
    parser.add_argument(
        "--transport",
        choices=("http", "stdio"),
        default="http",
        help="MCP transport to serve (default: http)",
    )
    parser.add_argument("--host", help="Listen address for the http transport")
    parser.add_argument("--port", type=int, help="Listen port for the http transport")
    parser.add_argument("--backend-url", help="Base address of the backend memory server")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the relay server."""
    args = parse_args(argv)

    settings = load_settings().with_overrides(
        host=args.host,
        port=args.port,
        backend_url=args.backend_url,
        debug=args.debug,
    )
    setup_logging(debug=settings.debug)
    configure_services(settings)

    logger.info(f"Relaying to backend: {settings.backend_url}")

    if args.transport == "stdio":
        logger.info("Starting MCP server on stdio")
        create_mcp(settings).run()
        return

    import uvicorn

    logger.info(f"Starting HTTP server on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="warning")


if __name__ == "__main__":
    main()
