"""
Transport runners for the GraphQL MCP server (stdio, SSE, streamable HTTP).
"""

from __future__ import annotations

from typing import Any

from .logging import get_logger
from .server import GraphQLMCPServer

_log = get_logger("mcp-graphql.transports")


def get_available_transports() -> list[str]:
    return ["stdio", "sse", "http"]


def get_transport_defaults(transport: str) -> dict[str, Any]:
    defaults = {
        "stdio": {},
        "sse": {"host": "localhost", "port": 8000},
        "http": {"host": "localhost", "port": 8000},
    }
    return defaults.get(transport, {})


def run_stdio(server: GraphQLMCPServer) -> None:
    """Run the server over stdio transport."""
    _log.info("Starting FastMCP server over stdio transport")
    try:
        server.mcp.run(transport="stdio", show_banner=False)
    except KeyboardInterrupt:
        _log.info("Server stopped by user (Ctrl+C)")


def run_sse(server: GraphQLMCPServer, host: str = "localhost", port: int = 8000) -> None:
    _log.info(f"Starting FastMCP server over SSE transport at {host}:{port}")
    try:
        server.mcp.run(transport="sse", host=host, port=port)
    except KeyboardInterrupt:
        _log.info("Server stopped by user (Ctrl+C)")


def run_http(server: GraphQLMCPServer, host: str = "localhost", port: int = 8000) -> None:
    _log.info(f"Starting FastMCP server over HTTP transport at {host}:{port}")
    try:
        server.mcp.run(transport="http", host=host, port=port)
    except KeyboardInterrupt:
        _log.info("Server stopped by user (Ctrl+C)")


def run(server: GraphQLMCPServer, transport: str = "stdio", **kwargs: Any) -> None:
    """Dispatch to the runner for ``transport``."""
    if transport not in get_available_transports():
        raise ValueError(f"Unsupported transport: {transport}")
    if transport == "stdio":
        run_stdio(server)
        return
    options = {**get_transport_defaults(transport), **kwargs}
    if transport == "sse":
        run_sse(server, host=options["host"], port=options["port"])
    else:
        run_http(server, host=options["host"], port=options["port"])
