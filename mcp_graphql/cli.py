#!/usr/bin/env python3
"""
mcp-graphql CLI - run the GraphQL MCP server
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from rich.console import Console

from .config import GraphQLServerConfig
from .errors import ConfigError
from .logging import get_logger
from .server import GraphQLMCPServer
from .transports import get_available_transports, run

console = Console(stderr=True)
logger = get_logger("mcp-graphql.cli")

DEPRECATED_ARGUMENTS = (
    "--endpoint",
    "--headers",
    "--enable-mutations",
    "--name",
    "--schema",
)


def find_deprecated_arguments(argv: Sequence[str]) -> List[str]:
    """Return the legacy configuration flags present in ``argv``."""
    used = []
    for flag in DEPRECATED_ARGUMENTS:
        if any(arg == flag or arg.startswith(f"{flag}=") for arg in argv):
            used.append(flag)
    return used


def check_deprecated_arguments(argv: Sequence[str]) -> None:
    used = find_deprecated_arguments(argv)
    if not used:
        return
    console.print(
        f"[red]Deprecated command line arguments detected:[/red] {', '.join(used)}"
    )
    console.print(
        "Configuration is read from environment variables: "
        "NAME, ENDPOINT, HEADERS, ALLOW_MUTATIONS, SCHEMA"
    )
    console.print("Example: ENDPOINT=http://localhost:3000/graphql mcp-graphql")
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-graphql",
        description="Expose a GraphQL endpoint as an MCP server. "
        "Configure it with NAME, ENDPOINT, ALLOW_MUTATIONS, HEADERS and SCHEMA.",
    )
    parser.add_argument(
        "--transport",
        choices=get_available_transports(),
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument("--host", default="localhost", help="Bind host for sse/http")
    parser.add_argument("--port", type=int, default=8000, help="Bind port for sse/http")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point"""
    argv = list(sys.argv[1:] if argv is None else argv)
    check_deprecated_arguments(argv)
    args = build_parser().parse_args(argv)

    try:
        config = GraphQLServerConfig.from_env()
    except ConfigError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)

    server = GraphQLMCPServer(config)
    logger.info(
        f"Started graphql mcp server {config.name} for endpoint: {config.endpoint}"
    )
    try:
        if args.transport == "stdio":
            run(server, "stdio")
        else:
            run(server, args.transport, host=args.host, port=args.port)
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
