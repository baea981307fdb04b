"""
FastMCP server exposing a GraphQL endpoint.

Registers the ``graphql-schema`` resource and the ``introspect-schema`` and
``query-graphql`` tools. Tool failures are surfaced as MCP error results;
only a failed resource read propagates as an error.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .config import GraphQLServerConfig
from .errors import SchemaFetchError
from .forwarder import QueryForwarder
from .introspection import GraphQLIntrospector
from .logging import get_logger
from .version import __version__

_log = get_logger("mcp-graphql.server")

SCHEMA_RESOURCE_NAME = "graphql-schema"
INTROSPECT_TOOL_NAME = "introspect-schema"
QUERY_TOOL_NAME = "query-graphql"


class GraphQLMCPServer:
    """FastMCP server bound to a single GraphQL endpoint."""

    def __init__(
        self,
        config: GraphQLServerConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the server.

        Args:
            config: Immutable settings shared by every handler
            client: Optional shared HTTP client; one is created per call otherwise
        """
        self.config = config
        self.introspector = GraphQLIntrospector(config, client=client)
        self.forwarder = QueryForwarder(config, client=client)

        self.mcp = FastMCP(
            name=config.name,
            version=__version__,
            instructions=f"GraphQL MCP server for {config.endpoint}",
        )

        # Track registered tools
        self.registered_tools: Dict[str, str] = {}  # tool_name -> description

        self._register_schema_resource()
        self._register_tools()

        _log.info(
            f"Initialized GraphQL MCP server '{config.name}' for {config.endpoint} "
            f"with {len(self.registered_tools)} tools"
        )

    def _register_schema_resource(self) -> None:
        self.mcp.resource(
            self.config.endpoint,
            name=SCHEMA_RESOURCE_NAME,
            description=f"GraphQL schema of {self.config.endpoint} in SDL",
            mime_type="text/plain",
        )(self.read_schema)

    def _register_tools(self) -> None:
        async def introspect_schema(
            typeNames: Annotated[
                Optional[List[str]],
                Field(description='e.g., ["Query", "User"]'),
            ] = None,
            descriptions: bool = True,
            directives: bool = True,
        ) -> str:
            return await self.introspect_schema(
                typeNames, descriptions=descriptions, directives=directives
            )

        async def query_graphql(
            query: str,
            variables: Optional[str] = None,
            headers: Annotated[
                Optional[str],
                Field(
                    description='Optional JSON string of headers to include, '
                    'e.g., {"Authorization": "Bearer ..."}'
                ),
            ] = None,
        ) -> str:
            return await self.query_graphql(query, variables, headers)

        tools = [
            (
                INTROSPECT_TOOL_NAME,
                "Introspect the GraphQL schema. Optionally filter to specific types.",
                introspect_schema,
            ),
            (
                QUERY_TOOL_NAME,
                "Query a GraphQL endpoint with the given query and variables. "
                "Optionally pass headers (e.g., for Authorization).",
                query_graphql,
            ),
        ]
        for tool_name, description, fn in tools:
            self.mcp.tool(name=tool_name, description=description)(fn)
            self.registered_tools[tool_name] = description
            _log.debug(f"Registered FastMCP tool '{tool_name}'")

    async def read_schema(self) -> str:
        """Resource handler; failures propagate since a read has no fallback."""
        try:
            return await self.introspector.resolve_schema()
        except SchemaFetchError as e:
            _log.error(f"Failed to get GraphQL schema: {e}")
            raise SchemaFetchError(f"Failed to get GraphQL schema: {e}") from e

    async def introspect_schema(
        self,
        type_names: Optional[List[str]] = None,
        *,
        descriptions: bool = True,
        directives: bool = True,
    ) -> str:
        # descriptions/directives are accepted for compatibility; output is unaffected
        try:
            if type_names:
                return await self.introspector.introspect_types(type_names)
            return await self.introspector.resolve_schema()
        except SchemaFetchError as e:
            _log.error(f"Introspection failed: {e}")
            raise ToolError(f"Introspection failed: {e}") from e

    async def query_graphql(
        self,
        query: str,
        variables: Optional[str] = None,
        headers: Optional[str] = None,
    ) -> str:
        result = await self.forwarder.forward(query, variables, headers)
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    def list_tools(self) -> List[Dict[str, str]]:
        """List all registered tools with their descriptions."""
        return [
            {"name": name, "description": description}
            for name, description in self.registered_tools.items()
        ]

    def get_fastmcp_instance(self) -> FastMCP:
        """Get the underlying FastMCP instance for advanced usage."""
        return self.mcp
