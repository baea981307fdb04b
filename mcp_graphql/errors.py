"""Exception hierarchy for the GraphQL MCP server.

``ConfigError`` is fatal and stops the process before the server starts.
``SchemaFetchError`` is recoverable for tool calls but fatal for a resource
read. The remaining errors are raised while forwarding a query and are
always converted into an error envelope before they reach the transport.
"""

from __future__ import annotations

import json
from typing import Any, List


class GraphQLMCPError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(GraphQLMCPError):
    """Invalid configuration (bad endpoint URL, malformed HEADERS, ...)."""


class SchemaFetchError(GraphQLMCPError):
    """Network, file or payload failure while obtaining a schema."""


class QuerySyntaxError(GraphQLMCPError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid GraphQL query: {detail}")


class PolicyError(GraphQLMCPError):
    """A mutation was submitted while mutations are disabled."""

    MUTATIONS_DISABLED = (
        "Mutations are not allowed unless you enable them in the configuration. "
        "Please use a query operation instead."
    )

    def __init__(self, message: str = MUTATIONS_DISABLED) -> None:
        super().__init__(message)


class TransportError(GraphQLMCPError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        super().__init__(f"GraphQL request failed: {reason}\n{body}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class GraphQLExecutionError(GraphQLMCPError):
    """The endpoint answered 2xx with a populated ``errors`` array."""

    def __init__(self, errors: List[Any]) -> None:
        rendered = json.dumps(errors, indent=2, ensure_ascii=False)
        super().__init__(f"GraphQL errors: {rendered}")
        self.errors = errors
