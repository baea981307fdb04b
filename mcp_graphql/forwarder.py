from __future__ import annotations

import json
from typing import Any, Optional

import httpx
from graphql import GraphQLSyntaxError, OperationDefinitionNode, OperationType, parse

from .config import GraphQLServerConfig
from .errors import (
    GraphQLExecutionError,
    GraphQLMCPError,
    PolicyError,
    QuerySyntaxError,
    TransportError,
)
from .logging import get_logger, redact_headers
from .transport_http import http_client, merge_headers
from .types import QueryResult

_log = get_logger("mcp-graphql.forwarder")


def check_operation(query: str, *, allow_mutations: bool) -> None:
    """Parse ``query`` and enforce the mutation policy.

    Raises QuerySyntaxError or PolicyError; queries and subscriptions always pass.
    """
    try:
        document = parse(query)
    except GraphQLSyntaxError as e:
        raise QuerySyntaxError(str(e)) from e
    except RecursionError as e:
        # parse() is recursive descent; pathological nesting exhausts the stack
        raise QuerySyntaxError("query nesting too deep") from e

    if allow_mutations:
        return
    for definition in document.definitions:
        if (
            isinstance(definition, OperationDefinitionNode)
            and definition.operation == OperationType.MUTATION
        ):
            raise PolicyError()


def _decode_headers(raw: Optional[str]) -> dict[str, str]:
    if not raw:
        return {}
    decoded = json.loads(raw)
    if not isinstance(decoded, dict):
        raise ValueError("headers must be a JSON object")
    return {str(k): str(v) for k, v in decoded.items()}


def _decode_variables(raw: Optional[str]) -> Any:
    return json.loads(raw) if raw else None


class QueryForwarder:
    """Validates GraphQL operations and relays them to the configured endpoint."""

    def __init__(
        self,
        config: GraphQLServerConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._client = client

    async def forward(
        self,
        query: str,
        variables: Optional[str] = None,
        headers: Optional[str] = None,
    ) -> QueryResult:
        """Run one operation and normalise the outcome into a QueryResult.

        Never raises: syntax, policy, transport and execution failures all
        come back as error results.
        """
        try:
            check_operation(query, allow_mutations=self._config.allow_mutations)
        except (QuerySyntaxError, PolicyError) as e:
            _log.warn(str(e))
            return QueryResult.error(str(e))

        try:
            body = await self._execute(query, variables, headers)
        except TransportError as e:
            _log.warn(f"{self._config.endpoint} answered HTTP {e.status_code}")
            return QueryResult.error(str(e))
        except GraphQLMCPError as e:
            _log.warn(str(e))
            return QueryResult.error(str(e))
        except (ValueError, httpx.HTTPError) as e:
            _log.error(f"GraphQL request to {self._config.endpoint} failed: {e}")
            return QueryResult.error(f"Failed to execute GraphQL query: {e}")

        return QueryResult.success(json.dumps(body, indent=2, ensure_ascii=False))

    async def _execute(
        self, query: str, variables: Optional[str], headers: Optional[str]
    ) -> Any:
        request_headers = merge_headers(self._config.headers, _decode_headers(headers))
        payload = {"query": query, "variables": _decode_variables(variables)}
        _log.json("GraphQL request headers", redact_headers(request_headers))

        async with http_client(self._client, self._config.timeout) as client:
            response = await client.post(
                self._config.endpoint,
                headers=request_headers,
                content=json.dumps(payload).encode("utf-8"),
            )

        if not response.is_success:
            raise TransportError(response.status_code, response.reason_phrase, response.text)

        data = response.json()
        errors = data.get("errors") if isinstance(data, dict) else None
        if errors:
            raise GraphQLExecutionError(errors)
        return data
