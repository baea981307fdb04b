"""
Schema retrieval and type filtering.

The schema is obtained from one of three sources, in order of precedence:
a pre-built SDL document at a URL, a local SDL file, or live introspection
of the configured endpoint. Nothing is cached; each call re-fetches.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx
from graphql import (
    GraphQLError,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    build_client_schema,
    get_introspection_query,
    print_schema,
)

from .config import GraphQLServerConfig
from .errors import SchemaFetchError
from .logging import get_logger
from .transport_http import http_client, merge_headers
from .types import (
    ArgumentDescriptor,
    EnumTypeDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    InputFieldDescriptor,
    InputObjectTypeDescriptor,
    InterfaceTypeDescriptor,
    ObjectTypeDescriptor,
    ScalarTypeDescriptor,
    TypeDescriptor,
    UnionTypeDescriptor,
)

_log = get_logger("mcp-graphql.introspection")


class GraphQLIntrospector:
    """Resolves the endpoint's schema as SDL and projects named types."""

    def __init__(
        self,
        config: GraphQLServerConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._client = client

    async def resolve_schema(self) -> str:
        """Return the schema as SDL text from the configured source."""
        source = self._config.schema
        if source and self._config.schema_is_url:
            return await self.fetch_schema_from_url(source)
        if source:
            return self.read_local_schema(source)
        return await self.introspect_endpoint()

    async def fetch_schema_from_url(self, url: str) -> str:
        _log.debug(f"Fetching SDL document from {url}")
        try:
            async with http_client(self._client, self._config.timeout) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"Failed to fetch schema from URL: {e}") from e
        if not response.is_success:
            raise SchemaFetchError(
                f"Failed to fetch schema from URL: {response.reason_phrase}"
            )
        return response.text

    def read_local_schema(self, path: str) -> str:
        _log.debug(f"Reading SDL document from {path}")
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaFetchError(f"Failed to read schema file {path!r}: {e}") from e

    async def introspect_endpoint(self) -> str:
        """Introspect the endpoint and print the result as canonical SDL."""
        return print_schema(await self.fetch_client_schema())

    async def fetch_client_schema(self) -> GraphQLSchema:
        endpoint = self._config.endpoint
        headers = merge_headers(self._config.headers)
        _log.debug(f"Introspecting {endpoint}")
        try:
            async with http_client(self._client, self._config.timeout) as client:
                response = await client.post(
                    endpoint,
                    headers=headers,
                    json={"query": get_introspection_query()},
                )
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"GraphQL request failed: {e}") from e

        if not response.is_success:
            raise SchemaFetchError(f"GraphQL request failed: {response.reason_phrase}")

        try:
            payload = response.json()
        except ValueError as e:
            raise SchemaFetchError(f"Introspection response is not JSON: {e}") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise SchemaFetchError("Introspection response has no 'data' object")
        try:
            return build_client_schema(data)
        except (GraphQLError, TypeError, ValueError, KeyError, AttributeError) as e:
            # build_client_schema indexes the payload directly
            raise SchemaFetchError(f"Invalid introspection result: {e}") from e

    async def introspect_types(self, type_names: Iterable[str]) -> str:
        """Describe only ``type_names``; unknown names are skipped."""
        schema = await self.fetch_client_schema()
        return filter_types(schema, type_names)


def filter_types(schema: GraphQLSchema, type_names: Iterable[str]) -> str:
    result: Dict[str, Dict[str, Any]] = {}
    for name in type_names:
        named_type = schema.get_type(name)
        if named_type is None:
            continue
        result[name] = describe_type(named_type).model_dump(mode="json")
    return json.dumps(result, indent=2, ensure_ascii=False)


def describe_type(named_type: GraphQLNamedType) -> TypeDescriptor:
    if isinstance(named_type, GraphQLObjectType):
        return ObjectTypeDescriptor(
            description=named_type.description,
            fields=_describe_fields(named_type.fields),
        )
    if isinstance(named_type, GraphQLInterfaceType):
        return InterfaceTypeDescriptor(
            description=named_type.description,
            fields=_describe_fields(named_type.fields),
        )
    if isinstance(named_type, GraphQLUnionType):
        return UnionTypeDescriptor(
            description=named_type.description,
            possibleTypes=[t.name for t in named_type.types],
        )
    if isinstance(named_type, GraphQLEnumType):
        return EnumTypeDescriptor(
            description=named_type.description,
            values=[
                EnumValueDescriptor(name=value_name, description=value.description)
                for value_name, value in named_type.values.items()
            ],
        )
    if isinstance(named_type, GraphQLInputObjectType):
        return InputObjectTypeDescriptor(
            description=named_type.description,
            fields={
                field_name: InputFieldDescriptor(
                    type=str(field.type), description=field.description
                )
                for field_name, field in named_type.fields.items()
            },
        )
    if isinstance(named_type, GraphQLScalarType):
        return ScalarTypeDescriptor(description=named_type.description)
    raise TypeError(f"Unsupported GraphQL type: {named_type!r}")


def _describe_fields(fields: Mapping[str, Any]) -> Dict[str, FieldDescriptor]:
    return {
        field_name: FieldDescriptor(
            type=str(field.type),
            description=field.description,
            args=[
                ArgumentDescriptor(
                    name=arg_name, type=str(arg.type), description=arg.description
                )
                for arg_name, arg in field.args.items()
            ],
        )
        for field_name, field in fields.items()
    }
