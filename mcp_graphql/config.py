from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .errors import ConfigError

DEFAULT_NAME = "mcp-graphql"
DEFAULT_ENDPOINT = "http://localhost:4000/graphql"
DEFAULT_TIMEOUT = 30.0

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class GraphQLServerConfig:
    """Settings read once at startup and shared read-only by every component."""

    name: str = DEFAULT_NAME
    endpoint: str = DEFAULT_ENDPOINT
    allow_mutations: bool = False
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    schema: Optional[str] = None  # SDL URL, local path, or None for live introspection
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint", _validate_endpoint(self.endpoint))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError("TIMEOUT must be a positive number of seconds")

    @property
    def schema_is_url(self) -> bool:
        return bool(self.schema) and self.schema.startswith(("http://", "https://"))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GraphQLServerConfig":
        """Build the configuration from environment variables.

        Recognised keys: NAME, ENDPOINT, ALLOW_MUTATIONS, HEADERS, SCHEMA and TIMEOUT.
        Raises ConfigError on any invalid value.
        """
        env = os.environ if environ is None else environ
        return cls(
            name=env.get("NAME") or DEFAULT_NAME,
            endpoint=env.get("ENDPOINT") or DEFAULT_ENDPOINT,
            allow_mutations=_parse_bool_flag(env.get("ALLOW_MUTATIONS", "false")),
            headers=parse_headers(env.get("HEADERS", "{}")),
            schema=env.get("SCHEMA") or None,
            timeout=_parse_timeout(env.get("TIMEOUT")),
        )


def _validate_endpoint(value: str) -> str:
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ConfigError(f"ENDPOINT must be a valid URL: {value!r}") from e
    return str(url)


def _parse_bool_flag(value: str) -> bool:
    if value not in ("true", "false"):
        raise ConfigError(f"ALLOW_MUTATIONS must be 'true' or 'false', got {value!r}")
    return value == "true"


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigError(f"TIMEOUT must be a number, got {value!r}") from e
    if not math.isfinite(timeout):
        raise ConfigError(f"TIMEOUT must be a finite number, got {value!r}")
    return timeout


def parse_headers(raw: str) -> dict[str, str]:
    """Decode a JSON object of header names to values."""
    try:
        decoded: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError("HEADERS must be a valid JSON string") from e
    if not isinstance(decoded, dict):
        raise ConfigError("HEADERS must be a JSON object")
    return {str(k): str(v) for k, v in decoded.items()}
