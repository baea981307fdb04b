from .config import GraphQLServerConfig
from .errors import (
    ConfigError,
    GraphQLExecutionError,
    GraphQLMCPError,
    PolicyError,
    QuerySyntaxError,
    SchemaFetchError,
    TransportError,
)
from .forwarder import QueryForwarder
from .introspection import GraphQLIntrospector, filter_types
from .logging import get_logger
from .server import GraphQLMCPServer
from .types import QueryResult
from .version import __version__

__all__ = [
    "GraphQLServerConfig",
    "GraphQLMCPServer",
    "GraphQLIntrospector",
    "QueryForwarder",
    "QueryResult",
    "filter_types",
    "get_logger",
    "GraphQLMCPError",
    "ConfigError",
    "SchemaFetchError",
    "QuerySyntaxError",
    "PolicyError",
    "TransportError",
    "GraphQLExecutionError",
    "__version__",
]
