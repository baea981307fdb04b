"""
Tests for environment-driven configuration
"""

import pytest

from mcp_graphql.config import GraphQLServerConfig, parse_headers
from mcp_graphql.errors import ConfigError


def test_defaults_from_empty_environment():
    config = GraphQLServerConfig.from_env({})
    assert config.name == "mcp-graphql"
    assert config.endpoint == "http://localhost:4000/graphql"
    assert config.allow_mutations is False
    assert dict(config.headers) == {}
    assert config.schema is None
    assert config.timeout == 30.0


def test_values_from_environment():
    config = GraphQLServerConfig.from_env(
        {
            "NAME": "shop",
            "ENDPOINT": "https://api.example.com/graphql",
            "ALLOW_MUTATIONS": "true",
            "HEADERS": '{"Authorization": "Bearer abc"}',
            "SCHEMA": "./schema.graphql",
            "TIMEOUT": "5",
        }
    )
    assert config.name == "shop"
    assert config.endpoint == "https://api.example.com/graphql"
    assert config.allow_mutations is True
    assert dict(config.headers) == {"Authorization": "Bearer abc"}
    assert config.schema == "./schema.graphql"
    assert config.schema_is_url is False
    assert config.timeout == 5.0


def test_schema_url_detection():
    config = GraphQLServerConfig(schema="https://example.com/schema.graphql")
    assert config.schema_is_url is True


def test_invalid_headers_json_is_fatal():
    with pytest.raises(ConfigError, match="HEADERS must be a valid JSON string"):
        GraphQLServerConfig.from_env({"HEADERS": "{not json"})


def test_headers_must_be_an_object():
    with pytest.raises(ConfigError):
        parse_headers('["Authorization"]')


def test_invalid_endpoint_is_fatal():
    with pytest.raises(ConfigError, match="ENDPOINT"):
        GraphQLServerConfig.from_env({"ENDPOINT": "not a url"})


@pytest.mark.parametrize("value", ["yes", "TRUE", "1"])
def test_allow_mutations_only_accepts_true_or_false(value):
    with pytest.raises(ConfigError, match="ALLOW_MUTATIONS"):
        GraphQLServerConfig.from_env({"ALLOW_MUTATIONS": value})


def test_config_is_immutable():
    config = GraphQLServerConfig()
    with pytest.raises(AttributeError):
        config.allow_mutations = True  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.headers["X-Extra"] = "1"  # type: ignore[index]


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "0", "-3"])
def test_timeout_must_be_finite_and_positive(value):
    with pytest.raises(ConfigError, match="TIMEOUT"):
        GraphQLServerConfig.from_env({"TIMEOUT": value})


def test_non_finite_timeout_rejected_on_direct_construction():
    with pytest.raises(ConfigError):
        GraphQLServerConfig(timeout=float("nan"))
