"""
Tests for the command line entry point
"""

import pytest

from mcp_graphql import cli


def test_find_deprecated_arguments():
    argv = ["--endpoint", "http://x/graphql", "--schema=./s.graphql", "--transport", "sse"]
    assert cli.find_deprecated_arguments(argv) == ["--endpoint", "--schema"]
    assert cli.find_deprecated_arguments(["--transport", "http"]) == []


def test_deprecated_arguments_exit_with_error():
    with pytest.raises(SystemExit) as exc:
        cli.main(["--enable-mutations"])
    assert exc.value.code == 1


def test_invalid_configuration_exits_with_error(monkeypatch):
    monkeypatch.setenv("HEADERS", "{oops")
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 1


def test_main_runs_selected_transport(monkeypatch):
    monkeypatch.setenv("ENDPOINT", "https://api.example.com/graphql")
    monkeypatch.delenv("HEADERS", raising=False)
    monkeypatch.delenv("ALLOW_MUTATIONS", raising=False)
    monkeypatch.delenv("SCHEMA", raising=False)
    monkeypatch.delenv("NAME", raising=False)
    monkeypatch.delenv("TIMEOUT", raising=False)
    calls = []
    monkeypatch.setattr(
        cli, "run", lambda server, transport, **kwargs: calls.append((server, transport, kwargs))
    )

    cli.main(["--transport", "http", "--port", "9000"])

    server, transport, kwargs = calls[0]
    assert transport == "http"
    assert kwargs == {"host": "localhost", "port": 9000}
    assert server.config.endpoint == "https://api.example.com/graphql"


def test_parser_rejects_unknown_transport():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--transport", "carrier-pigeon"])
