from __future__ import annotations

from datetime import datetime
import json
import os
from typing import Any, Mapping

from rich.console import Console
from rich.json import JSON as RichJSON
from rich.panel import Panel
from rich.traceback import install as rich_tracebacks

_GLOBAL_CONSOLE: Console | None = None

_REDACTED_HEADERS = ("authorization", "cookie", "x-api-key", "proxy-authorization")


def _get_console() -> Console:
    global _GLOBAL_CONSOLE
    if _GLOBAL_CONSOLE is None:
        # stdout belongs to the stdio transport
        _GLOBAL_CONSOLE = Console(stderr=True)
        if os.getenv("MCP_GRAPHQL_RICH_TRACEBACK", "1") != "0":
            rich_tracebacks(show_locals=False)
    return _GLOBAL_CONSOLE


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` safe to print."""
    return {
        k: ("***" if k.lower() in _REDACTED_HEADERS else v) for k, v in headers.items()
    }


class GraphQLMCPLogger:
    def __init__(self, name: str = "mcp-graphql") -> None:
        self._name = name
        self._console = _get_console()
        # Levels: debug <= info <= warn <= error
        self._level = os.getenv("MCP_GRAPHQL_LOG_LEVEL", "info").lower()

    def _should(self, level: str) -> bool:
        order = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
        return order.get(level, 20) >= order.get(self._level, 20)

    def _stamp(self) -> str:
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def _maybe_truncate(self, text: str) -> str:
        try:
            max_len = int(os.getenv("MCP_GRAPHQL_LOG_MAXLEN", "500"))
        except ValueError:
            max_len = 500
        if os.getenv("MCP_GRAPHQL_LOG_VERBOSE") == "1":
            return text
        if len(text) <= max_len:
            return text
        return text[:max_len] + "\n[...truncated...]"

    def _panel(self, message: str, label: str, color: str) -> None:
        panel = Panel(
            self._maybe_truncate(message),
            title=f"[bold {color}]{self._name}[/bold {color}] {label}",
            subtitle=self._stamp(),
            border_style=color,
        )
        self._console.print(panel)

    def debug(self, message: str) -> None:
        if self._should("debug"):
            self._panel(message, "DEBUG", "cyan")

    def info(self, message: str) -> None:
        if self._should("info"):
            self._panel(message, "INFO", "blue")

    def warn(self, message: str) -> None:
        if self._should("warn"):
            self._panel(message, "WARN", "yellow")

    def error(self, message: str) -> None:
        if self._should("error"):
            self._panel(message, "ERROR", "red")

    def json(self, title: str, data: Any) -> None:
        if not self._should("debug"):
            return
        try:
            rendered = RichJSON.from_data(data)
            panel = Panel(rendered, title=f"JSON: {title}", border_style="cyan")
            self._console.print(panel)
        except TypeError:
            # Fallback to plain dump
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            panel = Panel(
                self._maybe_truncate(text),
                title=f"JSON (raw): {title}",
                border_style="cyan",
            )
            self._console.print(panel)


def get_logger(name: str = "mcp-graphql") -> GraphQLMCPLogger:
    return GraphQLMCPLogger(name)
