"""Tool registry and JSON schema helpers for MCP tool definitions."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable

from .protocol import Content, Tool, ToolCallResult, new_text_content

ToolHandler = Callable[[dict[str, Any]], list[Content]]


@dataclass
class RegisteredTool:
    """A tool definition together with the handler that runs it."""

    tool: Tool
    handler: ToolHandler


class ToolRegistry:
    """A thread-safe collection of callable MCP tools, keyed by name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, tool: Tool, handler: ToolHandler) -> None:
        """Add or replace a tool; raises ValueError on an empty name or missing handler."""
        if not tool.name:
            raise ValueError("tool name cannot be empty")
        if handler is None:
            raise ValueError("tool handler cannot be nil")
        with self._lock:
            self._tools[tool.name] = RegisteredTool(tool=tool, handler=handler)

    def get(self, name: str) -> RegisteredTool | None:
        """Return the registered tool with this name, or None."""
        with self._lock:
            return self._tools.get(name)

    def list(self) -> list[Tool]:
        """Return the definitions of all registered tools."""
        with self._lock:
            return [registered.tool for registered in self._tools.values()]

    def execute(self, name: str, args: dict[str, Any] | None) -> ToolCallResult:
        """Run a tool by name; failures are reported in the result, not raised."""
        registered = self.get(name)
        if registered is None:
            return ToolCallResult(
                content=[new_text_content(f"Tool not found: {name}")],
                is_error=True,
            )
        try:
            content = registered.handler(args if args is not None else {})
        except Exception as exc:  # a failing tool must not bring the server down
            return ToolCallResult(
                content=[new_text_content(f"Tool execution failed: {exc}")],
                is_error=True,
            )
        return ToolCallResult(content=list(content), is_error=False)


def new_json_schema(
    schema_type: str,
    properties: dict[str, Any],
    required: list[str] | None,
) -> dict[str, Any]:
    """Build a JSON schema for tool input parameters."""
    schema: dict[str, Any] = {"type": schema_type, "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def new_string_property(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def new_number_property(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def new_boolean_property(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def new_object_property(
    description: str,
    properties: dict[str, Any],
    required: list[str] | None,
) -> dict[str, Any]:
    """Build a JSON schema property describing a nested object."""
    prop: dict[str, Any] = {
        "type": "object",
        "description": description,
        "properties": properties,
    }
    if required:
        prop["required"] = list(required)
    return prop