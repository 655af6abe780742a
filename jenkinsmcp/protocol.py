"""JSON-RPC 2.0 and MCP message types with their wire encoding."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any

PROTOCOL_VERSION = "2025-11-25"
JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Omission modes for optional wire fields.
_OMIT_EMPTY = "empty"  # omitted when None, "", 0, False or an empty container
_OMIT_NONE = "none"  # omitted only when None


def _wire(name: str, omit: str | None = None, **kwargs: Any) -> Any:
    return field(metadata={"wire": name, "omit": omit}, **kwargs)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, bool, int, float)):
        return not value
    return False


def to_wire(value: Any) -> Any:
    """Convert a protocol object, recursively, into JSON-ready Python values."""
    custom = getattr(value, "_to_wire", None)
    if custom is not None and is_dataclass(value):
        return custom()
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            omit = f.metadata.get("omit")
            if omit == _OMIT_EMPTY and _is_empty(item):
                continue
            if omit == _OMIT_NONE and item is None:
                continue
            out[f.metadata.get("wire", f.name)] = to_wire(item)
        return out
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


def _optional(data: dict, key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be of type {kind.__name__}")
    return value


@dataclass
class Request:
    """A JSON-RPC request; a request without an id is a notification."""

    jsonrpc: str = ""
    id: Any = None
    method: str = ""
    params: dict[str, Any] | None = None
    has_id: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Request":
        """Build a request from a decoded JSON value, checking field types."""
        if not isinstance(data, dict):
            raise ValueError("request must be a JSON object")
        return cls(
            jsonrpc=_optional(data, "jsonrpc", str, ""),
            id=data.get("id"),
            method=_optional(data, "method", str, ""),
            params=_optional(data, "params", dict, None),
            has_id="id" in data,
        )

    def _to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.has_id:
            out["id"] = to_wire(self.id)
        out["method"] = self.method
        if self.params:
            out["params"] = to_wire(self.params)
        return out


@dataclass
class Response:
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: dict[str, Any] | None = None


@dataclass
class RPCError:
    code: int = 0
    message: str = ""
    data: Any = _wire("data", _OMIT_NONE, default=None)


@dataclass
class ErrorResponse:
    jsonrpc: str = JSONRPC_VERSION
    id: Any = _wire("id", _OMIT_NONE, default=None)
    error: RPCError = field(default_factory=RPCError)


@dataclass
class Notification:
    jsonrpc: str = JSONRPC_VERSION
    method: str = ""
    params: dict[str, Any] | None = _wire("params", _OMIT_EMPTY, default=None)


@dataclass
class Icon:
    src: str = ""
    mime_type: str = _wire("mimeType", _OMIT_EMPTY, default="")
    sizes: list[str] = _wire("sizes", _OMIT_EMPTY, default_factory=list)
    theme: str = _wire("theme", _OMIT_EMPTY, default="")


@dataclass
class Implementation:
    name: str = ""
    title: str = _wire("title", _OMIT_EMPTY, default="")
    version: str = ""
    description: str = _wire("description", _OMIT_EMPTY, default="")
    website_url: str = _wire("websiteUrl", _OMIT_EMPTY, default="")
    icons: list[Icon] = _wire("icons", _OMIT_EMPTY, default_factory=list)


@dataclass
class ServerCapabilities:
    """Server capabilities; each capability is a dict when offered, None when not."""

    logging: dict[str, Any] | None = _wire("logging", _OMIT_NONE, default=None)
    prompts: dict[str, Any] | None = _wire("prompts", _OMIT_NONE, default=None)
    resources: dict[str, Any] | None = _wire("resources", _OMIT_NONE, default=None)
    tools: dict[str, Any] | None = _wire("tools", _OMIT_NONE, default=None)
    tasks: dict[str, Any] | None = _wire("tasks", _OMIT_NONE, default=None)
    completions: dict[str, Any] | None = _wire("completions", _OMIT_NONE, default=None)
    experimental: dict[str, Any] = _wire("experimental", _OMIT_EMPTY, default_factory=dict)


@dataclass
class InitializeResult:
    protocol_version: str = _wire("protocolVersion", default=PROTOCOL_VERSION)
    capabilities: ServerCapabilities = field(default_factory=ServerCapabilities)
    server_info: Implementation = _wire("serverInfo", default_factory=Implementation)
    instructions: str = _wire("instructions", _OMIT_EMPTY, default="")


@dataclass
class Annotations:
    audience: list[str] = _wire("audience", _OMIT_EMPTY, default_factory=list)
    priority: float = _wire("priority", _OMIT_EMPTY, default=0.0)
    last_modified: str = _wire("lastModified", _OMIT_EMPTY, default="")


@dataclass
class Tool:
    name: str = ""
    title: str = _wire("title", _OMIT_EMPTY, default="")
    description: str = ""
    input_schema: dict[str, Any] = _wire("inputSchema", default_factory=dict)
    output_schema: dict[str, Any] = _wire("outputSchema", _OMIT_EMPTY, default_factory=dict)
    icons: list[Icon] = _wire("icons", _OMIT_EMPTY, default_factory=list)
    annotations: Annotations | None = _wire("annotations", _OMIT_NONE, default=None)


@dataclass
class Resource:
    uri: str = ""
    mime_type: str = _wire("mimeType", _OMIT_EMPTY, default="")
    text: str = _wire("text", _OMIT_EMPTY, default="")
    blob: str = _wire("blob", _OMIT_EMPTY, default="")
    annotations: Annotations | None = _wire("annotations", _OMIT_NONE, default=None)


@dataclass
class Content:
    """A content item: text, image, audio, resource or resource_link."""

    type: str = ""
    text: str = _wire("text", _OMIT_EMPTY, default="")
    data: str = _wire("data", _OMIT_EMPTY, default="")
    mime_type: str = _wire("mimeType", _OMIT_EMPTY, default="")
    uri: str = _wire("uri", _OMIT_EMPTY, default="")
    name: str = _wire("name", _OMIT_EMPTY, default="")
    description: str = _wire("description", _OMIT_EMPTY, default="")
    resource: Resource | None = _wire("resource", _OMIT_NONE, default=None)
    annotations: Annotations | None = _wire("annotations", _OMIT_NONE, default=None)


@dataclass
class ToolCallResult:
    content: list[Content] = field(default_factory=list)
    is_error: bool = _wire("isError", _OMIT_EMPTY, default=False)
    structured_content: Any = _wire("structuredContent", _OMIT_NONE, default=None)


@dataclass
class PromptArgument:
    name: str = ""
    description: str = _wire("description", _OMIT_EMPTY, default="")
    required: bool = _wire("required", _OMIT_EMPTY, default=False)


@dataclass
class Prompt:
    name: str = ""
    description: str = _wire("description", _OMIT_EMPTY, default="")
    arguments: list[PromptArgument] = _wire("arguments", _OMIT_EMPTY, default_factory=list)


@dataclass
class PromptMessage:
    role: str = ""
    content: Content = field(default_factory=Content)


@dataclass
class PromptGetResult:
    description: str = _wire("description", _OMIT_EMPTY, default="")
    messages: list[PromptMessage] = field(default_factory=list)


@dataclass
class ResourceTemplate:
    uri_template: str = _wire("uriTemplate", default="")
    name: str = ""
    description: str = _wire("description", _OMIT_EMPTY, default="")
    mime_type: str = _wire("mimeType", _OMIT_EMPTY, default="")


@dataclass
class ResourceContents:
    uri: str = ""
    mime_type: str = _wire("mimeType", _OMIT_EMPTY, default="")
    text: str = _wire("text", _OMIT_EMPTY, default="")
    blob: str = _wire("blob", _OMIT_EMPTY, default="")


@dataclass
class ResourceReadResult:
    contents: list[ResourceContents] = field(default_factory=list)


def new_request(request_id: Any, method: str, params: dict[str, Any] | None) -> Request:
    """Create a request; a request_id of None makes it a notification."""
    return Request(
        jsonrpc=JSONRPC_VERSION,
        id=request_id,
        method=method,
        params=params,
        has_id=request_id is not None,
    )


def new_response(request_id: Any, result: dict[str, Any] | None) -> Response:
    return Response(jsonrpc=JSONRPC_VERSION, id=request_id, result=result)


def new_error_response(request_id: Any, code: int, message: str, data: Any) -> ErrorResponse:
    return ErrorResponse(
        jsonrpc=JSONRPC_VERSION,
        id=request_id,
        error=RPCError(code=code, message=message, data=data),
    )


def new_notification(method: str, params: dict[str, Any] | None) -> Notification:
    return Notification(jsonrpc=JSONRPC_VERSION, method=method, params=params)


def new_text_content(text: str) -> Content:
    return Content(type="text", text=text)


def new_image_content(data: str, mime_type: str) -> Content:
    return Content(type="image", data=data, mime_type=mime_type)


def new_resource_link_content(uri: str, name: str, description: str, mime_type: str) -> Content:
    return Content(
        type="resource_link",
        uri=uri,
        name=name,
        description=description,
        mime_type=mime_type,
    )