"""A JSON-RPC 2.0 MCP server that speaks newline-delimited JSON over streams."""

from __future__ import annotations

import json
import sys
import threading
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from .protocol import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    Implementation,
    InitializeResult,
    Prompt,
    PromptGetResult,
    Request,
    ResourceReadResult,
    ResourceTemplate,
    ServerCapabilities,
    new_error_response,
    new_response,
    to_wire,
)
from .registry import ToolRegistry

RequestHandler = Callable[[Request], "dict[str, Any] | None"]
ResourceHandler = Callable[[str], ResourceReadResult]
PromptHandler = Callable[[dict[str, str]], PromptGetResult]

_INSTRUCTIONS = (
    "Jenkins CLI MCP server. Use available tools to interact with Jenkins jobs, "
    "builds, pipelines, nodes, and more."
)


@dataclass
class RegisteredResource:
    """A resource template together with the handler that reads it."""

    template: ResourceTemplate
    handler: ResourceHandler


@dataclass
class RegisteredPrompt:
    """A prompt definition together with the handler that renders it."""

    prompt: Prompt
    handler: PromptHandler


def _check_type(params: dict[str, Any], key: str, kind: type, what: str) -> None:
    value = params.get(key)
    if value is not None and not isinstance(value, kind):
        raise ValueError(f"failed to unmarshal {what}: field {key!r} must be of type {kind.__name__}")


def _tool_call_params(params: dict[str, Any] | None) -> tuple[str, dict[str, Any] | None]:
    if params is None:
        return "", None
    what = "tool call request"
    _check_type(params, "name", str, what)
    _check_type(params, "arguments", dict, what)
    return params.get("name") or "", params.get("arguments")


class Server:
    """Reads JSON-RPC requests line by line and writes one response per line."""

    def __init__(
        self,
        name: str,
        version: str,
        description: str,
        reader: TextIO | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.description = description
        self.initialized = False
        self._reader = reader if reader is not None else sys.stdin
        self._writer = writer if writer is not None else sys.stdout
        self._write_lock = threading.Lock()
        self._handlers_lock = threading.RLock()
        self._handlers: dict[str, RequestHandler] = {}
        self._resources: dict[str, RegisteredResource] = {}
        self._prompts: dict[str, RegisteredPrompt] = {}
        # Until set_registry is called, tools are served from an empty registry.
        self._builtin_tools = ToolRegistry()
        self._stopped = threading.Event()
        self._register_builtin_handlers()

    # -- registration --

    def register_handler(self, method: str, handler: RequestHandler) -> None:
        """Register or replace the handler for a JSON-RPC method."""
        with self._handlers_lock:
            self._handlers[method] = handler

    def add_resource_template(self, template: ResourceTemplate, handler: ResourceHandler) -> None:
        self._resources[template.name] = RegisteredResource(template=template, handler=handler)

    def add_prompt(self, prompt: Prompt, handler: PromptHandler) -> None:
        self._prompts[prompt.name] = RegisteredPrompt(prompt=prompt, handler=handler)

    def set_registry(self, registry: ToolRegistry | None) -> None:
        """Serve tools/list and tools/call from the given registry."""
        if registry is None:
            return

        def tools_list(req: Request) -> dict[str, Any]:
            return {"tools": [to_wire(tool) for tool in registry.list()]}

        def tools_call(req: Request) -> dict[str, Any]:
            name, arguments = _tool_call_params(req.params)
            return to_wire(registry.execute(name, arguments))

        with self._handlers_lock:
            self._handlers["tools/list"] = tools_list
            self._handlers["tools/call"] = tools_call

    def _register_builtin_handlers(self) -> None:
        self.register_handler("initialize", self._handle_initialize)
        self.register_handler("initialized", self._handle_initialized)
        self.register_handler("tools/list", self._handle_tools_list)
        self.register_handler("tools/call", self._handle_tools_call)
        self.register_handler("resources/list", self._handle_resources_list)
        self.register_handler("resources/read", self._handle_resources_read)
        self.register_handler("prompts/list", self._handle_prompts_list)
        self.register_handler("prompts/get", self._handle_prompts_get)

    def _handler_for(self, method: str) -> RequestHandler | None:
        with self._handlers_lock:
            return self._handlers.get(method)

    # -- main loop --

    def start(self) -> None:
        """Process requests until end of input or until stop() is called."""
        while not self._stopped.is_set():
            try:
                if not self.process_one_request():
                    return
            except Exception as exc:  # keep serving after a failed write
                print(f"Error processing request: {exc}", file=sys.stderr)

    def stop(self) -> None:
        """Ask the main loop to finish before the next request."""
        self._stopped.set()

    def process_one_request(self) -> bool:
        """Read and answer one request; return False at end of input."""
        line = self._reader.readline()
        if not line.endswith("\n"):
            return False

        try:
            decoded = json.loads(line)
            req = Request.from_dict({} if decoded is None else decoded)
        except ValueError as exc:
            self._send_error(None, PARSE_ERROR, "Parse error: invalid JSON", str(exc))
            return True

        if req.jsonrpc != "2.0":
            self._send_error(req.id, INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'")
            return True
        if not req.method:
            self._send_error(req.id, INVALID_REQUEST, "Invalid Request: method is required")
            return True
        if not req.has_id:
            self._handle_notification(req)
            return True
        if req.id is None:
            self._send_error(None, INVALID_REQUEST, "Invalid Request: id must not be null")
            return True

        handler = self._handler_for(req.method)
        if handler is None:
            self._send_error(req.id, METHOD_NOT_FOUND, f"Method not found: {req.method}")
            return True

        try:
            result = handler(req)
        except Exception as exc:
            self._send_error(req.id, INTERNAL_ERROR, f"Internal error: {exc}")
            return True

        self._write_json(new_response(req.id, result))
        return True

    def _handle_notification(self, req: Request) -> None:
        handler = self._handler_for(req.method)
        if handler is None:
            return
        try:
            handler(req)
        except Exception:  # notifications never produce a reply
            pass

    # -- built-in handlers --

    def _handle_initialize(self, req: Request) -> dict[str, Any]:
        if req.params is not None:
            what = "initialize request"
            _check_type(req.params, "protocolVersion", str, what)
            _check_type(req.params, "capabilities", dict, what)
            _check_type(req.params, "clientInfo", dict, what)
            client_info = req.params.get("clientInfo") or {}
            _check_type(client_info, "name", str, what)
            _check_type(client_info, "version", str, what)

        result = InitializeResult(
            protocol_version=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools={}, resources={}, prompts={}),
            server_info=Implementation(
                name=self.name,
                version=self.version,
                description=self.description,
            ),
            instructions=_INSTRUCTIONS,
        )
        return to_wire(result)

    def _handle_initialized(self, req: Request) -> None:
        self.initialized = True
        return None

    def _handle_tools_list(self, req: Request) -> dict[str, Any]:
        return {"tools": [to_wire(tool) for tool in self._builtin_tools.list()]}

    def _handle_tools_call(self, req: Request) -> dict[str, Any]:
        name, arguments = _tool_call_params(req.params)
        return to_wire(self._builtin_tools.execute(name, arguments))

    def _handle_resources_list(self, req: Request) -> dict[str, Any]:
        return {"resourceTemplates": [to_wire(r.template) for r in self._resources.values()]}

    def _handle_resources_read(self, req: Request) -> dict[str, Any]:
        if req.params is None:
            raise ValueError("missing params for resources/read request")
        uri = req.params.get("uri")
        if not isinstance(uri, str) or not uri:
            raise ValueError("missing required parameter: uri")

        for registered in self._resources.values():
            if matches_template(registered.template.uri_template, uri):
                return to_wire(registered.handler(uri))

        raise LookupError(f"no resource handler found for URI: {uri}")

    def _handle_prompts_list(self, req: Request) -> dict[str, Any]:
        return {"prompts": [to_wire(p.prompt) for p in self._prompts.values()]}

    def _handle_prompts_get(self, req: Request) -> dict[str, Any]:
        if req is None or req.params is None:
            raise ValueError("missing parameters")
        name = req.params.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("missing required parameter: name")

        registered = self._prompts.get(name)
        if registered is None:
            raise LookupError(f"prompt not found: {name}")

        raw_args = req.params.get("arguments")
        args: dict[str, str] = {}
        if isinstance(raw_args, dict):
            args = {k: v for k, v in raw_args.items() if isinstance(v, str)}

        try:
            result = registered.handler(args)
        except Exception as exc:
            raise RuntimeError(f"prompt handler error: {exc}") from exc

        return to_wire(result)

    # -- output --

    def _send_error(self, request_id: Any, code: int, message: str, data: Any = None) -> None:
        self._write_json(new_error_response(request_id, code, message, data))

    def _write_json(self, message: Any) -> None:
        text = json.dumps(to_wire(message), separators=(",", ":"), ensure_ascii=False)
        with self._write_lock:
            self._writer.write(text + "\n")
            self._writer.flush()


def matches_template(template: str, uri: str) -> bool:
    """Report whether a URI fits a template whose {variables} match non-empty text."""
    t = 0
    u = 0
    while t < len(template):
        if template[t] == "{":
            end = template.find("}", t)
            if end == -1:
                return False
            t = end + 1

            if t < len(template):
                next_brace = template.find("{", t)
                next_static = template[t:] if next_brace == -1 else template[t:next_brace]
                if next_static:
                    pos = uri.find(next_static, u)
                    if pos == -1 or pos == u:
                        return False
                    u = pos
            else:
                if u >= len(uri):
                    return False
                u = len(uri)
        else:
            next_brace = template.find("{", t)
            if next_brace == -1:
                static_part = template[t:]
                t = len(template)
            else:
                static_part = template[t:next_brace]
                t = next_brace

            if not uri.startswith(static_part, u):
                return False
            u += len(static_part)

    return u == len(uri)