# jenkinsmcp

Building blocks for driving Jenkins from tools and assistants:

- **`jenkinsmcp.protocol`** – JSON-RPC 2.0 and Model Context Protocol message
  types (`Request`, `Response`, `ErrorResponse`, `Tool`, `Content`, `Prompt`,
  `ResourceTemplate`, …), constructors such as `new_response()` and
  `new_text_content()`, and `to_wire()` to turn them into plain JSON-ready
  dictionaries with the protocol's camelCase field names.
- **`jenkinsmcp.registry`** – `ToolRegistry` for registering callable tools, and
  JSON-schema helpers such as `new_json_schema()` and `new_string_property()`.
- **`jenkinsmcp.server`** – a line-delimited JSON-RPC `Server` that answers
  `initialize`, `tools/list`, `tools/call`, `resources/list`, `resources/read`,
  `prompts/list` and `prompts/get`, with `matches_template()` for resource URI
  templates.
- **`jenkinsmcp.prompts`** – four ready-made prompt templates
  (`diagnose_build_failure`, `review_job_config`, `summarize_build_history`,
  `validate_jenkinsfile`), installed with `register_default_prompts(server)`.
- **`jenkinsmcp.pkce`** – PKCE verifier, S256 challenge and state generation.
- **`jenkinsmcp.output`** – aligned tables, JSON, coloured build statuses and
  structured error output via `print_error()`.
- **`jenkinsmcp.notification`** – desktop notifications on macOS and Linux.

The package has no third-party runtime dependencies.

## Registering a tool

```python
from jenkinsmcp.protocol import Tool, new_text_content
from jenkinsmcp.registry import ToolRegistry, new_json_schema, new_string_property

registry = ToolRegistry()

def greet(args):
    return [new_text_content(f"Hello, {args['name']}!")]

registry.register(
    Tool(
        name="greet",
        description="Say hello",
        input_schema=new_json_schema(
            "object", {"name": new_string_property("Who to greet")}, ["name"]
        ),
    ),
    greet,
)

result = registry.execute("greet", {"name": "Jenkins"})
```

`register()` raises `ValueError` for an empty tool name or a missing handler.
A failing handler or an unknown tool name does not raise: `execute()` returns a
`ToolCallResult` with `is_error` set and a text message describing the problem.

## Serving over standard input and output

```python
from jenkinsmcp.prompts import register_default_prompts
from jenkinsmcp.server import Server

server = Server("jenkins", "0.1.0", "Jenkins tools")
server.set_registry(registry)          # the registry from the example above
register_default_prompts(server)
server.start()                         # returns at end of input or after stop()
```

Each input line is one JSON-RPC message; each reply is written as one line of
compact JSON. Other streams can be passed as `reader=` and `writer=`, and
`process_one_request()` handles a single line at a time. Messages without an
`id` are treated as notifications and get no reply. Invalid JSON, a wrong
`jsonrpc` version, a missing method, a `null` id, an unknown method and a
failing handler are answered with the standard JSON-RPC error codes.

Resources are added with `add_resource_template(template, handler)`, where the
handler takes the requested URI and returns a `ResourceReadResult`; prompts
with `add_prompt(prompt, handler)`. Any other method can be added with
`register_handler(method, handler)`.

## Resource URI templates

```python
from jenkinsmcp.server import matches_template

matches_template("jenkins:///{job}/{number}/log", "jenkins:///folder/app/42/log")  # True
matches_template("jenkins:///{job}/config.xml", "jenkins:///system/log")          # False
```

Every `{variable}` must match at least one character.

## PKCE helpers

```python
from jenkinsmcp.pkce import generate_verifier, challenge_from_verifier, generate_state

verifier = generate_verifier()                 # 43 characters, base64url
challenge = challenge_from_verifier(verifier)  # S256, base64url without padding
state = generate_state()
```

## Console output

```python
import sys
from jenkinsmcp.output import Format, NotFoundError, print_error, print_table, status_color

print_table(sys.stdout, ["NAME", "STATUS"], [["app", status_color("SUCCESS")]])
print_error(sys.stderr, NotFoundError(resource_type="Job", resource_name="app"), Format.JSON)
```

`print_error()` recognises `JenkinsConnectionError`, `AuthenticationError`,
`JenkinsPermissionError` and `NotFoundError` (also when raised as the cause of
another exception) and writes an `error_code`, `message`, `details` and
`suggestions`; any other exception becomes `error_code` `"error"`. In table
format the message is written after a red `Error:` prefix.

## Notifications

```python
from jenkinsmcp.notification import send_build_complete

send_build_complete("app", 42, "SUCCESS")
```

This runs `osascript` on macOS and `notify-send` on Linux. On other systems,
or when the command fails, a message goes to standard error and nothing is
raised.

## What this package does not do

- It contains no Jenkins API client: the server starts with no tools and no
  resources, and the Jenkins operations have to be supplied as your own tool
  and resource handlers.
- It does not run an OAuth login flow or exchange tokens; `jenkinsmcp.pkce`
  only produces the PKCE and state values such a flow needs.
- It provides no command-line program, stores no profiles or configuration,
  and does not check for or install new releases.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.