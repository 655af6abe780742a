import pytest

from jenkinsmcp.protocol import Tool, new_text_content, to_wire
from jenkinsmcp.registry import (
    ToolRegistry,
    new_boolean_property,
    new_json_schema,
    new_number_property,
    new_object_property,
    new_string_property,
)


def _echo(args):
    return [new_text_content(str(args.get("value", "")))]


def test_register_and_get():
    registry = ToolRegistry()
    tool = Tool(name="echo", description="Echo a value")
    registry.register(tool, _echo)
    registered = registry.get("echo")
    assert registered.tool == tool
    assert registered.handler is _echo


def test_get_unknown_returns_none():
    assert ToolRegistry().get("missing") is None


def test_register_empty_name_raises():
    with pytest.raises(ValueError, match="tool name cannot be empty"):
        ToolRegistry().register(Tool(name=""), _echo)


def test_register_missing_handler_raises():
    with pytest.raises(ValueError, match="tool handler cannot be nil"):
        ToolRegistry().register(Tool(name="echo"), None)


def test_register_replaces_existing():
    registry = ToolRegistry()
    registry.register(Tool(name="echo", description="first"), _echo)
    registry.register(Tool(name="echo", description="second"), _echo)
    tools = registry.list()
    assert [t.description for t in tools] == ["second"]


def test_list_returns_all_tools():
    registry = ToolRegistry()
    for name in ("a", "b", "c"):
        registry.register(Tool(name=name), _echo)
    assert sorted(t.name for t in registry.list()) == ["a", "b", "c"]


def test_execute_unknown_tool():
    result = ToolRegistry().execute("nope", {})
    assert result.is_error is True
    assert result.content[0].text == "Tool not found: nope"


def test_execute_success_passes_arguments():
    registry = ToolRegistry()
    registry.register(Tool(name="echo"), _echo)
    result = registry.execute("echo", {"value": "hello"})
    assert result.is_error is False
    assert result.content == [new_text_content("hello")]


def test_execute_with_none_arguments_gives_empty_dict():
    seen = []
    registry = ToolRegistry()
    registry.register(Tool(name="probe"), lambda args: seen.append(args) or [])
    registry.execute("probe", None)
    assert seen == [{}]


def test_execute_handler_failure_is_reported():
    def failing(args):
        raise RuntimeError("boom")

    registry = ToolRegistry()
    registry.register(Tool(name="bad"), failing)
    result = registry.execute("bad", {})
    assert result.is_error is True
    assert result.content[0].text == "Tool execution failed: boom"
    assert to_wire(result)["isError"] is True


def test_json_schema_with_required():
    props = {"job": new_string_property("Job name or path")}
    schema = new_json_schema("object", props, ["job"])
    assert schema == {"type": "object", "properties": props, "required": ["job"]}


@pytest.mark.parametrize("required", [None, []])
def test_json_schema_without_required(required):
    schema = new_json_schema("object", {}, required)
    assert "required" not in schema
    assert schema["type"] == "object"


@pytest.mark.parametrize(
    "factory, kind",
    [
        (new_string_property, "string"),
        (new_number_property, "number"),
        (new_boolean_property, "boolean"),
    ],
)
def test_scalar_properties(factory, kind):
    assert factory("Build number") == {"type": kind, "description": "Build number"}


def test_object_property():
    inner = {"x": new_number_property("x")}
    prop = new_object_property("Point", inner, ["x"])
    assert prop["type"] == "object"
    assert prop["description"] == "Point"
    assert prop["properties"] == inner
    assert prop["required"] == ["x"]
    assert "required" not in new_object_property("Point", inner, None)