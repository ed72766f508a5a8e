from scout.tools.base import ToolContract
from scout.tools.catalog.interface import MESSAGE_UPDATE
from scout.tools.registry import DEFAULT_REGISTRY, ToolName, ToolRegistry, UnknownToolError

import pytest


def test_default_registry_covers_every_operation():
    assert set(DEFAULT_REGISTRY.names()) == {name.value for name in ToolName}
    assert len(DEFAULT_REGISTRY) == 26


def test_registry_register_and_lookup():
    registry = ToolRegistry()
    registry.register(MESSAGE_UPDATE)
    assert registry.get("message_update") is MESSAGE_UPDATE
    assert registry.get(ToolName.MESSAGE_UPDATE) is MESSAGE_UPDATE
    assert registry.list() == [MESSAGE_UPDATE]
    assert "message_update" in registry
    assert "todo" not in registry


def test_registry_rejects_names_outside_the_catalog():
    registry = ToolRegistry()
    rogue = ToolContract(
        name="rm_rf", description="nope", input_schema=MESSAGE_UPDATE.input_schema
    )
    with pytest.raises(UnknownToolError):
        registry.register(rogue)


def test_unknown_name_lookup_returns_none():
    assert DEFAULT_REGISTRY.get("not_a_real_tool") is None


def test_validate_unknown_tool_reports_violation_without_raising():
    outcome = DEFAULT_REGISTRY.validate("not_a_real_tool", {})
    assert not outcome.ok
    assert "unknown tool" in outcome.violations[0]


def test_validate_non_object_arguments():
    outcome = DEFAULT_REGISTRY.validate("ls", ["/project/workspace"])
    assert not outcome.ok
    assert outcome.violations == ("(root): arguments must be an object",)


def test_openai_schemas_use_wire_names():
    schemas = {item["function"]["name"]: item for item in DEFAULT_REGISTRY.openai_schemas()}
    assert len(schemas) == 26
    params = schemas["web_search"]["function"]["parameters"]
    assert "dateRange" in params["properties"]
    assert schemas["computer"]["function"]["description"].endswith("1024x768.")


def test_mapping_view_is_read_only():
    mapping = DEFAULT_REGISTRY.as_mapping()
    assert mapping[ToolName.TODO].name == "todo"
    with pytest.raises(TypeError):
        mapping[ToolName.TODO] = MESSAGE_UPDATE
