"""Tests for server definition models and the documents that hold them."""

import pytest
from pydantic import ValidationError

from mcpick.models import HTTPServer, LiveConfig, RegistryFile, SSEServer, StdioServer
from mcpick.validation import parse_server


def test_stdio_is_default_transport():
    server = parse_server({"name": "demo", "command": "npx", "args": ["-y", "demo"]})
    assert isinstance(server, StdioServer)
    assert server.transport == "stdio"
    assert server.type is None


def test_explicit_transports_pick_their_model():
    assert isinstance(parse_server({"name": "a", "type": "stdio", "command": "x"}), StdioServer)
    assert isinstance(parse_server({"name": "b", "type": "sse", "url": "http://h/sse"}), SSEServer)
    assert isinstance(parse_server({"name": "c", "type": "http", "url": "http://h/mcp"}), HTTPServer)


def test_transport_follows_type_field():
    assert parse_server({"name": "a", "type": "stdio", "command": "x"}).transport == "stdio"
    assert parse_server({"name": "b", "type": "sse", "url": "http://h"}).transport == "sse"
    assert parse_server({"name": "c", "type": "http", "url": "http://h"}).transport == "http"


def test_args_default_to_empty_list():
    assert parse_server({"name": "demo", "command": "npx"}).args == []
    assert parse_server({"name": "demo", "command": "npx", "args": None}).args == []


def test_name_is_trimmed():
    assert parse_server({"name": "  demo ", "command": "npx"}).name == "demo"


def test_unknown_fields_are_dropped():
    server = parse_server({"name": "demo", "command": "npx", "autoApprove": ["x"]})
    assert "autoApprove" not in server.to_record()


def test_models_are_frozen():
    server = parse_server({"name": "demo", "command": "npx"})
    with pytest.raises(ValidationError):
        server.command = "other"


def test_to_record_key_order_and_none_fields():
    server = parse_server(
        {
            "estimated_tokens": 1200,
            "description": "Demo",
            "env": {"TOKEN": "x"},
            "args": ["-y"],
            "command": "npx",
            "name": "demo",
        }
    )
    record = server.to_record()
    assert list(record) == ["name", "command", "args", "env", "description", "estimated_tokens"]
    assert "type" not in record
    assert "url" not in record


def test_to_entry_drops_name():
    server = parse_server({"name": "web", "type": "http", "url": "https://h/mcp"})
    assert server.to_entry() == {"type": "http", "url": "https://h/mcp"}


def test_record_parses_back_to_equal_definition():
    server = parse_server(
        {"name": "web", "type": "sse", "url": "https://h/sse", "headers": {"Auth": "t"}}
    )
    assert parse_server(server.to_record()) == server


# --- documents ---


def test_live_config_injects_names_and_keeps_other_keys():
    config = LiveConfig.model_validate(
        {
            "other_field": {"nested": True},
            "mcpServers": {"demo": {"command": "npx", "args": ["-y", "demo"]}},
        }
    )
    assert config.mcp_servers["demo"].name == "demo"
    assert config.model_extra == {"other_field": {"nested": True}}


def test_live_config_entries_match_disk_shape():
    config = LiveConfig.model_validate(
        {"mcpServers": {"demo": {"command": "npx", "args": ["-y", "demo"]}}}
    )
    assert config.entries() == {"demo": {"command": "npx", "args": ["-y", "demo"]}}


def test_live_config_null_or_missing_servers():
    assert LiveConfig.model_validate({"mcpServers": None}).mcp_servers == {}
    assert LiveConfig.model_validate({}).mcp_servers == {}


def test_registry_file_default_empty():
    assert RegistryFile().servers == []
    registry = RegistryFile.model_validate({"servers": [{"name": "demo", "command": "npx"}]})
    assert registry.servers[0].name == "demo"
