"""Tests for ServerRegistry over the in-memory adapter."""

from mcpick.manager import ServerRegistry
from mcpick.manager._in_memory import InMemoryRegistryAdapter
from mcpick.validation import parse_server


def _server(name, command="npx"):
    return parse_server({"name": name, "command": command})


def test_upsert_is_idempotent():
    adapter = InMemoryRegistryAdapter()
    registry = ServerRegistry(adapter)
    registry.upsert(_server("demo"))
    registry.upsert(_server("demo"))
    assert [s.name for s in registry.list_all()] == ["demo"]


def test_upsert_replaces_definition_in_place():
    registry = ServerRegistry(InMemoryRegistryAdapter([_server("a"), _server("b"), _server("c")]))
    registry.upsert(_server("b", "uvx"))
    assert [s.name for s in registry.list_all()] == ["a", "b", "c"]
    assert registry.get("b").command == "uvx"


def test_get_missing_returns_none():
    assert ServerRegistry(InMemoryRegistryAdapter()).get("nope") is None


def test_sync_many_writes_once():
    adapter = InMemoryRegistryAdapter([_server("a")])
    registry = ServerRegistry(adapter)
    registry.sync_many([_server("b"), _server("c"), _server("a", "uvx")])
    assert adapter.write_count == 1
    assert [s.name for s in registry.list_all()] == ["a", "b", "c"]


def test_load_returns_registry_file():
    registry = ServerRegistry(InMemoryRegistryAdapter([_server("a")]))
    assert [s.name for s in registry.load().servers] == ["a"]


def test_list_all_returns_copies():
    adapter = InMemoryRegistryAdapter([_server("a")])
    registry = ServerRegistry(adapter)
    first = registry.list_all()[0]
    assert first == adapter.get_servers()[0]
    assert first is not adapter.get_servers()[0]
