"""Tests for ScopeResolver: where each scope's mcpServers map lives."""

import json
from pathlib import Path

import pytest

from mcpick.manager import ScopeResolver


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


def _layout(tmp_path):
    home = tmp_path / "home"
    cwd = home / "a" / "b" / "c"
    cwd.mkdir(parents=True)
    return home, cwd, home / ".claude.json"


def test_user_scope_is_host_config(tmp_path):
    home, cwd, host = _layout(tmp_path)
    target = ScopeResolver(host, cwd, home).resolve("user")
    assert target.path == host
    assert target.keys == ("mcpServers",)


def test_project_scope_searches_upward(tmp_path):
    home, cwd, host = _layout(tmp_path)
    _write(home / "a" / "b" / ".mcp.json", {"mcpServers": {"demo": {"command": "npx"}}})
    resolver = ScopeResolver(host, cwd, home)
    target = resolver.resolve("project")
    assert target.found
    assert target.path == home / "a" / "b" / ".mcp.json"
    assert resolver.enabled_names("project") == ["demo"]


def test_project_scope_skips_unparsable_file(tmp_path):
    home, cwd, host = _layout(tmp_path)
    (cwd / ".mcp.json").write_text("{oops")
    _write(home / "a" / ".mcp.json", {"mcpServers": {}})
    assert ScopeResolver(host, cwd, home).resolve("project").path == home / "a" / ".mcp.json"


def test_project_scope_stops_at_home(tmp_path):
    home, cwd, host = _layout(tmp_path)
    _write(tmp_path / ".mcp.json", {"mcpServers": {"outside": {"command": "x"}}})
    resolver = ScopeResolver(host, cwd, home)
    target = resolver.resolve("project")
    assert not target.found
    assert target.path == cwd / ".mcp.json"
    assert resolver.enabled_names("project") == []


def test_project_scope_includes_home(tmp_path):
    home, cwd, host = _layout(tmp_path)
    _write(home / ".mcp.json", {"mcpServers": {}})
    assert ScopeResolver(host, cwd, home).resolve("project").path == home / ".mcp.json"


def test_search_path_outside_home_reaches_root(tmp_path):
    cwd = tmp_path / "work"
    cwd.mkdir()
    resolver = ScopeResolver(tmp_path / ".claude.json", cwd, tmp_path / "elsewhere")
    chain = resolver.search_path()
    assert chain[0] == cwd
    assert chain[-1] == Path(cwd.anchor)


def test_local_scope_uses_nearest_project_entry(tmp_path):
    home, cwd, host = _layout(tmp_path)
    _write(
        host,
        {
            "projects": {
                str(home / "a"): {"mcpServers": {"far": {"command": "x"}}},
                str(home / "a" / "b"): {"mcpServers": {"near": {"command": "x"}}},
                str(cwd): {"mcpServers": {}},
            }
        },
    )
    resolver = ScopeResolver(host, cwd, home)
    target = resolver.resolve("local")
    assert target.keys == ("projects", str(home / "a" / "b"), "mcpServers")
    assert resolver.enabled_names("local") == ["near"]


def test_local_scope_defaults_to_cwd(tmp_path):
    home, cwd, host = _layout(tmp_path)
    target = ScopeResolver(host, cwd, home).resolve("local")
    assert not target.found
    assert target.path == host
    assert target.keys == ("projects", str(cwd), "mcpServers")


def test_unknown_scope_raises(tmp_path):
    home, cwd, host = _layout(tmp_path)
    with pytest.raises(ValueError, match="Unknown scope"):
        ScopeResolver(host, cwd, home).resolve("global")
