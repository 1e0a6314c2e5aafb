"""Tests for ProfileManager."""

import json

import pytest

from mcpick.errors import NoServersError, ProfileNotFoundError
from mcpick.manager import ConfigReconciler, ProfileManager, ScopeResolver, sanitize_profile_name


def _setup(tmp_path, servers=None, **extra):
    host = tmp_path / ".claude.json"
    host.write_text(json.dumps({**extra, "mcpServers": servers or {}}))
    reconciler = ConfigReconciler(ScopeResolver(host, tmp_path, tmp_path))
    return ProfileManager(tmp_path / "profiles", reconciler), host


def test_wrapped_and_bare_formats_are_equivalent(tmp_path):
    profiles, _ = _setup(tmp_path)
    profiles.profiles_dir.mkdir()
    servers = {"demo": {"command": "npx", "args": ["-y", "demo"]}}
    (profiles.profiles_dir / "wrapped.json").write_text(json.dumps({"mcpServers": servers}))
    (profiles.profiles_dir / "bare.json").write_text(json.dumps(servers))

    assert profiles.load("wrapped").entries() == profiles.load("bare").entries()


def test_load_missing_profile(tmp_path):
    profiles, _ = _setup(tmp_path)
    with pytest.raises(ProfileNotFoundError) as exc_info:
        profiles.load("nope")
    assert "Profile 'nope' not found at" in str(exc_info.value)


def test_save_with_nothing_enabled(tmp_path):
    profiles, _ = _setup(tmp_path)
    with pytest.raises(NoServersError):
        profiles.save("empty")
    assert not profiles.profiles_dir.exists()


def test_save_then_apply(tmp_path):
    profiles, host = _setup(tmp_path, {"demo": {"command": "npx"}}, theme="dark")
    assert profiles.save("work") == 1
    assert json.loads((profiles.profiles_dir / "work.json").read_text()) == {
        "mcpServers": {"demo": {"command": "npx", "args": []}}
    }

    host.write_text(json.dumps({"theme": "dark", "mcpServers": {}}))
    config = profiles.apply("work")

    assert list(config.mcp_servers) == ["demo"]
    data = json.loads(host.read_text())
    assert data["theme"] == "dark"
    assert list(data["mcpServers"]) == ["demo"]


def test_list_profiles_skips_bad_files(tmp_path):
    profiles, _ = _setup(tmp_path)
    directory = profiles.profiles_dir
    directory.mkdir()
    (directory / "b.json").write_text(json.dumps({"mcpServers": {"x": {}, "y": {}}}))
    (directory / "a.json").write_text(json.dumps({"x": {}}))
    (directory / "broken.json").write_text("{nope")
    (directory / "list.json").write_text("[]")
    (directory / "readme.txt").write_text("hi")

    listed = [(p.name, p.server_count) for p in profiles.list_profiles()]
    assert listed == [("a", 1), ("b", 2)]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("work", "work"),
        ("  work.json ", "work"),
        ("my work/stuff", "my-work-stuff"),
        ("../etc/passwd", "-etc-passwd"),
    ],
)
def test_sanitize_profile_name(name, expected):
    assert sanitize_profile_name(name) == expected


@pytest.mark.parametrize("name", ["", "   ", "..", "///"])
def test_sanitize_rejects_empty_names(name):
    with pytest.raises(ValueError):
        sanitize_profile_name(name)
