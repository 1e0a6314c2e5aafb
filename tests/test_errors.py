from pathlib import Path

import pytest

from mcpick.errors import (
    BackupNotFoundError,
    InvalidDefinitionError,
    LoadError,
    MCPickError,
    NoServersError,
    ProfileNotFoundError,
)
from mcpick.validation import ValidationIssue


def test_load_error_message():
    err = LoadError("something went wrong")
    assert str(err) == "something went wrong"
    assert err.path is None


def test_load_error_with_path():
    p = Path("/some/file.json")
    err = LoadError("not found", path=p)
    assert err.path == p


def test_invalid_definition_issues():
    issue = ValidationIssue("error", "command", "command: Field required")
    err = InvalidDefinitionError("Invalid server definition", [issue])
    assert err.issues == [issue]
    assert InvalidDefinitionError("bad").issues == []


def test_profile_not_found_message():
    err = ProfileNotFoundError("work", Path("/p/work.json"))
    assert str(err) == "Profile 'work' not found at /p/work.json"
    assert err.name == "work"


def test_no_servers_message():
    assert str(NoServersError()) == "No MCP servers configured to save"


def test_backup_not_found_keeps_filename():
    assert BackupNotFoundError("x.json").filename == "x.json"


@pytest.mark.parametrize(
    "error",
    [
        LoadError("x"),
        InvalidDefinitionError("x"),
        NoServersError(),
        BackupNotFoundError("x"),
        ProfileNotFoundError("x", Path("x")),
    ],
)
def test_errors_share_base(error):
    assert isinstance(error, MCPickError)
