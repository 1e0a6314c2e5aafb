"""Resolution of every file location the tool reads or writes."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

CONFIG_DIR_ENV = "CLAUDE_CONFIG_DIR"
HOST_CONFIG_NAME = ".claude.json"
PROJECT_CONFIG_NAME = ".mcp.json"
TOOL_DIR_NAME = "mcpick"

_BACKUP_FORMAT = "mcp-servers-%Y-%m-%d-%H%M%S.json"
_BACKUP_PATTERN = re.compile(r"^mcp-servers-(\d{4}-\d{2}-\d{2}-\d{6})\.json$")


@dataclass(frozen=True)
class Paths:
    """Resolved locations for one command invocation.

    Attributes:
        base_dir: The host tool's config directory (~/.claude by default).
        host_config: The host tool's live config file (.claude.json).
        tool_dir: Directory owned by this tool inside base_dir.
    """

    base_dir: Path
    host_config: Path
    tool_dir: Path

    @property
    def registry(self) -> Path:
        return self.tool_dir / "servers.json"

    @property
    def backups_dir(self) -> Path:
        return self.tool_dir / "backups"

    @property
    def profiles_dir(self) -> Path:
        return self.tool_dir / "profiles"


def resolve_paths(environ: Mapping[str, str], home: Path) -> Paths:
    """Resolve all paths from an explicit environment and home directory.

    With CLAUDE_CONFIG_DIR set, the host config and the tool directory both
    live under that directory. Otherwise the host config sits directly in
    home and everything else under ~/.claude.
    """
    override = environ.get(CONFIG_DIR_ENV, "").strip()
    if override:
        base = Path(override).expanduser()
        host_config = base / HOST_CONFIG_NAME
    else:
        base = home / ".claude"
        host_config = home / HOST_CONFIG_NAME
    return Paths(base_dir=base, host_config=host_config, tool_dir=base / TOOL_DIR_NAME)


def backup_filename(now: datetime) -> str:
    return now.strftime(_BACKUP_FORMAT)


def parse_backup_filename(filename: str) -> datetime | None:
    """Return the timestamp encoded in a backup filename, or None if it doesn't match."""
    match = _BACKUP_PATTERN.match(filename)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d-%H%M%S")
    except ValueError:
        return None
