"""Named, explicitly saved sets of enabled servers."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import NoServersError, ProfileNotFoundError
from ..validation import parse_live_config
from ._adapters import _atomic_write, read_json_document

if TYPE_CHECKING:
    from ..models.config import LiveConfig
    from ._reconciler import ConfigReconciler

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ProfileInfo:
    name: str
    path: Path
    server_count: int


def sanitize_profile_name(name: str) -> str:
    """Turn a user-supplied profile name into a safe file stem."""
    stem = name.strip()
    if stem.lower().endswith(".json"):
        stem = stem[: -len(".json")]
    stem = _UNSAFE.sub("-", stem).lstrip(".")
    if not stem.strip("-"):
        raise ValueError(f"Invalid profile name: {name!r}")
    return stem


class ProfileManager:
    def __init__(self, profiles_dir: Path, reconciler: ConfigReconciler) -> None:
        self._dir = Path(profiles_dir)
        self._reconciler = reconciler

    @property
    def profiles_dir(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        return self._dir / f"{sanitize_profile_name(name)}.json"

    def save(self, name: str) -> int:
        """Save the enabled user servers under name. Returns how many were saved."""
        config = self._reconciler.read_enabled("user")
        if not config.mcp_servers:
            raise NoServersError()
        path = self.path_for(name)
        _atomic_write(path, json.dumps({"mcpServers": config.entries()}, indent=2))
        logger.debug("Saved profile %s with %d server(s)", path, len(config.mcp_servers))
        return len(config.mcp_servers)

    def load(self, name: str) -> LiveConfig:
        """Read a profile. Both {"mcpServers": {...}} and a bare name map are accepted."""
        path = self.path_for(name)
        if not path.is_file():
            raise ProfileNotFoundError(name, path)
        data = read_json_document(path)
        if "mcpServers" not in data:
            data = {"mcpServers": data}
        return parse_live_config(data)

    def apply(self, name: str) -> LiveConfig:
        config = self.load(name)
        self._reconciler.write_enabled(self._reconciler.enabled_servers(config), "user")
        return config

    def list_profiles(self) -> list[ProfileInfo]:
        """Profiles with a server count; files that don't parse are left out."""
        if not self._dir.is_dir():
            return []
        profiles = []
        for path in sorted(self._dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                continue
            if not isinstance(data, dict):
                continue
            servers = data.get("mcpServers", data)
            if not isinstance(servers, dict):
                continue
            profiles.append(ProfileInfo(name=path.stem, path=path, server_count=len(servers)))
        return profiles
