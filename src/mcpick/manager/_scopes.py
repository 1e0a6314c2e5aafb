"""Which file and key path hold the enabled servers for a scope."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import LoadError
from ..paths import PROJECT_CONFIG_NAME
from ._adapters import dig, read_json_document

if TYPE_CHECKING:
    from ._protocols import Scope

logger = logging.getLogger(__name__)

SCOPES: tuple[Scope, ...] = ("local", "project", "user")

SCOPE_DESCRIPTIONS: dict[Scope, str] = {
    "local": "This project only (default)",
    "project": "Shared via .mcp.json (version controlled)",
    "user": "Global - all projects",
}

MCP_SERVERS_KEY = "mcpServers"


@dataclass(frozen=True)
class ScopeTarget:
    """Where a scope's mcpServers map lives.

    Attributes:
        path: The JSON file holding the map.
        keys: Key path to the map inside that file.
        found: False when nothing exists yet and path/keys are the default write target.
    """

    scope: Scope
    path: Path
    keys: tuple[str, ...]
    found: bool = True


class ScopeResolver:
    def __init__(self, host_config: Path, cwd: Path, home: Path) -> None:
        self._host_config = Path(host_config)
        self._cwd = Path(cwd).absolute()
        self._home = Path(home).absolute()

    @property
    def cwd(self) -> Path:
        return self._cwd

    def search_path(self) -> list[Path]:
        """cwd and its ancestors, nearest first.

        Stops after home when cwd is inside it, otherwise at the filesystem root.
        """
        chain = [self._cwd, *self._cwd.parents]
        if self._cwd.is_relative_to(self._home):
            return chain[: chain.index(self._home) + 1]
        return chain

    def resolve(self, scope: Scope) -> ScopeTarget:
        if scope == "user":
            return ScopeTarget("user", self._host_config, (MCP_SERVERS_KEY,))
        if scope == "project":
            return self._resolve_project()
        if scope == "local":
            return self._resolve_local()
        raise ValueError(f"Unknown scope {scope!r}; expected one of {', '.join(SCOPES)}")

    def enabled_map(self, scope: Scope) -> dict[str, Any]:
        """Raw mcpServers entries for a scope; {} when the scope has nothing configured."""
        target = self.resolve(scope)
        if not target.found:
            return {}
        return dict(dig(read_json_document(target.path), target.keys))

    def enabled_names(self, scope: Scope) -> list[str]:
        return list(self.enabled_map(scope))

    def _resolve_project(self) -> ScopeTarget:
        keys = (MCP_SERVERS_KEY,)
        for directory in self.search_path():
            candidate = directory / PROJECT_CONFIG_NAME
            if not candidate.is_file():
                continue
            try:
                read_json_document(candidate)
            except LoadError as e:
                logger.debug("Skipping unreadable %s: %s", candidate, e)
                continue
            return ScopeTarget("project", candidate, keys)
        return ScopeTarget("project", self._cwd / PROJECT_CONFIG_NAME, keys, found=False)

    def _resolve_local(self) -> ScopeTarget:
        try:
            projects = dig(read_json_document(self._host_config), ("projects",))
        except LoadError as e:
            logger.debug("No project entries readable from %s: %s", self._host_config, e)
            projects = {}
        for directory in self.search_path():
            entry = projects.get(str(directory))
            if isinstance(entry, dict) and dig(entry, (MCP_SERVERS_KEY,)):
                return ScopeTarget(
                    "local", self._host_config, ("projects", str(directory), MCP_SERVERS_KEY)
                )
        return ScopeTarget(
            "local",
            self._host_config,
            ("projects", str(self._cwd), MCP_SERVERS_KEY),
            found=False,
        )
