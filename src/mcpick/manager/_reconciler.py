"""ConfigReconciler: the only writer of mcpServers maps."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import LoadError
from ..validation import parse_live_config
from ._adapters import dig, plant, read_json_document, write_json_document

if TYPE_CHECKING:
    from pathlib import Path

    from ..models.config import LiveConfig
    from ..models.server import ServerDefinition
    from ._protocols import HostCLI, Scope
    from ._scopes import ScopeResolver

logger = logging.getLogger(__name__)

# Scopes the host CLI can install into on our behalf.
CLI_SCOPES: tuple[Scope, ...] = ("local", "project")


@dataclass
class ReconcileReport:
    scope: Scope
    added: list[str]
    removed: list[str]
    enabled: list[str]
    errors: list[str] = field(default_factory=list)
    via_cli: bool = False

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def success_count(self) -> int:
        return len(self.added) + len(self.removed) - len(self.errors)


def compute_delta(current: list[str], selected: list[str]) -> tuple[list[str], list[str]]:
    """Names to add (selected minus current) and to remove (current minus selected)."""
    current_set = set(current)
    selected_set = set(selected)
    to_add = [name for name in dict.fromkeys(selected) if name not in current_set]
    to_remove = [name for name in dict.fromkeys(current) if name not in selected_set]
    return to_add, to_remove


class ConfigReconciler:
    def __init__(self, resolver: ScopeResolver, cli: HostCLI | None = None) -> None:
        self._resolver = resolver
        self._cli = cli

    def read_enabled(self, scope: Scope = "user") -> LiveConfig:
        """Parse the enabled servers of a scope. A missing file means nothing is enabled.

        For the user scope the whole host document is parsed, so its other
        top-level keys are available as extras.
        """
        target = self._resolver.resolve(scope)
        if not target.found:
            return parse_live_config({})
        document = read_json_document(target.path)
        if target.keys == ("mcpServers",):
            return parse_live_config(document)
        return parse_live_config({"mcpServers": dig(document, target.keys)})

    @staticmethod
    def enabled_servers(config: LiveConfig) -> list[ServerDefinition]:
        return [server.model_copy(deep=True) for server in config.mcp_servers.values()]

    def write_enabled(self, selected: list[ServerDefinition], scope: Scope = "user") -> Path:
        """Replace a scope's mcpServers map with selected, keeping everything else in the file."""
        target = self._resolver.resolve(scope)
        try:
            document = read_json_document(target.path)
        except LoadError as e:
            logger.warning("Starting from an empty document, %s", e)
            document = {}
        plant(document, target.keys, {server.name: server.to_entry() for server in selected})
        write_json_document(target.path, document)
        return target.path

    def reconcile(self, selected: list[ServerDefinition], scope: Scope) -> ReconcileReport:
        """Make selected the enabled set of scope.

        local/project go through the host CLI one server at a time when it is
        available; failures are collected, nothing is rolled back. Everything
        else is a direct rewrite of the scope's file.
        """
        current = self._resolver.enabled_names(scope)
        names = [server.name for server in selected]
        to_add, to_remove = compute_delta(current, names)
        report = ReconcileReport(scope=scope, added=to_add, removed=to_remove, enabled=names)

        if self._cli is None or scope not in CLI_SCOPES or not self._cli.is_available():
            self.write_enabled(selected, scope)
            return report

        report.via_cli = True
        by_name = {server.name: server for server in selected}
        for name in to_add:
            result = self._cli.install(by_name[name], scope)
            if not result.success:
                report.errors.append(f"Failed to add {name}: {result.error}")
        for name in to_remove:
            result = self._cli.uninstall(name, scope)
            if not result.success:
                report.errors.append(f"Failed to remove {name}: {result.error}")
        for message in report.errors:
            logger.warning(message)
        return report
