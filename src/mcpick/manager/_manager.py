"""MCPickManager — the operations behind each command, over registry, scopes and files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.config import LiveConfig
    from ..models.server import ServerDefinition
    from ._backups import BackupManager, BackupRecord
    from ._profiles import ProfileInfo, ProfileManager
    from ._protocols import HostCLI, Scope
    from ._reconciler import ConfigReconciler, ReconcileReport
    from ._registry import ServerRegistry
    from ._scopes import ScopeResolver

logger = logging.getLogger(__name__)


@dataclass
class AddResult:
    server: ServerDefinition
    scope: Scope
    installed: bool
    error: str | None = None


class MCPickManager:
    def __init__(
        self,
        registry: ServerRegistry,
        resolver: ScopeResolver,
        reconciler: ConfigReconciler,
        backups: BackupManager,
        profiles: ProfileManager,
        cli: HostCLI,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.reconciler = reconciler
        self.backups = backups
        self.profiles = profiles
        self.cli = cli

    def import_enabled(self) -> int:
        """Seed an empty registry from the user config. Returns how many servers were imported."""
        if self.registry.list_all():
            return 0
        current = self.reconciler.enabled_servers(self.reconciler.read_enabled("user"))
        if current:
            self.registry.sync_many(current)
            logger.info("Imported %d server(s) from the host config into the registry", len(current))
        return len(current)

    def available_servers(self) -> list[ServerDefinition]:
        return self.registry.list_all()

    def enabled_names(self, scope: Scope) -> list[str]:
        return self.resolver.enabled_names(scope)

    def edit(self, selected_names: list[str], scope: Scope) -> ReconcileReport:
        """Enable exactly the named registry servers in scope and sync them back to the registry."""
        wanted = set(selected_names)
        selected = [s for s in self.registry.list_all() if s.name in wanted]
        report = self.reconciler.reconcile(selected, scope)
        self.registry.sync_many(selected)
        return report

    def add_server(self, server: ServerDefinition, scope: Scope) -> AddResult:
        """Register a server, then install it through the host CLI when there is one."""
        self.registry.upsert(server)
        if not self.cli.is_available():
            return AddResult(server=server, scope=scope, installed=False)
        result = self.cli.install(server, scope)
        return AddResult(server=server, scope=scope, installed=result.success, error=result.error)

    def backup(self) -> BackupRecord:
        return self.backups.create()

    def list_backups(self) -> list[BackupRecord]:
        return self.backups.list_backups()

    def restore(self, filename: str) -> LiveConfig:
        config = self.backups.restore(filename)
        self.registry.sync_many(self.reconciler.enabled_servers(config))
        return config

    def save_profile(self, name: str) -> int:
        return self.profiles.save(name)

    def load_profile(self, name: str) -> LiveConfig:
        return self.profiles.load(name)

    def apply_profile(self, name: str) -> LiveConfig:
        config = self.profiles.apply(name)
        self.registry.sync_many(self.reconciler.enabled_servers(config))
        return config

    def list_profiles(self) -> list[ProfileInfo]:
        return self.profiles.list_profiles()

    def launch(self) -> int:
        return self.cli.launch()
