"""Server management API — registry, scopes, reconciliation, backups and profiles."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..bridge import ClaudeCLI
from ._adapters import LocalFilesystemRegistryAdapter
from ._backups import MAX_BACKUPS, BackupManager, BackupRecord
from ._manager import AddResult, MCPickManager
from ._profiles import ProfileInfo, ProfileManager, sanitize_profile_name
from ._protocols import HostCLI, RegistryAdapter, Scope
from ._reconciler import ConfigReconciler, ReconcileReport, compute_delta
from ._registry import ServerRegistry
from ._scopes import SCOPE_DESCRIPTIONS, SCOPES, ScopeResolver, ScopeTarget

if TYPE_CHECKING:
    from ..paths import Paths


def make_manager(
    paths: Paths,
    cwd: Path | None = None,
    home: Path | None = None,
    cli: HostCLI | None = None,
) -> MCPickManager:
    """Build an MCPickManager over the local filesystem.

    cwd: where project/local scope lookups start; defaults to the current directory
    home: upper bound of those lookups; defaults to the user's home
    cli: host CLI bridge; defaults to ClaudeCLI()
    """
    cli = cli if cli is not None else ClaudeCLI()
    resolver = ScopeResolver(
        paths.host_config,
        cwd=cwd if cwd is not None else Path.cwd(),
        home=home if home is not None else Path.home(),
    )
    reconciler = ConfigReconciler(resolver, cli)
    return MCPickManager(
        registry=ServerRegistry(LocalFilesystemRegistryAdapter(paths.registry)),
        resolver=resolver,
        reconciler=reconciler,
        backups=BackupManager(paths.backups_dir, reconciler),
        profiles=ProfileManager(paths.profiles_dir, reconciler),
        cli=cli,
    )


__all__ = [
    "AddResult",
    "BackupManager",
    "BackupRecord",
    "ConfigReconciler",
    "HostCLI",
    "LocalFilesystemRegistryAdapter",
    "MAX_BACKUPS",
    "MCPickManager",
    "ProfileInfo",
    "ProfileManager",
    "ReconcileReport",
    "RegistryAdapter",
    "SCOPES",
    "SCOPE_DESCRIPTIONS",
    "Scope",
    "ScopeResolver",
    "ScopeTarget",
    "ServerRegistry",
    "compute_delta",
    "sanitize_profile_name",
    "make_manager",
]
