"""ServerRegistry — the catalog of known servers, independent of what is enabled."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models.config import RegistryFile
from ._adapters import merge_by_name

if TYPE_CHECKING:
    from ..models.server import ServerDefinition
    from ._protocols import RegistryAdapter

logger = logging.getLogger(__name__)


class ServerRegistry:
    """Upsert-only store of server definitions keyed by name.

    Every mutation is a full read-modify-write through the adapter. Entries are
    never removed when a server is disabled. Callers always get copies.
    """

    def __init__(self, adapter: RegistryAdapter) -> None:
        self._adapter = adapter

    def load(self) -> RegistryFile:
        return RegistryFile(servers=self.list_all())

    def list_all(self) -> list[ServerDefinition]:
        return [server.model_copy(deep=True) for server in self._adapter.get_servers()]

    def get(self, name: str) -> ServerDefinition | None:
        return next((s for s in self.list_all() if s.name == name), None)

    def upsert(self, server: ServerDefinition) -> None:
        self.sync_many([server])

    def sync_many(self, servers: list[ServerDefinition]) -> None:
        current = self._adapter.get_servers()
        merged = merge_by_name(current, [s.model_copy(deep=True) for s in servers])
        self._adapter.set_servers(merged)
        logger.debug("Registry synced %d server(s); %d total", len(servers), len(merged))
