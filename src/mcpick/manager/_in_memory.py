"""In-memory adapters for testing (no disk I/O)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.server import ServerDefinition


class InMemoryRegistryAdapter:
    def __init__(self, servers: list[ServerDefinition] | None = None) -> None:
        self._servers = list(servers or [])
        self.write_count = 0

    def get_servers(self) -> list[ServerDefinition]:
        return list(self._servers)

    def set_servers(self, servers: list[ServerDefinition]) -> None:
        self._servers = list(servers)
        self.write_count += 1
