"""Protocols (ports) for the server manager."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from ..bridge import CLIResult
    from ..models.server import ServerDefinition

Scope = Literal["user", "project", "local"]


class RegistryAdapter(Protocol):
    """Stores the catalog of every known server definition (servers.json)."""

    def get_servers(self) -> list[ServerDefinition]: ...
    def set_servers(self, servers: list[ServerDefinition]) -> None: ...


class HostCLI(Protocol):
    """The host tool's own command line, used to install and remove servers."""

    def is_available(self) -> bool: ...
    def install(self, server: ServerDefinition, scope: Scope) -> CLIResult: ...
    def uninstall(self, name: str, scope: Scope | None = None) -> CLIResult: ...
    def launch(self) -> int: ...
