"""Documents that hold server definitions: the host config and the registry file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .server import ServerDefinition  # noqa: TC001


class LiveConfig(BaseModel):
    """The host tool's config document (or any document with an mcpServers map).

    Keys other than mcpServers are kept as extras so a parse never loses them.
    Each entry is validated with its map key supplied as the server name.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    mcp_servers: dict[str, ServerDefinition] = Field(default_factory=dict, alias="mcpServers")

    @model_validator(mode="before")
    @classmethod
    def _inject_names(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "mcpServers" not in data:
            return data
        servers = data["mcpServers"]
        if servers is None:
            return {**data, "mcpServers": {}}
        if not isinstance(servers, dict):
            return data
        named = {
            key: {**entry, "name": key} if isinstance(entry, dict) else entry
            for key, entry in servers.items()
        }
        return {**data, "mcpServers": named}

    def entries(self) -> dict[str, dict[str, Any]]:
        """The mcpServers map as it is written to disk."""
        return {name: server.to_entry() for name, server in self.mcp_servers.items()}


class RegistryFile(BaseModel):
    """Contents of servers.json: every server definition the tool knows about."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    servers: list[ServerDefinition] = []
