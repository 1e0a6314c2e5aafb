"""JSON file helpers and the filesystem registry adapter."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import LoadError
from ..validation import parse_registry

if TYPE_CHECKING:
    from ..models.server import ServerDefinition

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(data, encoding="utf-8")
    tmp.replace(path)


def read_json_document(path: Path) -> dict[str, Any]:
    """Strict read: a missing file is an empty document, anything unparsable is a LoadError."""
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(f"Invalid JSON in {path}: {e}", path=path) from e
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}", path=path) from e
    if not isinstance(raw, dict):
        raise LoadError(f"Expected a JSON object in {path}", path=path)
    return raw


def write_json_document(path: Path, data: dict[str, Any]) -> None:
    logger.debug("Writing %s", path)
    _atomic_write(path, json.dumps(data, indent=2))


def dig(document: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    """Return the object at a key path, or {} when any step is missing or not an object."""
    node: Any = document
    for key in keys:
        if not isinstance(node, dict):
            return {}
        node = node.get(key)
    return node if isinstance(node, dict) else {}


def plant(document: dict[str, Any], keys: tuple[str, ...], value: Any) -> None:
    """Set value at a key path, creating (or replacing non-object) intermediate nodes."""
    node = document
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = node[key] = {}
        node = child
    node[keys[-1]] = value


def merge_by_name(
    existing: list[ServerDefinition], incoming: list[ServerDefinition]
) -> list[ServerDefinition]:
    """Upsert incoming into existing: same name replaces in place, new names append."""
    merged = list(existing)
    index = {server.name: i for i, server in enumerate(merged)}
    for server in incoming:
        if server.name in index:
            merged[index[server.name]] = server
        else:
            index[server.name] = len(merged)
            merged.append(server)
    return merged


class LocalFilesystemRegistryAdapter:
    """Reads/writes servers.json, creating an empty registry on first access."""

    def __init__(self, registry_path: Path) -> None:
        self._path = Path(registry_path)

    @property
    def path(self) -> Path:
        return self._path

    def get_servers(self) -> list[ServerDefinition]:
        if not self._path.exists():
            self.set_servers([])
            return []
        registry = parse_registry(read_json_document(self._path))
        servers = merge_by_name([], registry.servers)
        if len(servers) != len(registry.servers):
            logger.warning("Duplicate server names in %s; keeping the last of each", self._path)
        return servers

    def set_servers(self, servers: list[ServerDefinition]) -> None:
        out = {"servers": [server.to_record() for server in servers]}
        write_json_document(self._path, out)
