"""MCPick: pick which MCP servers Claude Code loads, per scope, with backups and profiles."""

__version__ = "0.1.0"

from .errors import (
    BackupNotFoundError,
    InvalidDefinitionError,
    LaunchError,
    LoadError,
    MCPickError,
    NoServersError,
    ProfileNotFoundError,
)
from .manager import MCPickManager, make_manager
from .models import HTTPServer, LiveConfig, ServerDefinition, SSEServer, StdioServer
from .paths import Paths, resolve_paths
from .validation import parse_server, validate_live_config, validate_server

__all__ = [
    "BackupNotFoundError",
    "HTTPServer",
    "InvalidDefinitionError",
    "LaunchError",
    "LiveConfig",
    "LoadError",
    "MCPickError",
    "MCPickManager",
    "NoServersError",
    "Paths",
    "ProfileNotFoundError",
    "SSEServer",
    "ServerDefinition",
    "StdioServer",
    "__version__",
    "make_manager",
    "parse_server",
    "resolve_paths",
    "validate_live_config",
    "validate_server",
]
