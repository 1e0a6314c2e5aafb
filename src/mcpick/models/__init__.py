from .config import LiveConfig, RegistryFile
from .server import (
    TRANSPORTS,
    HTTPServer,
    ServerDefinition,
    SSEServer,
    StdioServer,
    Transport,
)

__all__ = [
    "HTTPServer",
    "LiveConfig",
    "RegistryFile",
    "SSEServer",
    "ServerDefinition",
    "StdioServer",
    "TRANSPORTS",
    "Transport",
]
