from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from ._result import ValidationIssue, ValidationResult
from ._server import (
    parse_live_config,
    parse_registry,
    parse_server,
    validate_live_config,
    validate_server,
)


def validate_live_config_file(path: Path) -> ValidationResult:
    """Load and validate a host config, .mcp.json, backup or profile file from disk."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return validate_live_config(data)


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "parse_live_config",
    "parse_registry",
    "parse_server",
    "validate_live_config",
    "validate_live_config_file",
    "validate_server",
]
