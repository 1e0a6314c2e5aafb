from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .validation import ValidationIssue


class MCPickError(Exception):
    """Base class for errors that abort a single command."""


class LoadError(MCPickError):
    """Raised when a JSON file exists but cannot be read or parsed.

    Attributes:
        path: The file that could not be loaded, if applicable.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidDefinitionError(MCPickError):
    """Raised when a server definition or config document fails validation.

    Attributes:
        issues: Every failing field with the constraint it violated.
    """

    def __init__(self, message: str, issues: list[ValidationIssue] | None = None) -> None:
        self.issues = list(issues or [])
        super().__init__(message)


class ProfileNotFoundError(MCPickError):
    """Raised when loading a profile name that has no file."""

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(f"Profile '{name}' not found at {path}")


class BackupNotFoundError(MCPickError):
    """Raised when restoring a backup filename that is not in the backups directory."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Backup not found: {filename}")


class NoServersError(MCPickError):
    """Raised when saving a profile while no servers are enabled."""

    def __init__(self) -> None:
        super().__init__("No MCP servers configured to save")


class LaunchError(MCPickError):
    """Raised when the host CLI cannot be started."""
