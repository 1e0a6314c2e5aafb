from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import LaunchError
from ..models.server import StdioServer

if TYPE_CHECKING:
    from ..manager._protocols import Scope
    from ..models.server import ServerDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CLIResult:
    success: bool
    error: str | None = None


def build_add_args(server: ServerDefinition, scope: Scope) -> list[str]:
    """Arguments for `claude mcp add` (without the executable).

    -e and -H take several values each, so nothing positional may follow them:
    stdio ends the values with `--`, remote servers put name and url first.
    """
    env_flags = [f for key, value in (server.env or {}).items() for f in ("-e", f"{key}={value}")]
    if isinstance(server, StdioServer):
        return [
            "mcp", "add", server.name, "--transport", "stdio", "--scope", scope,
            *env_flags, "--", server.command, *server.args,
        ]
    header_flags = [
        f for key, value in (server.headers or {}).items() for f in ("-H", f"{key}: {value}")
    ]
    return [
        "mcp", "add", "--transport", server.transport, "--scope", scope,
        server.name, server.url, *env_flags, *header_flags,
    ]


def build_remove_args(name: str, scope: Scope | None = None) -> list[str]:
    args = ["mcp", "remove", name]
    if scope is not None:
        args += ["--scope", scope]
    return args


class ClaudeCLI:
    """Runs the host `claude` executable. Failures come back as CLIResult, never raised."""

    def __init__(self, executable: str = "claude", timeout: float = 30) -> None:
        self._executable = executable
        self._timeout = timeout
        self._available: bool | None = None

    def is_available(self) -> bool:
        if self._available is None:
            self._available = self._run(["--version"]).success
        return self._available

    def install(self, server: ServerDefinition, scope: Scope) -> CLIResult:
        result = self._run(build_add_args(server, scope))
        if not result.success:
            return CLIResult(False, f"Failed to add server via CLI: {result.error}")
        return result

    def uninstall(self, name: str, scope: Scope | None = None) -> CLIResult:
        result = self._run(build_remove_args(name, scope))
        if not result.success:
            return CLIResult(False, f"Failed to remove server via CLI: {result.error}")
        return result

    def launch(self) -> int:
        """Run the host tool in the foreground and return its exit status."""
        try:
            return subprocess.run([self._executable]).returncode
        except FileNotFoundError as e:
            raise LaunchError(
                f"{self._executable} not found. Make sure it is installed and in your PATH."
            ) from e

    def _run(self, args: list[str]) -> CLIResult:
        cmd = [self._executable, *args]
        logger.debug("Running %s", cmd)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except FileNotFoundError:
            return CLIResult(False, f"{self._executable} is not installed or not in PATH")
        except subprocess.TimeoutExpired:
            return CLIResult(False, f"{self._executable} timed out after {self._timeout}s")
        except OSError as e:
            return CLIResult(False, str(e))
        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            return CLIResult(False, detail or f"exit status {result.returncode}")
        return CLIResult(True)
