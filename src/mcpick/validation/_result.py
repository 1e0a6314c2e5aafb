from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ..errors import InvalidDefinitionError

Level = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """One finding. `path` is dotted/bracketed (mcpServers.demo.args[0]); empty for the whole value."""

    level: Level
    path: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of checking a server definition or an mcpServers document.

    `value` holds the parsed model and is only set when nothing failed.
    Warnings never make a result invalid.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    value: Any = None

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    def messages(self, level: Level | None = None) -> list[str]:
        return [i.message for i in self.issues if level is None or i.level == level]

    def to_error(self, prefix: str) -> InvalidDefinitionError:
        """The exception the raising parse_* entry points throw for this result."""
        summary = "; ".join(self.messages("error"))
        return InvalidDefinitionError(f"{prefix}: {summary}", self.errors)
