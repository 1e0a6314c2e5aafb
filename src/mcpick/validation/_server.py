from __future__ import annotations

import shutil
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import InvalidDefinitionError
from ..models.config import LiveConfig, RegistryFile
from ..models.server import TRANSPORTS, ServerDefinition, StdioServer
from ._result import ValidationIssue, ValidationResult

_SERVER = TypeAdapter(ServerDefinition)


def parse_server(data: Any) -> ServerDefinition:
    """Validate one named server definition, raising InvalidDefinitionError on failure."""
    try:
        return _SERVER.validate_python(data)
    except PydanticValidationError as e:
        raise _invalid("Invalid server definition", e) from e


def parse_live_config(data: Any) -> LiveConfig:
    """Validate a whole mcpServers document; entries take their name from the map key."""
    try:
        return LiveConfig.model_validate(data)
    except PydanticValidationError as e:
        raise _invalid("Invalid MCP config", e) from e


def validate_server(data: Any) -> ValidationResult:
    try:
        server = parse_server(data)
    except InvalidDefinitionError as e:
        return ValidationResult(issues=e.issues)
    issues: list[ValidationIssue] = []
    if isinstance(server, StdioServer) and shutil.which(server.command) is None:
        issues.append(
            ValidationIssue("warning", "command", f"Command not found on PATH: {server.command}")
        )
    return ValidationResult(issues=issues, value=server)


def validate_live_config(data: Any) -> ValidationResult:
    try:
        config = parse_live_config(data)
    except InvalidDefinitionError as e:
        return ValidationResult(issues=e.issues)
    return ValidationResult(issues=[], value=config)


def _invalid(prefix: str, exc: PydanticValidationError) -> InvalidDefinitionError:
    issues = [
        ValidationIssue("error", path, f"{path}: {err['msg']}" if path else err["msg"])
        for err in exc.errors(include_url=False)
        for path in [_format_loc(err["loc"])]
    ]
    return ValidationResult(issues).to_error(prefix)


def _format_loc(loc: tuple[int | str, ...]) -> str:
    # Union tags show up in the location right after the value they were picked for;
    # they are dropped unless they are themselves a key of the mcpServers map.
    parts: list[str] = []
    previous: int | str | None = None
    for item in loc:
        is_tag = isinstance(item, str) and item in TRANSPORTS and previous != "mcpServers"
        previous = item
        if is_tag:
            continue
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}" if parts else item)
    return "".join(parts)


def parse_registry(data: Any) -> RegistryFile:
    try:
        return RegistryFile.model_validate(data)
    except PydanticValidationError as e:
        raise _invalid("Invalid server registry", e) from e
