from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    NonNegativeInt,
    StringConstraints,
    Tag,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

Transport = Literal["stdio", "sse", "http"]
TRANSPORTS: tuple[str, ...] = ("stdio", "sse", "http")

# Key order used when writing entries back to disk.
_FIELD_ORDER = (
    "name",
    "type",
    "command",
    "args",
    "url",
    "headers",
    "env",
    "description",
    "estimated_tokens",
)


def _present(data: dict[str, Any], keys: tuple[str, ...]) -> list[str]:
    return [k for k in keys if data.get(k) not in (None, "", [], {})]


class _ServerBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    name: NonEmptyStr
    description: str | None = None
    estimated_tokens: NonNegativeInt | None = None
    env: dict[str, str] | None = None
    type: Transport | None = None

    @property
    def transport(self) -> Transport:
        return self.type or "stdio"

    @field_validator("estimated_tokens", mode="before")
    @classmethod
    def _reject_bool_tokens(cls, value: Any) -> Any:
        # true/false are not token counts
        if isinstance(value, bool):
            raise PydanticCustomError("bool_not_int", "Input should be a valid integer, not a boolean")
        return value

    def to_entry(self) -> dict[str, Any]:
        """Value stored under mcpServers[name] in a host config (no name key)."""
        record = self.to_record()
        del record["name"]
        return record

    def to_record(self) -> dict[str, Any]:
        """Registry row: the entry plus its name."""
        data = self.model_dump(mode="json", exclude_none=True)
        return {key: data[key] for key in _FIELD_ORDER if key in data}


class StdioServer(_ServerBase):
    """A server the host starts as a subprocess and talks to over stdin/stdout."""

    type: Literal["stdio"] | None = None
    command: NonEmptyStr
    args: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _reject_url_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            mixed = _present(data, ("url", "headers"))
            if mixed:
                raise PydanticCustomError(
                    "mixed_transport",
                    "stdio servers take 'command' and 'args', not {fields}",
                    {"fields": ", ".join(repr(k) for k in mixed)},
                )
        return data

    @field_validator("args", mode="before")
    @classmethod
    def _null_args(cls, value: Any) -> Any:
        return [] if value is None else value


class _RemoteServer(_ServerBase):
    url: NonEmptyStr
    headers: dict[str, str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _reject_command_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            mixed = _present(data, ("command", "args"))
            if mixed:
                raise PydanticCustomError(
                    "mixed_transport",
                    "{kind} servers take 'url', not {fields}",
                    {
                        "kind": data.get("type"),
                        "fields": ", ".join(repr(k) for k in mixed),
                    },
                )
        return data


class SSEServer(_RemoteServer):
    """A remote server reached over server-sent events."""

    type: Literal["sse"]


class HTTPServer(_RemoteServer):
    """A remote server reached over streamable HTTP."""

    type: Literal["http"]


def _transport_of(value: Any) -> str | None:
    if isinstance(value, dict):
        kind = value.get("type")
        if kind is None:
            return "stdio"
        return kind if isinstance(kind, str) else repr(kind)
    return getattr(value, "transport", None)


# An absent type means stdio, so the tag comes from a callable rather than the field itself.
ServerDefinition = Annotated[
    Annotated[StdioServer, Tag("stdio")]
    | Annotated[SSEServer, Tag("sse")]
    | Annotated[HTTPServer, Tag("http")],
    Discriminator(
        _transport_of,
        custom_error_type="invalid_transport",
        custom_error_message="type must be one of 'stdio', 'sse', 'http'",
    ),
]
