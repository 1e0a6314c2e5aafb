"""Interactive commands. Each takes the manager and a Prompter and runs to completion or raises."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..manager import SCOPE_DESCRIPTIONS, SCOPES, sanitize_profile_name
from ..models.server import StdioServer
from ..validation import parse_server, validate_server
from ._prompts import Option

if TYPE_CHECKING:
    from ..manager import MCPickManager, Scope
    from ..models.server import ServerDefinition
    from ._prompts import Prompter

_SCOPE_LABELS = {"local": "Local", "project": "Project", "user": "User (Global)"}


def scope_options() -> list[Option[Scope]]:
    return [Option(scope, _SCOPE_LABELS[scope], SCOPE_DESCRIPTIONS[scope]) for scope in SCOPES]


def edit_config(manager: MCPickManager, prompter: Prompter) -> None:
    scope = prompter.select("Which configuration do you want to edit?", scope_options(), "local")

    imported = manager.import_enabled()
    if imported:
        prompter.note(f"Imported {imported} servers from your .claude.json file into registry.")

    servers = manager.available_servers()
    if not servers:
        prompter.note("No MCP servers found in .claude.json or registry. Add servers first.")
        return

    current = manager.enabled_names(scope)
    options = [Option(s.name, s.name, _server_hint(s)) for s in servers]
    selected = prompter.multiselect(
        f"Select MCP servers for {SCOPE_DESCRIPTIONS[scope]}:", options, initial=current
    )

    report = manager.edit(selected, scope)
    for error in report.errors:
        prompter.warn(error)
    if report.errors:
        prompter.note(
            f"Configuration updated with {report.error_count} errors.\n"
            f"Scope: {SCOPE_DESCRIPTIONS[scope]}\n"
            f"Added: {len(report.added)}, Removed: {len(report.removed)}"
        )
    else:
        prompter.note(
            "Configuration updated!\n"
            f"Scope: {SCOPE_DESCRIPTIONS[scope]}\n"
            f"Enabled servers: {len(report.enabled)}"
        )


def backup_config(manager: MCPickManager, prompter: Prompter) -> None:
    record = manager.backup()
    prompter.note(f"Configuration backed up to:\n{record.path}")


def add_server(manager: MCPickManager, prompter: Prompter) -> None:
    scope = prompter.select("Where should this server be installed?", scope_options(), "local")
    method = prompter.select(
        "How would you like to add the server?",
        [
            Option("json", "Paste JSON configuration", "Paste complete server config as JSON"),
            Option("form", "Step-by-step form", "Fill out fields one by one"),
        ],
        "json",
    )
    server = _server_from_json(prompter) if method == "json" else _server_from_form(prompter)

    details = format_server_details(server)
    details.append(f"Scope: {SCOPE_DESCRIPTIONS[scope]}")
    prompter.note("Server to add:\n" + "\n".join(details))
    for message in validate_server(server.to_record()).messages("warning"):
        prompter.warn(message)

    if not prompter.confirm("Add this server?"):
        return

    result = manager.add_server(server, scope)
    if result.installed:
        prompter.note(
            f'Server "{server.name}" installed successfully!\n'
            f"Scope: {SCOPE_DESCRIPTIONS[scope]}\n"
            "Also added to mcpick registry for profile management."
        )
    elif result.error:
        prompter.warn(
            f"CLI installation failed: {result.error}\n"
            "Server added to registry only. Use 'claude mcp add' manually."
        )
    else:
        prompter.warn(
            "Claude CLI not found. Server added to registry only.\n"
            "Install Claude Code CLI and run 'claude mcp add' to activate."
        )


def restore_config(manager: MCPickManager, prompter: Prompter) -> None:
    backups = manager.list_backups()
    if not backups:
        prompter.note("No backups found.")
        return

    options = [
        Option(
            b.filename,
            f"{b.filename} ({b.timestamp:%Y-%m-%d %H:%M:%S})",
            format_time_ago(b.timestamp),
        )
        for b in backups
    ]
    filename = prompter.select("Select backup to restore:", options)
    if not prompter.confirm(
        "This will replace the MCP servers in your .claude.json file. Continue?", default=False
    ):
        return

    config = manager.restore(filename)
    prompter.note(f"Configuration restored successfully! ({len(config.mcp_servers)} servers)")


def load_profile(manager: MCPickManager, prompter: Prompter) -> None:
    profiles = manager.list_profiles()
    if not profiles:
        prompter.note("No profiles found. Save one first.")
        return

    options = [Option(p.name, p.name, f"{p.server_count} servers") for p in profiles]
    name = prompter.select("Select profile to load:", options)
    config = manager.apply_profile(name)
    prompter.note(f"Profile '{name}' applied: {len(config.mcp_servers)} servers enabled.")


def save_profile(manager: MCPickManager, prompter: Prompter) -> None:
    name = prompter.text("Profile name:", validate=_check_profile_name)
    stem = sanitize_profile_name(name)
    if manager.profiles.path_for(name).exists() and not prompter.confirm(
        f"Profile '{stem}' already exists. Overwrite?", default=False
    ):
        return
    count = manager.save_profile(name)
    prompter.note(f"Saved {count} servers to profile '{stem}'.")


def launch_host(manager: MCPickManager, prompter: Prompter) -> None:
    prompter.note("Launching Claude Code...")
    manager.launch()


# --- input parsing and formatting ---


def parse_list(text: str) -> list[str]:
    """Comma-separated values, trimmed, empties dropped. A value cannot itself contain a comma."""
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_pairs(text: str) -> dict[str, str]:
    """KEY=value pairs separated by commas; the first '=' splits, pairs without one are skipped."""
    pairs: dict[str, str] = {}
    for item in text.split(","):
        key, sep, value = item.partition("=")
        if sep and key.strip():
            pairs[key.strip()] = value.strip()
    return pairs


def load_server_json(text: str) -> dict[str, Any]:
    """Parse pasted JSON for one server.

    Bare `"key": value` pairs are wrapped in braces. A single `"name": {...}`
    entry (as copied out of an mcpServers map) is unwrapped into a named definition.
    """
    raw = text.strip()
    if not raw.startswith("{"):
        raw = "{" + raw + "}"
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format: {e.msg}") from e
    if not isinstance(data, dict):
        raise ValueError("JSON must be an object")
    if "name" not in data and len(data) == 1:
        (name, entry), = data.items()
        if isinstance(entry, dict):
            data = {**entry, "name": name}
    return data


def format_server_details(server: ServerDefinition) -> list[str]:
    details = [f"Name: {server.name}"]
    if isinstance(server, StdioServer):
        details.append(f"Command: {' '.join([server.command, *server.args])}")
    else:
        details.append(f"URL: {server.url}")
    details.append(f"Description: {server.description or 'None'}")
    details.append(f"Transport: {server.transport}")
    if server.env:
        details.append(f"Environment: {len(server.env)} variables")
    if not isinstance(server, StdioServer) and server.headers:
        details.append(f"Headers: {len(server.headers)} headers")
    if server.estimated_tokens is not None:
        details.append(f"Estimated tokens: {server.estimated_tokens}")
    return details


def format_time_ago(then: datetime, now: datetime | None = None) -> str:
    seconds = ((now or datetime.now()) - then).total_seconds()
    minutes = int(seconds // 60)
    hours = minutes // 60
    days = hours // 24
    for amount, unit in ((days, "day"), (hours, "hour"), (minutes, "minute")):
        if amount > 0:
            return f"{amount} {unit}{'s' if amount > 1 else ''} ago"
    return "just now"


def _server_hint(server: ServerDefinition) -> str:
    hint = server.description or ""
    if server.estimated_tokens is not None:
        hint = f"{hint} (~{server.estimated_tokens} tokens)".strip()
    return hint


def _required(label: str):
    def check(value: str) -> str | None:
        return None if value.strip() else f"{label} is required"

    return check


def _check_json(value: str) -> str | None:
    if not value.strip():
        return "JSON configuration is required"
    try:
        load_server_json(value)
    except ValueError as e:
        return str(e)
    return None


def _check_profile_name(value: str) -> str | None:
    try:
        sanitize_profile_name(value)
    except ValueError as e:
        return str(e)
    return None


def _server_from_json(prompter: Prompter) -> ServerDefinition:
    text = prompter.text("Paste JSON configuration:", validate=_check_json)
    return parse_server(load_server_json(text))


def _server_from_form(prompter: Prompter) -> ServerDefinition:
    name = prompter.text("Server name:", validate=_required("Server name"))
    command = prompter.text("Command to run:", validate=_required("Command"))
    args = parse_list(prompter.text("Arguments (comma-separated):"))
    description = prompter.text("Description (optional):").strip()

    data: dict[str, Any] = {"name": name.strip(), "command": command.strip(), "args": args}
    if description:
        data["description"] = description

    if prompter.confirm(
        "Configure advanced settings (env variables, transport, etc.)?", default=False
    ):
        transport = prompter.select(
            "Transport type:",
            [
                Option("stdio", "stdio (default)", "Standard input/output"),
                Option("sse", "sse", "Server-sent events"),
                Option("http", "http", "HTTP transport"),
            ],
            "stdio",
        )
        data["type"] = transport
        if transport != "stdio":
            del data["command"], data["args"]
            data["url"] = prompter.text(
                "Server URL:", validate=_required("URL for non-stdio transport")
            ).strip()

        env = parse_pairs(prompter.text("Environment variables (KEY=value, comma-separated):"))
        if env:
            data["env"] = env
        if transport != "stdio":
            headers = parse_pairs(prompter.text("HTTP headers (KEY=value, comma-separated):"))
            if headers:
                data["headers"] = headers

        tokens = prompter.text("Estimated tokens (optional):").strip()
        if tokens:
            data["estimated_tokens"] = tokens

    return parse_server(data)
