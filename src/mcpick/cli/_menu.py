"""Main menu loop: pick an action, run it, come back."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ._commands import (
    add_server,
    backup_config,
    edit_config,
    launch_host,
    load_profile,
    restore_config,
    save_profile,
)
from ._prompts import Cancelled, Option

if TYPE_CHECKING:
    from ..manager import MCPickManager
    from ._prompts import Prompter

logger = logging.getLogger(__name__)

Command = Callable[["MCPickManager", "Prompter"], None]

MENU: list[Option[str]] = [
    Option("edit-config", "Edit config", "Toggle MCP servers on/off"),
    Option("launch", "Launch Claude Code", "Start Claude Code with current config"),
    Option("add-server", "Add MCP server", "Register a new MCP server"),
    Option("backup", "Backup config", "Create a backup of current configuration"),
    Option("restore", "Restore from backup", "Restore from a previous backup"),
    Option("load-profile", "Load profile", "Apply a saved profile"),
    Option("save-profile", "Save profile", "Save current config as a profile"),
    Option("exit", "Exit", "Quit MCPick"),
]

COMMANDS: dict[str, Command] = {
    "edit-config": edit_config,
    "launch": launch_host,
    "add-server": add_server,
    "backup": backup_config,
    "restore": restore_config,
    "load-profile": load_profile,
    "save-profile": save_profile,
}


def run_menu(manager: MCPickManager, prompter: Prompter) -> int:
    """Loop until the user exits, cancels at the menu, or launches the host CLI."""
    prompter.note("MCPick - MCP Server Configuration Manager")
    while True:
        try:
            action = prompter.select("What would you like to do?", MENU, "edit-config")
        except Cancelled:
            prompter.note("Operation cancelled")
            return 0

        if action == "exit":
            prompter.note("Goodbye!")
            return 0

        try:
            COMMANDS[action](manager, prompter)
        except Cancelled:
            prompter.note("Cancelled.")
            continue
        except Exception as e:
            logger.debug("Command %s failed", action, exc_info=True)
            prompter.warn(f"Error: {e}")
            if not _keep_going(prompter):
                prompter.note("Goodbye!")
                return 0
            continue

        if action == "launch":
            return 0


def _keep_going(prompter: Prompter) -> bool:
    try:
        return prompter.confirm("Return to the main menu?", default=True)
    except Cancelled:
        return False
