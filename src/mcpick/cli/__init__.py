"""Command-line entry point: flag-driven profile commands, otherwise the interactive menu."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .. import __version__
from ..errors import MCPickError
from ..manager import make_manager
from ..paths import resolve_paths
from ._menu import run_menu
from ._prompts import Cancelled, ConsolePrompter, Option, Prompter

if TYPE_CHECKING:
    from ..manager import MCPickManager

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcpick",
        description="Manage which MCP servers Claude Code loads.",
        epilog="Run without options for the interactive menu.",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-p", "--profile", metavar="NAME", help="apply a saved profile and exit")
    group.add_argument(
        "-s", "--save-profile", metavar="NAME", help="save the enabled servers as a profile and exit"
    )
    group.add_argument("-l", "--list-profiles", action="store_true", help="list saved profiles")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        manager = make_manager(resolve_paths(os.environ, Path.home()))
        if args.list_profiles:
            return _list_profiles(manager)
        if args.save_profile is not None:
            return _run(lambda: _save_profile(manager, args.save_profile))
        if args.profile is not None:
            return _run(lambda: _apply_profile(manager, args.profile))
        return run_menu(manager, ConsolePrompter())
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


def _run(action: Callable[[], None]) -> int:
    try:
        action()
    except (MCPickError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _apply_profile(manager: MCPickManager, name: str) -> None:
    config = manager.apply_profile(name)
    print(f"Applied profile '{name}' ({len(config.mcp_servers)} servers)")


def _save_profile(manager: MCPickManager, name: str) -> None:
    count = manager.save_profile(name)
    print(f"Saved profile '{name}' ({count} servers) to {manager.profiles.path_for(name)}")


def _list_profiles(manager: MCPickManager) -> int:
    profiles = manager.list_profiles()
    if not profiles:
        print(f"No profiles found in {manager.profiles.profiles_dir}")
        return 0
    print("Available profiles:")
    for profile in profiles:
        print(f"  {profile.name} ({profile.server_count} servers)")
    return 0


__all__ = ["Cancelled", "ConsolePrompter", "Option", "Prompter", "build_parser", "main", "run_menu"]
