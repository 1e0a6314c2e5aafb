"""Bridge to the host `claude` command line."""

from ._claude import CLIResult, ClaudeCLI, build_add_args, build_remove_args

__all__ = ["CLIResult", "ClaudeCLI", "build_add_args", "build_remove_args"]
