"""Command table for the wk CLI.

Each subcommand is described once in COMMANDS; the argument parser and the
dispatcher in main.py are both built from that table.
"""

import argparse
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.console import Console

from git_wk.__version__ import __version__
from git_wk.core import WorktreeKeeper

console = Console()

Handler = Callable[[argparse.Namespace, Optional[WorktreeKeeper]], int]


@dataclass
class ArgumentSpec:
    """Positional argument or flag of a subcommand (argparse add_argument inputs)."""

    flags: Tuple[str, ...]
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandSpec:
    """A wk subcommand."""

    name: str
    handler: Handler
    help: str
    description: str = ""
    aliases: Tuple[str, ...] = ()
    arguments: List[ArgumentSpec] = field(default_factory=list)
    needs_repo: bool = True  # must run inside a git repository
    checks_config: bool = True  # validates .wk.yaml before running


def cmd_new(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.create_worktree(args.branch, switch=False if args.no_switch else None)
    return 0


def cmd_list(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.list_worktrees()
    return 0


def cmd_remove(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.remove_worktree(args.branch, force=args.force)
    return 0


def cmd_switch(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.switch_worktree(args.branch)
    return 0


def cmd_organize(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.organize()
    return 0


def cmd_branches(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.show_branches()
    return 0


def cmd_setup(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.setup_worktree(args.path, quiet=args.quiet)
    return 0


def cmd_init(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    keeper.init_config()
    return 0


def cmd_version(args: argparse.Namespace, keeper: Optional[WorktreeKeeper]) -> int:
    console.print(f"wk version {__version__}")
    return 0


def build_command_table() -> Dict[str, CommandSpec]:
    """Build the name -> CommandSpec mapping for every subcommand."""
    commands = [
        CommandSpec(
            name="new",
            handler=cmd_new,
            help="Create a new worktree",
            description=(
                "Create a worktree in <repo>.worktrees/<branch>, copy the files listed in "
                ".wk.yaml and run its post_hooks. Without a branch, pick one interactively "
                "or create a new one."
            ),
            arguments=[
                ArgumentSpec(("branch",), {"nargs": "?", "help": "Branch to check out or create"}),
                ArgumentSpec(("--no-switch",), {
                    "action": "store_true",
                    "help": "Do not offer to open a shell in the new worktree",
                }),
            ],
        ),
        CommandSpec(
            name="list",
            handler=cmd_list,
            help="List all worktrees",
            aliases=("ls",),
        ),
        CommandSpec(
            name="remove",
            handler=cmd_remove,
            help="Remove a worktree",
            description="Remove a worktree by branch name. Without a branch, pick one interactively.",
            aliases=("rm",),
            arguments=[
                ArgumentSpec(("branch",), {"nargs": "?", "help": "Branch (or path) of the worktree"}),
                ArgumentSpec(("-f", "--force"), {
                    "action": "store_true",
                    "help": "Force removal even if worktree has uncommitted changes",
                }),
            ],
        ),
        CommandSpec(
            name="switch",
            handler=cmd_switch,
            help="Switch to another worktree",
            description=(
                "Open a new shell in another worktree. Offers to stash uncommitted "
                "changes first."
            ),
            arguments=[
                ArgumentSpec(("branch",), {"nargs": "?", "help": "Branch of the worktree"}),
                ArgumentSpec(("-y", "--yes"), {
                    "action": "store_true",
                    "help": "Stash uncommitted changes without asking",
                }),
            ],
        ),
        CommandSpec(
            name="organize",
            handler=cmd_organize,
            help="Move worktrees to the standard location",
            description=(
                "Move worktrees that are not in <repo>.worktrees/<branch> to that path. "
                "Each worktree is moved independently; failures are reported and skipped."
            ),
            arguments=[
                ArgumentSpec(("-y", "--yes"), {"action": "store_true", "help": "Skip confirmation"}),
            ],
        ),
        CommandSpec(
            name="branches",
            handler=cmd_branches,
            help="List local and remote branches",
        ),
        CommandSpec(
            name="setup",
            handler=cmd_setup,
            help="Run copy and post hooks on an existing worktree",
            description=(
                "Run the setup steps (file copy + post hooks) on an existing worktree, "
                "using the main worktree as the source. Defaults to the current directory."
            ),
            arguments=[
                ArgumentSpec(("path",), {"nargs": "?", "help": "Worktree directory"}),
                ArgumentSpec(("-q", "--quiet"), {
                    "action": "store_true",
                    "help": "Suppress wk messages (hook output still shown)",
                }),
            ],
        ),
        CommandSpec(
            name="init",
            handler=cmd_init,
            help="Create a .wk.yaml configuration file",
            checks_config=False,
        ),
        CommandSpec(
            name="version",
            handler=cmd_version,
            help="Show wk version",
            needs_repo=False,
            checks_config=False,
        ),
    ]
    return {command.name: command for command in commands}


COMMANDS = build_command_table()
