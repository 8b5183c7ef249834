"""Command-line argument parsing for git-wk."""

import argparse
from typing import Dict, List, Optional

from git_wk.__version__ import __version__
from git_wk.cli.commands import CommandSpec


def build_parser(commands: Dict[str, CommandSpec]) -> argparse.ArgumentParser:
    """Build the argument parser from the command table."""
    parser = argparse.ArgumentParser(
        prog="wk",
        description="Git worktree helper with hooks support",
        epilog="Reads .wk.yaml from your project to copy files into new worktrees "
        "and run post-creation hooks.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"wk version {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    for spec in commands.values():
        subparser = subparsers.add_parser(
            spec.name,
            aliases=list(spec.aliases),
            help=spec.help,
            description=spec.description or spec.help,
        )
        for argument in spec.arguments:
            subparser.add_argument(*argument.flags, **argument.options)
        # Aliases land in args.command; command_name is always the canonical name
        subparser.set_defaults(command_name=spec.name)

    return parser


def parse_args(
    commands: Dict[str, CommandSpec], argv: Optional[List[str]] = None
) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser(commands).parse_args(argv)
