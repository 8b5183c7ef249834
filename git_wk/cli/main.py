"""Command-line interface for git-wk"""

import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_wk.cli.args import build_parser
from git_wk.cli.commands import COMMANDS, CommandSpec
from git_wk.config import RuntimeOptions, check_config
from git_wk.constants import CONFIG_FILE_NAME
from git_wk.core import WorktreeKeeper
from git_wk.exceptions import ConfigError, SelectionCancelled, WkError
from git_wk.utils.logging import get_logger, setup_logging

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def run_pre_validation(spec: CommandSpec, keeper: WorktreeKeeper) -> None:
    """Checks that run before a command that works on a repository.

    Raises:
        WkError: outside a git repository
        ConfigError: if .wk.yaml exists but cannot be loaded
    """
    if not keeper.git_service.is_git_repository():
        raise WkError(
            "not a git repository (or any parent up to mount point /)\n\n"
            "Run this command from inside a git repository"
        )

    if not spec.checks_config:
        return

    exists, valid, error = check_config(keeper.repo_path)
    if not exists:
        err_console.print(f"[dim]hint: no {CONFIG_FILE_NAME} found. Run 'wk init' to create one.[/dim]\n")
        return
    if not valid:
        raise ConfigError(f"{error}\n\nFix the YAML syntax in your configuration file")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    commands = COMMANDS
    parser = build_parser(commands)
    parsed_args = parser.parse_args(argv)

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, console=err_console)

    command_name = getattr(parsed_args, "command_name", None)
    if command_name is None:
        parser.print_help()
        return 0

    spec = commands[command_name]
    options = RuntimeOptions(
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
        quiet=getattr(parsed_args, "quiet", False),
        assume_yes=getattr(parsed_args, "yes", False),
    )
    logger.debug(f"Running '{command_name}' with {options}")

    try:
        keeper = None
        if spec.needs_repo:
            keeper = WorktreeKeeper(os.getcwd(), options, console=console)
            run_pre_validation(spec, keeper)
        return spec.handler(parsed_args, keeper)
    except SelectionCancelled:
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WkError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            err_console.print_exception()
        return 1
    except Exception as e:
        err_console.print(f"[red]Unexpected error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
