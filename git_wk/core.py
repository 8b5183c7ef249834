"""Core functionality for git-wk"""

import os
import subprocess
from typing import List, Optional, Union

from rich.console import Console
from rich.markup import escape

from git_wk.config import (
    Config,
    RuntimeOptions,
    find_config,
    load_config,
    write_config,
)
from git_wk.constants import CONFIG_FILE_NAME, DEFAULT_SHELL
from git_wk.exceptions import WkError
from git_wk.formatters import format_stash_name
from git_wk.models.worktree import MoveResult
from git_wk.services.display_service import DisplayService
from git_wk.services.git import GitOperations
from git_wk.services.hooks_service import HooksService
from git_wk.ui import selector
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


def open_shell_at(directory: str) -> int:
    """Start an interactive $SHELL in directory and wait for it to exit."""
    shell = os.environ.get("SHELL") or DEFAULT_SHELL
    logger.debug(f"Opening {shell} in {directory}")
    return subprocess.run([shell], cwd=directory).returncode


def parse_csv(text: str) -> List[str]:
    """Split a comma-separated answer into trimmed, non-empty entries."""
    return [part.strip() for part in text.split(",") if part.strip()]


class WorktreeKeeper:
    """Main class for managing git worktrees."""

    def __init__(
        self,
        repo_path: str,
        options: Union[RuntimeOptions, dict, None] = None,
        console: Optional[Console] = None,
    ):
        """Initialize WorktreeKeeper.

        Args:
            repo_path: Directory inside the git repository (usually the cwd)
            options: Runtime options or an equivalent dict
            console: Rich console used for user-facing output
        """
        self.repo_path = os.path.abspath(repo_path)
        if options is None:
            options = RuntimeOptions()
        elif isinstance(options, dict):
            options = RuntimeOptions(**options)
        self.options = options
        self.console = console or Console()

        self.git_service = GitOperations(self.repo_path)
        self.display_service = DisplayService(self.console)

    def _confirm(self, question: str) -> bool:
        """Ask a y/N question; --yes answers it."""
        if self.options.assume_yes:
            return True
        response = self.console.input(f"{question} [y/N]: ").strip().lower()
        return response in ("y", "yes")

    def _load_config_from(self, start_dir: str) -> Optional[Config]:
        config_path = find_config(start_dir)
        if config_path is None:
            return None
        return load_config(config_path)

    def _run_setup_steps(self, config: Config, src_dir: str, dst_dir: str, quiet: bool) -> None:
        """Copy configured files from src_dir and run post hooks in dst_dir."""
        hooks = HooksService(self.console, quiet=quiet)

        if config.copy and os.path.abspath(src_dir) != os.path.abspath(dst_dir):
            if not quiet:
                self.console.print("\nCopying files...")
            hooks.copy_files(src_dir, dst_dir, config.copy)

        if config.post_hooks:
            if not quiet:
                self.console.print("\nRunning post hooks...")
            hooks.run_post_hooks(dst_dir, config.post_hooks)

    def create_worktree(self, branch: Optional[str] = None, switch: Optional[bool] = None) -> str:
        """Create a worktree, copy configured files and run post hooks.

        Without a branch, the user picks one of the branches that has no
        worktree yet or chooses to create a new one.

        Args:
            branch: Branch to check out; None opens the selector
            switch: Open a shell in the new worktree. None asks.

        Returns:
            Path of the new worktree
        """
        if branch is None:
            branches = self.git_service.list_branches()
            existing = self.git_service.worktree_service.worktree_branches()
            selected, is_new = selector.select_or_create(branches, exclude=existing)
            branch = selector.prompt_for_branch_name(self.console) if is_new else selected

        self.console.print(f"Creating worktree for branch '{escape(branch)}'...")
        worktree_path = self.git_service.add_worktree(branch)
        self.console.print(f"Created worktree at [bold]{escape(worktree_path)}[/bold]")

        config = self._load_config_from(self.repo_path)
        if config is None:
            self.console.print(f"No {CONFIG_FILE_NAME} found, skipping hooks")
        else:
            self._run_setup_steps(config, self.repo_path, worktree_path, quiet=self.options.quiet)

        self.console.print(f"\n[green]Worktree '{escape(branch)}' is ready![/green]")

        if switch is None:
            switch = self._confirm("Switch to new worktree?")
        if switch:
            self.console.print(f"Switching to worktree '{escape(branch)}'...")
            self.console.print("Type 'exit' to return to the previous shell.")
            open_shell_at(worktree_path)

        return worktree_path

    def list_worktrees(self) -> None:
        """Print all worktrees and warn about misplaced ones."""
        worktrees = self.git_service.list_worktrees()
        if not worktrees:
            self.console.print("No worktrees found")
            return

        self.display_service.display_worktree_table(worktrees)
        non_standard = self.git_service.locations.non_standard_worktrees(worktrees)
        self.display_service.display_non_standard_warning(non_standard)

    def show_branches(self) -> None:
        """Print local and remote branches with their sync status."""
        branches = self.git_service.list_branches()
        if not branches:
            self.console.print("No branches found")
            return
        self.display_service.display_branch_table(branches)

    def remove_worktree(self, target: Optional[str] = None, force: bool = False) -> None:
        """Remove a worktree by branch name or path; without one, ask which."""
        if target is None:
            target = selector.select_worktree(self.git_service.list_worktrees())

        self.console.print(f"Removing worktree '{escape(target)}'...")
        self.git_service.remove_worktree(target, force=force)
        self.console.print(f"Worktree '{escape(target)}' removed")

    def switch_worktree(self, branch: Optional[str] = None) -> None:
        """Open a shell in the worktree of branch, offering to stash local changes first."""
        if branch is None:
            path = selector.select_worktree(self.git_service.list_worktrees())
            worktree = self.git_service.find_by_path(path)
        else:
            worktree = self.git_service.find_by_branch(branch)

        self._stash_if_needed()

        self.console.print(f"Switching to worktree '{escape(worktree.branch)}' at {escape(worktree.path)}")
        self.console.print("Type 'exit' to return to the previous shell.")
        open_shell_at(worktree.path)

    def _stash_if_needed(self) -> None:
        if not self.git_service.has_uncommitted_changes():
            return

        if not self._confirm("You have uncommitted changes. Create stash before switching?"):
            return

        stash_name = format_stash_name(self.git_service.current_branch())
        self.console.print(f"Creating stash: {escape(stash_name)}")
        self.git_service.create_stash(stash_name)

    def organize(self) -> List[MoveResult]:
        """Move worktrees outside the standard location into it, after confirmation."""
        non_standard = self.git_service.locations.non_standard_worktrees()
        if not non_standard:
            self.console.print("All worktrees are already in the standard location.")
            return []

        worktrees_dir = self.git_service.locations.worktrees_directory()
        self.display_service.display_organize_plan(non_standard, worktrees_dir)

        if not self._confirm("Proceed?"):
            self.console.print("Aborted.")
            return []

        self.console.print()
        results = self.git_service.organize(non_standard)
        self.display_service.display_move_results(results)

        failed = sum(1 for result in results if not result.ok)
        if failed:
            self.console.print(f"\n[yellow]{failed} worktree(s) could not be moved.[/yellow]")
        else:
            self.console.print("\nAll worktrees have been organized.")
        return results

    def setup_worktree(self, path: Optional[str] = None, quiet: bool = False) -> None:
        """Run copy and post hooks on an existing worktree.

        The main worktree is the source of both the config and the copied files.
        Without a config this is a silent no-op.
        """
        dst_dir = os.path.abspath(path) if path else self.repo_path
        src_dir = self.git_service.main_worktree_path()

        config = self._load_config_from(src_dir)
        if config is None:
            logger.info(f"No {CONFIG_FILE_NAME} above {src_dir}, nothing to set up")
            return

        self._run_setup_steps(config, src_dir, dst_dir, quiet=quiet)

        if not quiet:
            self.console.print("[green]Setup complete![/green]")

    def init_config(self) -> Optional[str]:
        """Interactively write a .wk.yaml in the current directory.

        Returns:
            Path of the written file, or None if the user aborted
        """
        config_path = os.path.join(self.repo_path, CONFIG_FILE_NAME)
        if os.path.exists(config_path):
            if not self._confirm(f"{CONFIG_FILE_NAME} already exists. Overwrite?"):
                self.console.print("Aborted")
                return None

        self.console.print(f"Creating {CONFIG_FILE_NAME} configuration")
        self.console.print("Press Enter to skip any section\n")

        self.console.print("Files/directories to copy to new worktrees")
        self.console.print("(comma-separated, e.g.: .env,.env.local,tmp/)")
        copy = parse_csv(self.console.input("> "))

        self.console.print()
        self.console.print("Post-creation hooks (commands to run after creating worktree)")
        self.console.print("Enter one command per line, empty line to finish:")
        post_hooks = []
        while True:
            command = self.console.input("> ").strip()
            if not command:
                break
            post_hooks.append(command)

        try:
            text = write_config(config_path, Config(copy=copy, post_hooks=post_hooks))
        except OSError as e:
            raise WkError(f"write config: {e}") from e

        self.console.print(f"\nCreated {CONFIG_FILE_NAME}:")
        self.console.print("---")
        self.console.print(escape(text), end="")
        self.console.print("---")
        return config_path
