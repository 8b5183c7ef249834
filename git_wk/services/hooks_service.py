"""File copying and post-hook execution for new worktrees"""

import os
import shutil
import subprocess
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_wk.constants import HOOK_SHELL
from git_wk.exceptions import HookError
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


class HooksService:
    """Runs the setup steps declared in .wk.yaml against a worktree."""

    def __init__(self, console: Optional[Console] = None, quiet: bool = False):
        self.console = console or Console()
        self.quiet = quiet

    def _say(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message)

    def copy_files(self, src_dir: str, dst_dir: str, files: List[str]) -> List[str]:
        """Copy files and directories listed in the config from src_dir to dst_dir.

        Missing sources are skipped. Directories are merged into existing
        destinations and file permissions are kept.

        Returns:
            Entries that were copied

        Raises:
            HookError: on the first entry that cannot be copied
        """
        copied = []
        for entry in files:
            src_path = os.path.join(src_dir, entry)
            dst_path = os.path.join(dst_dir, entry)

            if not os.path.lexists(src_path):
                self._say(f"  [dim]skipping {escape(entry)} (not found)[/dim]")
                continue

            try:
                if os.path.isdir(src_path):
                    shutil.copytree(src_path, dst_path, dirs_exist_ok=True, copy_function=shutil.copy)
                else:
                    os.makedirs(os.path.dirname(dst_path) or ".", exist_ok=True)
                    shutil.copy(src_path, dst_path)
            except (OSError, shutil.Error) as e:
                kind = "directory" if os.path.isdir(src_path) else "file"
                raise HookError(f"copy {kind} {entry}", str(e)) from e

            logger.debug(f"Copied {src_path} -> {dst_path}")
            self._say(f"  copied {escape(entry)}")
            copied.append(entry)
        return copied

    def run_post_hooks(self, directory: str, commands: List[str]) -> None:
        """Run each command with `sh -c` inside directory, stopping at the first failure.

        Command output goes straight to the terminal.

        Raises:
            HookError: if a command cannot be started or exits non-zero
        """
        for command in commands:
            self._say(f"  running: [bold]{escape(command)}[/bold]")
            logger.info(f"Running post hook in {directory}: {command}")

            try:
                result = subprocess.run([HOOK_SHELL, "-c", command], cwd=directory)
            except OSError as e:
                raise HookError(f'command "{command}" failed', str(e)) from e

            if result.returncode != 0:
                raise HookError(f'command "{command}" failed', f"exit status {result.returncode}")
