"""Single entry point for invoking the git binary."""

from typing import List

import git

from git_wk.exceptions import ExternalToolError
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


class GitRunner:
    """Runs git commands in a repository directory.

    Every git call in git-wk goes through run(), so a non-zero exit is
    always turned into ExternalToolError in one place.
    """

    def __init__(self, repo_path: str):
        """Initialize the runner.

        Args:
            repo_path: Directory the commands run in
        """
        self.repo_path = repo_path

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the repository directory."""
        return git.Git(self.repo_path)

    def run(self, *args: str) -> str:
        """Run `git <args>` and return its stdout.

        Raises:
            ExternalToolError: if git exits non-zero or cannot be started.
                The message is the trimmed combined output.
        """
        command: List[str] = ["git", *args]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            status, stdout, stderr = self._get_git().execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise ExternalToolError(args, None, f"could not run git: {e}") from e

        if status != 0:
            output = "\n".join(part for part in (stdout.strip(), stderr.strip()) if part)
            logger.debug(f"git exited with status {status}: {output}")
            raise ExternalToolError(args, status, output)

        return stdout

    def succeeds(self, *args: str) -> bool:
        """Run a check command and report whether it exited zero."""
        try:
            self.run(*args)
        except ExternalToolError:
            return False
        return True
