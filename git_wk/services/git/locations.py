"""Standard worktree location policy for git-wk.

Worktrees managed by wk live next to the main checkout:

    <parent of main worktree>/<repo name>.worktrees/<branch>
"""

import os
from typing import List, Optional

from git_wk.constants import REMOTE_NAME, WORKTREES_DIR_SUFFIX
from git_wk.exceptions import ExternalToolError, WkError
from git_wk.models.worktree import MoveResult, WorktreeRecord
from git_wk.services.git.runner import GitRunner
from git_wk.services.git.worktrees import WorktreeService
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


def extract_repo_name(url: str) -> str:
    """Extract the repository name from a remote URL.

    Supports scp-like (git@github.com:user/repo.git) and URL
    (https://github.com/user/repo.git) forms, with or without ".git".
    """
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    if not url:
        return ""

    name = url.split("/")[-1]
    # scp-like form without an owner segment: git@host:repo
    if "/" not in url and ":" in name:
        name = name.split(":")[-1]
    return name


class StandardLocationPolicy:
    """Computes where worktrees belong and which ones are misplaced."""

    def __init__(self, runner: GitRunner, worktree_service: WorktreeService):
        self.runner = runner
        self.worktree_service = worktree_service

    def repo_name(self, main_path: Optional[str] = None) -> str:
        """Repository name from the origin URL, falling back to the main worktree's directory name."""
        try:
            url = self.runner.run("config", "--get", f"remote.{REMOTE_NAME}.url")
        except ExternalToolError:
            url = ""

        name = extract_repo_name(url)
        if name:
            return name

        if main_path is None:
            main_path = self.worktree_service.main_worktree_path()
        return os.path.basename(main_path.rstrip(os.sep))

    def worktrees_directory(self, main_path: Optional[str] = None) -> str:
        """Path of the <repo>.worktrees directory beside the main worktree."""
        if main_path is None:
            main_path = self.worktree_service.main_worktree_path()
        parent_dir = os.path.dirname(main_path.rstrip(os.sep))
        return os.path.join(parent_dir, self.repo_name(main_path) + WORKTREES_DIR_SUFFIX)

    def ensure_worktrees_directory(self) -> str:
        """Create the worktrees directory if it does not exist yet."""
        worktrees_dir = self.worktrees_directory()
        try:
            os.makedirs(worktrees_dir, exist_ok=True)
        except OSError as e:
            raise WkError(f"failed to create worktrees directory: {e}") from e
        return worktrees_dir

    def standard_path(self, branch_name: str, worktrees_dir: Optional[str] = None) -> str:
        """Standard location for a branch's worktree."""
        if worktrees_dir is None:
            worktrees_dir = self.worktrees_directory()
        return os.path.join(worktrees_dir, branch_name)

    def is_standard_location(self, path: str) -> bool:
        """Check if a worktree path follows the standard pattern.

        The main worktree always counts as standard.
        """
        main_path = self.worktree_service.main_worktree_path()
        if path == main_path:
            return True
        return path.startswith(self.worktrees_directory(main_path))

    def non_standard_worktrees(
        self, worktrees: Optional[List[WorktreeRecord]] = None
    ) -> List[WorktreeRecord]:
        """Worktrees outside the standard location, in registry order."""
        if worktrees is None:
            worktrees = self.worktree_service.list_worktrees()
        if not worktrees:
            return []

        main_path = worktrees[0].path
        worktrees_dir = self.worktrees_directory(main_path)
        return [
            wt for wt in worktrees
            if wt.path != main_path and not wt.path.startswith(worktrees_dir)
        ]

    def move_to_standard_location(self, record: WorktreeRecord) -> str:
        """Move a worktree to <worktrees dir>/<branch>.

        Raises:
            ExternalToolError: if `git worktree move` fails
        """
        worktrees_dir = self.ensure_worktrees_directory()
        new_path = self.standard_path(record.branch, worktrees_dir)
        # git worktree move does not create missing parents (feature/x)
        try:
            os.makedirs(os.path.dirname(new_path), exist_ok=True)
        except OSError as e:
            raise WkError(f"failed to create {os.path.dirname(new_path)}: {e}") from e
        return self.worktree_service.move_worktree(record.path, new_path)

    def organize(self, records: List[WorktreeRecord]) -> List[MoveResult]:
        """Move every record to the standard location, best effort.

        Each worktree is attempted independently; a failure is recorded in
        its MoveResult and the remaining worktrees are still processed.
        """
        results: List[MoveResult] = []
        for record in records:
            try:
                new_path = self.move_to_standard_location(record)
            except WkError as e:
                logger.warning(f"Could not move {record}: {e}")
                results.append(MoveResult(record=record, error=str(e)))
                continue
            results.append(MoveResult(record=record, new_path=new_path))
        return results
