"""Git operations service"""

from typing import List, Optional

from git_wk.exceptions import NotFoundError
from git_wk.models.branch import BranchRecord
from git_wk.models.worktree import MoveResult, WorktreeRecord
from git_wk.services.git.branch_queries import BranchQueries
from git_wk.services.git.locations import StandardLocationPolicy
from git_wk.services.git.runner import GitRunner
from git_wk.services.git.worktrees import WorktreeService
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


class GitOperations:
    """Service for Git operations."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path inside the git repository (string path, not repo object)
        """
        self.repo_path = repo_path
        self.runner = GitRunner(repo_path)
        self.worktree_service = WorktreeService(self.runner)
        self.locations = StandardLocationPolicy(self.runner, self.worktree_service)
        self.branch_queries = BranchQueries(self.runner)

        logger.debug(f"Git operations initialized for {repo_path}")

    # Registry

    def list_worktrees(self) -> List[WorktreeRecord]:
        return self.worktree_service.list_worktrees()

    def main_worktree_path(self) -> str:
        return self.worktree_service.main_worktree_path()

    def find_by_branch(self, branch_name: str) -> WorktreeRecord:
        return self.worktree_service.find_by_branch(branch_name)

    def find_by_path(self, path: str) -> WorktreeRecord:
        return self.worktree_service.find_by_path(path)

    def list_branches(self) -> List[BranchRecord]:
        return self.branch_queries.list_branches()

    # Mutations

    def add_worktree(self, branch_name: str) -> str:
        """Create a worktree for branch_name in the standard location.

        Returns:
            Path of the new worktree

        Raises:
            ExternalToolError: if git refuses, e.g. the branch is already checked out
        """
        worktrees_dir = self.locations.ensure_worktrees_directory()
        worktree_path = self.locations.standard_path(branch_name, worktrees_dir)
        return self.worktree_service.add_worktree(worktree_path, branch_name)

    def remove_worktree(self, target: str, force: bool = False) -> None:
        """Remove a worktree given its path or the branch checked out in it."""
        self.worktree_service.remove_worktree(self.resolve_target(target), force)

    def resolve_target(self, target: str) -> str:
        """Map a branch name to its worktree path; other targets pass through."""
        try:
            return self.worktree_service.find_by_branch(target).path
        except NotFoundError:
            return target

    def move_to_standard_location(self, record: WorktreeRecord) -> str:
        return self.locations.move_to_standard_location(record)

    def organize(self, records: Optional[List[WorktreeRecord]] = None) -> List[MoveResult]:
        """Move non-standard worktrees (or the given ones) to the standard location."""
        if records is None:
            records = self.locations.non_standard_worktrees()
        return self.locations.organize(records)

    # Working directory state

    def is_git_repository(self) -> bool:
        return self.runner.succeeds("rev-parse", "--is-inside-work-tree")

    def has_uncommitted_changes(self) -> bool:
        """Check if the current working directory has uncommitted changes."""
        return bool(self.runner.run("status", "--porcelain").strip())

    def current_branch(self) -> str:
        return self.runner.run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def create_stash(self, message: str) -> None:
        self.runner.run("stash", "push", "-m", message)
        logger.info(f"Created stash '{message}'")
