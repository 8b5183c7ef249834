"""Worktree registry and mutation service for git-wk."""

import os
from typing import Dict, List, Set

from git_wk.constants import DETACHED_BRANCH, LOCAL_REF_PREFIX, REMOTE_REF_PREFIX
from git_wk.exceptions import NotFoundError
from git_wk.models.worktree import WorktreeRecord
from git_wk.services.git.runner import GitRunner
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


def parse_worktree_list(output: str) -> List[WorktreeRecord]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or a bare "detached" line)
        (blank line between worktrees)

    A "worktree" line starts a new record and flushes the previous one.
    Missing fields stay empty; unknown lines (bare, locked, prunable...) are ignored.
    """
    worktree_list: List[WorktreeRecord] = []
    current: Dict[str, str] = {}

    for line in output.splitlines():
        if line.startswith("worktree "):
            if current.get("path"):
                worktree_list.append(WorktreeRecord(**current))
            current = {"path": line[len("worktree "):]}
        elif line.startswith("HEAD "):
            current["commit"] = line[len("HEAD "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith(LOCAL_REF_PREFIX):
                branch_ref = branch_ref[len(LOCAL_REF_PREFIX):]
            current["branch"] = branch_ref
        elif line == "detached":
            current["branch"] = DETACHED_BRANCH

    # Handle last entry
    if current.get("path"):
        worktree_list.append(WorktreeRecord(**current))

    return worktree_list


class WorktreeService:
    """Service for reading and changing the worktree registry."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def list_worktrees(self) -> List[WorktreeRecord]:
        """Get all worktrees, main worktree first.

        Raises:
            ExternalToolError: if `git worktree list` fails
        """
        output = self.runner.run("worktree", "list", "--porcelain")
        worktree_list = parse_worktree_list(output)

        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def main_worktree_path(self) -> str:
        """Path of the main worktree (the first one git lists)."""
        worktree_list = self.list_worktrees()
        if not worktree_list:
            raise NotFoundError("no worktrees found")
        return worktree_list[0].path

    def find_by_branch(self, branch_name: str) -> WorktreeRecord:
        """Find the worktree that has branch_name checked out.

        Detached worktrees share a placeholder name and never match.
        """
        if branch_name != DETACHED_BRANCH:
            for wt in self.list_worktrees():
                if wt.branch == branch_name:
                    return wt
        raise NotFoundError(f"worktree for branch '{branch_name}' not found")

    def find_by_path(self, path: str) -> WorktreeRecord:
        """Find the worktree rooted at path."""
        wanted = os.path.realpath(path)
        for wt in self.list_worktrees():
            if os.path.realpath(wt.path) == wanted:
                return wt
        raise NotFoundError(f"no worktree at '{path}'")

    def worktree_branches(self) -> Set[str]:
        """Get set of branch names that are checked out in worktrees."""
        return {
            wt.branch
            for wt in self.list_worktrees()
            if wt.branch and wt.branch != DETACHED_BRANCH
        }

    def branch_exists(self, branch_name: str) -> bool:
        """Check if a branch exists locally or as a remote-tracking branch."""
        if self.runner.succeeds("show-ref", "--verify", "--quiet", f"{LOCAL_REF_PREFIX}{branch_name}"):
            return True
        return self.runner.succeeds("show-ref", "--verify", "--quiet", f"{REMOTE_REF_PREFIX}{branch_name}")

    def add_worktree(self, path: str, branch_name: str) -> str:
        """Create a worktree at path for branch_name.

        Attaches to the branch if it exists, otherwise creates it from HEAD.

        Raises:
            ExternalToolError: if `git worktree add` fails
        """
        if self.branch_exists(branch_name):
            self.runner.run("worktree", "add", path, branch_name)
        else:
            self.runner.run("worktree", "add", "-b", branch_name, path, "HEAD")

        logger.info(f"Added worktree for {branch_name} at {path}")
        return path

    def remove_worktree(self, target: str, force: bool = False) -> None:
        """Remove a worktree by path or branch name.

        Args:
            target: Worktree path or name accepted by `git worktree remove`
            force: Remove even if the worktree has uncommitted changes

        Raises:
            ExternalToolError: if `git worktree remove` fails
        """
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(target)

        self.runner.run(*args)
        logger.info(f"Removed worktree {target}")

    def move_worktree(self, source: str, destination: str) -> str:
        """Move a worktree directory with `git worktree move`."""
        self.runner.run("worktree", "move", source, destination)
        logger.info(f"Moved worktree {source} -> {destination}")
        return destination
