"""Git-related services for git-wk."""

from .runner import GitRunner
from .worktrees import WorktreeService, parse_worktree_list
from .locations import StandardLocationPolicy, extract_repo_name
from .branch_queries import BranchQueries, parse_branch_refs
from .operations import GitOperations

__all__ = [
    "GitRunner",
    "WorktreeService",
    "StandardLocationPolicy",
    "BranchQueries",
    "GitOperations",
    "parse_worktree_list",
    "parse_branch_refs",
    "extract_repo_name",
]
