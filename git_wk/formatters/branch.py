"""Branch and worktree formatting utilities."""

from git_wk.models.branch import BranchRecord
from git_wk.models.worktree import WorktreeRecord


def format_branch_status(branch: BranchRecord) -> str:
    """
    Format where a branch exists.

    Args:
        branch: Branch record

    Returns:
        "synced", "local" or "remote"
    """
    return branch.status.value


def format_branch_description(branch: BranchRecord) -> str:
    """Selector description line, e.g. "synced · a1b2c3d · 2 days ago"."""
    return f"{format_branch_status(branch)} · {branch.commit_short} · {branch.commit_date}"


def format_worktree_branch(worktree: WorktreeRecord, is_main: bool = False) -> str:
    """Branch label for a worktree row, marking the main worktree."""
    name = worktree.branch or "?"
    return f"{name} (main)" if is_main else name
