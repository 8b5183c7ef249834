"""Data models for git-wk."""

from .worktree import WorktreeRecord, MoveResult
from .branch import BranchRecord, BranchStatus

__all__ = ["WorktreeRecord", "MoveResult", "BranchRecord", "BranchStatus"]
