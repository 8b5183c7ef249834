"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional

from git_wk.constants import DETACHED_BRANCH, SHORT_COMMIT_LENGTH


@dataclass
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    commit: str = ""
    branch: str = ""

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED_BRANCH

    @property
    def short_commit(self) -> str:
        return self.commit[:SHORT_COMMIT_LENGTH]

    def __str__(self) -> str:
        """String representation of worktree."""
        return f"{self.branch or '?'} @ {self.path} [{self.short_commit}]"


@dataclass
class MoveResult:
    """Outcome of relocating one worktree during a batch move."""

    record: WorktreeRecord
    new_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
