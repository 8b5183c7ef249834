"""Formatting utilities for git-wk.

This package provides formatting functions for displaying worktree and
branch information, organized into logical modules:
- date: Date and time formatting
- branch: Branch status and description formatting
"""

# Date formatters
from .date import format_stash_name

# Branch formatters
from .branch import (
    format_branch_status,
    format_branch_description,
    format_worktree_branch,
)

__all__ = [
    # Date
    "format_stash_name",
    # Branch
    "format_branch_status",
    "format_branch_description",
    "format_worktree_branch",
]
