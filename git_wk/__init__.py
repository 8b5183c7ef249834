"""
git-wk - git worktree helper with file copying and post-creation hooks
"""

from .__version__ import __version__
from .core import WorktreeKeeper

__all__ = ["WorktreeKeeper", "__version__"]
