"""Date and time formatting utilities."""

from datetime import datetime
from typing import Optional

from git_wk.constants import STASH_TIMESTAMP_FORMAT


def format_stash_name(branch: str, now: Optional[datetime] = None) -> str:
    """
    Build a stash message from a branch name and the current time.

    Args:
        branch: Branch the stash is taken on
        now: Timestamp to use (defaults to the current local time)

    Returns:
        Stash name such as "feature-x-153012-18102026"
    """
    if now is None:
        now = datetime.now()
    return f"{branch}-{now.strftime(STASH_TIMESTAMP_FORMAT)}"
