"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass


class BranchStatus(Enum):
    """Where a branch exists."""
    SYNCED = "synced"
    LOCAL = "local"
    REMOTE = "remote"


@dataclass
class BranchRecord:
    """A branch from for-each-ref, merged across local and remote-tracking refs."""
    name: str
    is_local: bool
    is_remote: bool
    commit_short: str = ""
    commit_date: str = ""

    @property
    def status(self) -> BranchStatus:
        if self.is_local and self.is_remote:
            return BranchStatus.SYNCED
        if self.is_local:
            return BranchStatus.LOCAL
        return BranchStatus.REMOTE
