"""Shared constants for git-wk."""

from dataclasses import dataclass
from typing import List


CONFIG_FILE_NAME = ".wk.yaml"
WORKTREES_DIR_SUFFIX = ".worktrees"

# Branch value used for worktrees that are not on a named branch
DETACHED_BRANCH = "(detached)"

REMOTE_NAME = "origin"
LOCAL_REF_PREFIX = "refs/heads/"
REMOTE_REF_PREFIX = f"refs/remotes/{REMOTE_NAME}/"
REMOTE_SHORT_PREFIX = f"{REMOTE_NAME}/"

# for-each-ref output: name|short hash|relative date
BRANCH_REF_FORMAT = "%(refname:short)|%(objectname:short)|%(committerdate:relative)"
BRANCH_FIELD_SEPARATOR = "|"

SHORT_COMMIT_LENGTH = 7

STASH_TIMESTAMP_FORMAT = "%H%M%S-%d%m%Y"

DEFAULT_SHELL = "bash"
HOOK_SHELL = "sh"

LOG_DIR_NAME = ".wk"
LOG_FILE_NAME = "wk.log"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


WORKTREE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch"),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("commit", "Commit", SHORT_COMMIT_LENGTH),
]

BRANCH_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch"),
    ColumnDefinition("status", "Status", 8),
    ColumnDefinition("commit", "Commit", SHORT_COMMIT_LENGTH),
    ColumnDefinition("date", "Last Commit"),
]


# Rich colors for branch status in the branches table
STATUS_COLORS = {
    "synced": "green",
    "local": None,
    "remote": "cyan",
}

# Label of the selector entry that asks for a new branch name
CREATE_BRANCH_LABEL = "[+] Create new branch..."
CREATE_BRANCH_DESCRIPTION = "Enter a name to create a new branch"
