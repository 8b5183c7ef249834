"""Branch listing for git-wk."""

from typing import Dict, List

from git_wk.constants import (
    BRANCH_FIELD_SEPARATOR,
    BRANCH_REF_FORMAT,
    LOCAL_REF_PREFIX,
    REMOTE_NAME,
    REMOTE_REF_PREFIX,
    REMOTE_SHORT_PREFIX,
)
from git_wk.models.branch import BranchRecord
from git_wk.services.git.runner import GitRunner
from git_wk.utils.logging import get_logger

logger = get_logger(__name__)


def parse_branch_refs(output: str) -> List[BranchRecord]:
    """Parse for-each-ref output into merged branch records.

    Each line is ``name|short hash|relative date``. Names starting with
    ``origin/`` are remote-tracking; a local branch that also exists on the
    remote becomes a single synced record. Local branches come first in the
    order git printed them, followed by remote-only branches.
    """
    branches: List[BranchRecord] = []
    remote_branches: Dict[str, BranchRecord] = {}

    for line in output.splitlines():
        parts = line.split(BRANCH_FIELD_SEPARATOR, 2)
        if len(parts) != 3:
            continue

        name, commit_short, commit_date = parts

        if name.startswith(REMOTE_SHORT_PREFIX) or name == REMOTE_NAME:
            remote_name = name[len(REMOTE_SHORT_PREFIX):]
            # origin/HEAD is a pointer, not a branch (git shortens it to "origin")
            if name == REMOTE_NAME or remote_name == "HEAD":
                continue
            remote_branches[remote_name] = BranchRecord(
                name=remote_name,
                is_local=False,
                is_remote=True,
                commit_short=commit_short,
                commit_date=commit_date,
            )
        else:
            branches.append(BranchRecord(
                name=name,
                is_local=True,
                is_remote=False,
                commit_short=commit_short,
                commit_date=commit_date,
            ))

    return merge_branch_records(branches, remote_branches)


def merge_branch_records(
    local_branches: List[BranchRecord], remote_branches: Dict[str, BranchRecord]
) -> List[BranchRecord]:
    """Mark locals that also exist remotely and append the remote-only rest."""
    remaining = dict(remote_branches)
    merged: List[BranchRecord] = []

    for branch in local_branches:
        if remaining.pop(branch.name, None) is not None:
            branch.is_remote = True
        merged.append(branch)

    merged.extend(remaining.values())
    return merged


class BranchQueries:
    """Queries over local and remote-tracking branches."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def list_branches(self) -> List[BranchRecord]:
        """Get all local and origin branches with commit metadata.

        Raises:
            ExternalToolError: if `git for-each-ref` fails
        """
        output = self.runner.run(
            "for-each-ref",
            f"--format={BRANCH_REF_FORMAT}",
            LOCAL_REF_PREFIX,
            REMOTE_REF_PREFIX,
        )
        branches = parse_branch_refs(output)
        logger.debug(f"Found {len(branches)} branches")
        return branches
