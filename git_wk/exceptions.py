"""Custom exceptions for git-wk"""

from typing import Optional, Sequence


class WkError(Exception):
    """Base exception for all git-wk errors."""
    pass


class ExternalToolError(WkError):
    """Exception raised when an external git command exits non-zero."""

    def __init__(self, command: Sequence[str], status: Optional[int] = None, output: str = ""):
        self.command = list(command)
        self.status = status
        self.output = output.strip()

        error_msg = f"git {describe_command(self.command)} failed"
        if self.output:
            error_msg += f": {self.output}"
        elif status is not None:
            error_msg += f" with exit code {status}"

        super().__init__(error_msg)


class NotFoundError(WkError):
    """Exception raised when a worktree or branch lookup finds nothing."""
    pass


class ConfigError(WkError):
    """Exception raised for an unreadable or malformed .wk.yaml."""
    pass


class HookError(WkError):
    """Exception raised when copying files or running a post hook fails."""

    def __init__(self, step: str, message: Optional[str] = None):
        self.step = step
        self.message = message

        error_msg = step
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class SelectionCancelled(WkError):
    """Exception raised when the user dismisses an interactive selector."""

    def __init__(self):
        super().__init__("selection cancelled")


def describe_command(args: Sequence[str]) -> str:
    """Short name of a git invocation, e.g. 'worktree add' or 'status'."""
    words = []
    for arg in args:
        if arg.startswith("-") or len(words) == 2:
            break
        words.append(arg)
        if arg not in ("worktree", "stash"):
            break
    return " ".join(words) if words else "command"
