"""Custom error hierarchy for gww."""

from __future__ import annotations


class WorktreeError(RuntimeError):
    """Base error for the CLI."""


class MissingEnvError(WorktreeError):
    """Raised when a required environment variable is missing."""


class RepoDetectionError(WorktreeError):
    """Raised when we cannot resolve the repository or its name."""


class GitCommandError(WorktreeError):
    """Raised when an underlying git command fails.

    The message is git's own error text so it can be shown to the user as-is.
    """

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = self.stderr.strip() or f"{' '.join(command)} failed"
        super().__init__(message)


class FilesystemError(WorktreeError):
    """Raised when a worktree's parent directory cannot be created."""


class SelectionError(WorktreeError):
    """Raised when there is nothing to choose from."""


class ValidationError(WorktreeError):
    """Raised when user input fails validation."""


class BranchMissingError(WorktreeError):
    """Raised when the user declines to create a missing branch."""


class UserAbort(WorktreeError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "WorktreeError",
    "MissingEnvError",
    "RepoDetectionError",
    "GitCommandError",
    "FilesystemError",
    "SelectionError",
    "ValidationError",
    "BranchMissingError",
    "UserAbort",
]
