"""Error classes for foldertasks.

Every error carries an exit code so the CLI can turn it into a clean
process exit at the command boundary.
"""

from __future__ import annotations

PATH_HELP = "Ensure there are no leading, trailing or double slashes!"


class TrackerError(Exception):
    """Base exception for all foldertasks errors."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(TrackerError):
    """Raised when a command is invoked without the arguments it needs."""

    exit_code: int = 2


class InvalidPathError(TrackerError):
    """Raised when a folder path contains an empty segment."""

    exit_code: int = 3

    def __init__(self, path: str, reason: str = "empty segment"):
        """
        Initialize invalid path error.

        Args:
            path: The offending folder path
            reason: Short machine-friendly reason
        """
        super().__init__(f"Empty folder name found in {path!r}\n\nHelp: {PATH_HELP}")
        self.path = path
        self.reason = reason


class NotFoundError(TrackerError):
    """Raised when a task id does not exist."""

    exit_code: int = 4

    def __init__(self, task_id: int):
        super().__init__(f"No task with id {task_id}")
        self.task_id = task_id


class IdSpaceExhaustedError(TrackerError):
    """Raised when no free task id could be allocated."""

    exit_code: int = 5

    def __init__(self, attempts: int, used: int):
        super().__init__(
            f"Could not allocate a free task id after {attempts} attempts "
            f"({used} ids in use). Delete some tasks first."
        )
        self.attempts = attempts
        self.used = used


class StorageError(TrackerError):
    """Raised when the task database fails."""

    exit_code: int = 6
