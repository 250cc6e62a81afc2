"""Utility functions and data structures for the foldertasks package.

This module contains:
- Data classes: Task
- Constants: STATUS_STYLES, PATH_SEP
- Folder path validation and manipulation
- Status normalization and body formatting helpers
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidPathError

PATH_SEP = "/"

# Status-specific styling (rich markup color)
STATUS_STYLES = {
    "incomplete": "yellow",
    "in progress": "blue",
    "complete": "green",
}


@dataclass(frozen=True)
class Task:
    """A single stored task.

    Attributes:
        id: Unique id in 0-255, assigned randomly at creation
        body: Free text describing the work item
        folder: Slash-delimited folder path, empty string for the root
        status: Free-form status string
    """

    id: int
    body: str
    folder: str
    status: str

    def with_folder(self, folder: str) -> Task:
        """Return a copy of this task placed in another folder."""
        return replace(self, folder=folder)

    @property
    def style(self) -> str:
        """Rich color for this task's status."""
        return STATUS_STYLES.get(self.status.strip().lower(), "white")


def validate_path(path: str) -> None:
    """Validate a folder path.

    An empty (or blank) path is the root and always valid. Otherwise every
    slash-separated segment must be non-empty after stripping whitespace,
    which rejects leading, trailing and doubled slashes.

    Raises:
        InvalidPathError: If any segment is empty
    """
    if path.strip() == "":
        return

    for segment in path.split(PATH_SEP):
        if segment.strip() == "":
            raise InvalidPathError(path)


def split_head(path: str) -> Tuple[str, str]:
    """Split a folder path on its first separator.

    Returns:
        (head, rest) where rest is empty for a single-segment path
    """
    head, _, rest = path.partition(PATH_SEP)
    return head, rest


def in_folder(path: str, folder: str) -> bool:
    """Check whether ``path`` is ``folder`` itself or lies beneath it.

    Matching is on whole segments: ``home`` contains ``home/errands``
    but not ``homework``.
    """
    if folder == "":
        return True
    return path == folder or path.startswith(folder + PATH_SEP)


def strip_folder_prefix(path: str, folder: str) -> str:
    """Make ``path`` relative to ``folder``.

    The folder itself becomes the root (empty string).
    """
    if folder == "" or not in_folder(path, folder):
        return path
    return path[len(folder) + len(PATH_SEP) :]


def filter_tasks(tasks: Iterable[Task], folder: str) -> List[Task]:
    """Keep tasks in or below ``folder``, with folders made relative to it.

    Returned tasks are copies; the input records are not modified.
    """
    return [
        task.with_folder(strip_folder_prefix(task.folder, folder))
        for task in tasks
        if in_folder(task.folder, folder)
    ]


def normalize_status(status: str, statuses: Iterable[str]) -> str:
    """Map a status onto its canonical spelling if it matches one.

    Any other value is kept verbatim as a free-text status.
    """
    cleaned = status.strip()
    for canonical in statuses:
        if cleaned.lower() == canonical.lower():
            return canonical
    return cleaned


def format_task_body(body: str, width: int = 25) -> str:
    """Wrap a task body to a fixed column width.

    Lines are padded to ``width`` so short bodies keep the column stable.
    """
    lines = textwrap.wrap(body, width=width) or [""]
    return "\n".join(line.ljust(width) for line in lines)


def describe_folder(folder: Optional[str]) -> str:
    """Human-readable folder label."""
    return folder if folder else "(root)"
