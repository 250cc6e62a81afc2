"""Folder tree for tasks.

Rebuilds the folder hierarchy from the flat list of stored tasks and
projects it into nested display rows, expanding subfolders only down to
a requested depth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidPathError
from .utils import Task, split_head

FOLDER = "folder"
COLLAPSED = "collapsed"
TASK = "task"


@dataclass
class Folder:
    """Node in the folder tree."""

    tasks: List[Task] = field(default_factory=list)
    subfolders: dict[str, "Folder"] = field(default_factory=dict)

    def children(self) -> Iterator[Tuple[str, "Folder"]]:
        """Iterate subfolders sorted by name."""
        for name in sorted(self.subfolders):
            yield name, self.subfolders[name]

    def add_task(self, task: Task) -> None:
        """Insert a task, creating intermediate folders along its path.

        The task's folder is interpreted relative to this folder. The stored
        copy carries the remaining (empty) path; the given task is not changed.

        Raises:
            InvalidPathError: If the path contains an empty segment
        """
        node = self
        remaining = task.folder
        while remaining.strip() != "":
            head, remaining = split_head(remaining)
            if head.strip() == "":
                raise InvalidPathError(task.folder)
            node = node.subfolders.setdefault(head, Folder())
        node.tasks.append(task.with_folder(remaining))

    def task_count(self) -> int:
        """Number of tasks in this folder and all subfolders."""
        return len(self.tasks) + sum(sub.task_count() for sub in self.subfolders.values())

    def height(self) -> int:
        """Levels of folders, counting this one."""
        return 1 + max((sub.height() for sub in self.subfolders.values()), default=0)

    def is_empty(self) -> bool:
        """Check whether the folder has neither tasks nor subfolders."""
        return not self.tasks and not self.subfolders


def build_folder_tree(tasks: Iterable[Task]) -> Folder:
    """Build a folder tree from tasks in load order.

    Args:
        tasks: Tasks in the order they should appear within each folder

    Returns:
        The root folder
    """
    root = Folder()
    for task in tasks:
        root.add_task(task)
    return root


@dataclass(frozen=True)
class DisplayRow:
    """One row of the rendered folder view.

    ``kind`` is FOLDER (expanded, with ``name`` and ``children``),
    COLLAPSED (placeholder for an unexplored subfolder) or TASK.
    """

    kind: str
    name: Optional[str] = None
    task: Optional[Task] = None
    children: Tuple["DisplayRow", ...] = ()


def render_folder(folder: Folder, max_depth: int) -> List[DisplayRow]:
    """Render a folder to display rows.

    Args:
        folder: Folder to render
        max_depth: Levels of subfolder expansion remaining, including this one

    Returns:
        Subfolder rows (sorted by name) followed by this folder's task rows
    """
    rows: List[DisplayRow] = []

    for name, sub in folder.children():
        if max_depth > 1:
            children = tuple(render_folder(sub, max_depth - 1))
            rows.append(DisplayRow(kind=FOLDER, name=name, children=children))
        else:
            rows.append(DisplayRow(kind=COLLAPSED))

    for task in folder.tasks:
        rows.append(DisplayRow(kind=TASK, task=task))

    return rows