"""Shared helpers for foldertasks tests."""

from typing import Iterable, Iterator

from foldertasks.tree import FOLDER, TASK, DisplayRow
from foldertasks.utils import Task


def make_task(task_id: int, body: str, folder: str = "", status: str = "Incomplete") -> Task:
    """Create a Task for testing."""
    return Task(id=task_id, body=body, folder=folder, status=status)


def rendered_tasks(rows: Iterable[DisplayRow]) -> Iterator[Task]:
    """Yield every task visible in rendered rows, depth first."""
    for row in rows:
        if row.kind == TASK and row.task is not None:
            yield row.task
        elif row.kind == FOLDER:
            yield from rendered_tasks(row.children)
