"""Core business logic for the foldertasks package.

This module sits between the CLI layer (cli.py) and storage (store.py).

Architecture:
- cli.py: Click commands, output formatting, user interaction
- lib.py: Command operations, validation before any write
- store.py: SQLite access, id allocation
- tree.py: Folder tree building and bounded-depth rendering
- utils.py: Pure utility functions, data structures, helpers
"""

import logging
from typing import List, Optional, Tuple

from .config import TrackerConfig
from .errors import NotFoundError, UsageError
from .store import TaskStore
from .tree import Folder, build_folder_tree
from .utils import Task, filter_tasks, normalize_status, validate_path

logger = logging.getLogger(__name__)


def open_store(config: TrackerConfig) -> Tuple[TaskStore, bool]:
    """Open the task store and make sure the schema exists.

    Returns:
        (store, created) where created tells whether the table was new
    """
    store = TaskStore(config.db_path, max_id_attempts=config.max_id_attempts)
    created = store.ensure_schema()
    logger.debug("Task store ready db=%s total=%s", store.db_path, store.count_tasks())
    return store, created


def add_task(store: TaskStore, config: TrackerConfig, folder: str, body: str) -> Task:
    """Validate the folder and store a new task with the default status."""
    validate_path(folder)
    return store.insert_task(folder=folder, body=body, status=config.default_status)


def get_task(store: TaskStore, task_id: int) -> Task:
    """Fetch a task or raise NotFoundError."""
    task = store.get_task(task_id)
    if task is None:
        raise NotFoundError(task_id)
    return task


def delete_task(store: TaskStore, task_id: int) -> Task:
    """Delete a task.

    Returns:
        The deleted task

    Raises:
        NotFoundError: If no task has that id
    """
    task = get_task(store, task_id)
    if not store.delete_task(task_id):
        raise NotFoundError(task_id)
    return task


def update_task(
    store: TaskStore,
    config: TrackerConfig,
    task_id: int,
    body: Optional[str] = None,
    folder: Optional[str] = None,
    status: Optional[str] = None,
) -> Task:
    """Update a task's body, folder and/or status.

    Everything is validated before the write; on any error the stored task
    is left unchanged.

    Raises:
        UsageError: If no field to update was given
        InvalidPathError: If the new folder is malformed
        NotFoundError: If no task has that id
    """
    if body is None and folder is None and status is None:
        raise UsageError("Please use an update flag! (--task, --folder or --status)")

    # Updates bypass add_task, so the folder is checked again here
    if folder is not None:
        validate_path(folder)

    if status is not None:
        status = normalize_status(status, config.statuses)

    get_task(store, task_id)

    updated = store.update_task(task_id, body=body, folder=folder, status=status)
    if updated is None:
        raise NotFoundError(task_id)
    return updated


def load_tasks(store: TaskStore, folder: Optional[str] = None) -> List[Task]:
    """Load tasks, optionally only those in or below a folder.

    With a folder filter, folder paths are made relative to that folder.
    A blank filter means the root, as it does for ``add``.
    """
    folder = (folder or "").strip()
    if not folder:
        return store.list_tasks()

    validate_path(folder)
    return filter_tasks(store.list_tasks(folder), folder)


def load_folder_tree(store: TaskStore, folder: Optional[str] = None) -> Folder:
    """Load tasks and build the folder tree from them."""
    tasks = load_tasks(store, folder)
    root = build_folder_tree(tasks)
    logger.debug(
        "Built folder tree: %s task(s), height %s", root.task_count(), root.height()
    )
    return root
