"""
SQLite storage for tasks.

One flat table holds every task; the folder hierarchy is rebuilt from it
on demand (see ``foldertasks.tree``).
"""

from __future__ import annotations

import logging
import random
import sqlite3
from pathlib import Path
from typing import Any

from .errors import IdSpaceExhaustedError, StorageError
from .utils import Task

logger = logging.getLogger(__name__)

# Task ids are small unsigned integers
ID_MIN = 0
ID_MAX = 255
ID_SPACE = ID_MAX - ID_MIN + 1


class TaskStore:
    """Read and write tasks in a SQLite database."""

    def __init__(
        self,
        db_path: str | Path,
        rng: random.Random | None = None,
        max_id_attempts: int = 512,
    ):
        """
        Initialize task store.

        Args:
            db_path: Path to the SQLite file (created if missing)
            rng: Random source for id allocation
            max_id_attempts: Random draws before id allocation gives up
        """
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.rng = rng or random.Random()
        self.max_id_attempts = max_id_attempts

    def _query(self, query: str, params: tuple[Any, ...] = ()) -> list[tuple[Any, ...]]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Database error: {e}") from e

    def _write(self, query: str, params: tuple[Any, ...] = ()) -> int:
        try:
            with sqlite3.connect(self.db_path) as conn:
                return conn.execute(query, params).rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Database error: {e}") from e

    @staticmethod
    def _row_to_task(row: tuple[Any, ...]) -> Task:
        folder, body, task_id, status = row
        return Task(id=int(task_id), body=body, folder=folder, status=status)

    def ensure_schema(self) -> bool:
        """
        Create the tasks table if it does not exist yet.

        Returns:
            True if the table was created by this call
        """
        existing = self._query(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='tasks'"
        )
        if existing:
            logger.debug("Tasks table already exists in %s", self.db_path)
            return False

        self._write(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                folder TEXT NOT NULL,
                task TEXT NOT NULL,
                id INTEGER NOT NULL,
                status TEXT NOT NULL
            )
        """
        )
        logger.debug("Created tasks table in %s", self.db_path)
        return True

    def count_tasks(self) -> int:
        """Number of stored tasks."""
        ((n,),) = self._query("SELECT COUNT(*) FROM tasks")
        return int(n)

    def used_ids(self) -> set[int]:
        """Ids currently taken."""
        return {int(row[0]) for row in self._query("SELECT id FROM tasks")}

    def allocate_id(self, max_attempts: int | None = None) -> int:
        """
        Pick a random unused id.

        Draws uniformly from the id range and redraws on collision.

        Args:
            max_attempts: Draws before giving up (default: store setting)

        Returns:
            A free task id

        Raises:
            IdSpaceExhaustedError: If every id is taken or no free id was drawn in time
        """
        attempts = max_attempts if max_attempts is not None else self.max_id_attempts

        used = self.used_ids()
        if len(used) >= ID_SPACE:
            raise IdSpaceExhaustedError(attempts=0, used=len(used))

        for attempt in range(1, attempts + 1):
            candidate = self.rng.randint(ID_MIN, ID_MAX)
            if candidate not in used:
                logger.debug("Allocated id %s after %s draw(s)", candidate, attempt)
                return candidate
            logger.debug("Id %s already in use, drawing again", candidate)

        raise IdSpaceExhaustedError(attempts=attempts, used=len(used))

    def get_task(self, task_id: int) -> Task | None:
        """Fetch a task by id."""
        rows = self._query(
            "SELECT folder, task, id, status FROM tasks WHERE id = ?", (task_id,)
        )
        return self._row_to_task(rows[0]) if rows else None

    def insert_task(self, folder: str, body: str, status: str) -> Task:
        """
        Store a new task under a freshly allocated id.

        The folder must already be validated.

        Returns:
            The stored task
        """
        task_id = self.allocate_id()
        self._write(
            "INSERT INTO tasks (folder, task, id, status) VALUES (?, ?, ?, ?)",
            (folder, body, task_id, status),
        )
        logger.debug("Added task %s in folder %r", task_id, folder)
        return Task(id=task_id, body=body, folder=folder, status=status)

    def delete_task(self, task_id: int) -> bool:
        """
        Delete a task.

        Returns:
            True if a row was removed
        """
        deleted = self._write("DELETE FROM tasks WHERE id = ?", (task_id,)) > 0
        if deleted:
            logger.debug("Deleted task %s", task_id)
        return deleted

    def update_task(
        self,
        task_id: int,
        body: str | None = None,
        folder: str | None = None,
        status: str | None = None,
    ) -> Task | None:
        """
        Change fields of a task. Fields left as None are kept.

        The folder must already be validated.

        Returns:
            The updated task, or None if no task has that id
        """
        fields: list[str] = []
        params: list[Any] = []

        if body is not None:
            fields.append("task = ?")
            params.append(body)

        if folder is not None:
            fields.append("folder = ?")
            params.append(folder)

        if status is not None:
            fields.append("status = ?")
            params.append(status)

        if fields:
            params.append(task_id)
            query = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"
            changed = self._write(query, tuple(params))
            logger.debug("Updated task %s (%s row(s))", task_id, changed)

        return self.get_task(task_id)

    def list_tasks(self, folder: str | None = None) -> list[Task]:
        """
        Load tasks ordered by folder, then body.

        Args:
            folder: Only load tasks in this folder or below it (optional)

        Returns:
            Tasks with their stored (full) folder paths
        """
        query = "SELECT folder, task, id, status FROM tasks WHERE 1=1"
        params: list[Any] = []

        if folder:
            prefix = folder + "/"
            query += " AND (folder = ? OR substr(folder, 1, ?) = ?)"
            params.extend([folder, len(prefix), prefix])

        query += " ORDER BY folder ASC, task ASC"

        rows = self._query(query, tuple(params))
        return [self._row_to_task(row) for row in rows]
