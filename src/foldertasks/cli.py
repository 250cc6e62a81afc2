"""Folder-based task tracker CLI.

Features:
- Add, update and delete tasks by id
- Nested folder view with a depth limit
- Folder filtering (a folder and everything below it)
"""

import functools
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table
from tabulate import tabulate

from . import __version__, lib
from .config import TrackerConfig, load_config
from .errors import NotFoundError, TrackerError, UsageError
from .store import ID_MAX, ID_MIN, TaskStore
from .tree import COLLAPSED, FOLDER, DisplayRow, render_folder
from .utils import Task, describe_folder, format_task_body

TaskId = click.IntRange(ID_MIN, ID_MAX)


def handle_errors(f):
    """Report tracker errors to the user and exit with their exit code."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except TrackerError as e:
            Console().print(f"[bold red]ERROR![/] {escape(str(e))}")
            sys.exit(e.exit_code)

    return wrapper


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--db",
    "db_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Database file (default: $FOLDERTASKS_DB or ~/.tasks/tasks.db)",
)
@click.version_option(__version__, prog_name="foldertasks")
@click.pass_context
def cli(ctx, verbose, db_file):
    """Folder-based task tracker."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    try:
        ctx.obj = load_config(db_file=db_file)
    except ValidationError as e:
        Console().print(f"[bold red]ERROR![/] Invalid configuration:\n{escape(str(e))}")
        sys.exit(UsageError.exit_code)


def get_store(config: TrackerConfig, console: Console) -> TaskStore:
    """Open the store, announcing a freshly created database."""
    store, created = lib.open_store(config)
    if created:
        console.print("[bold green]Created Database![/]")
    return store


def task_table(task: Task, title: str, width: int) -> Table:
    """Summary table for a single task."""
    table = Table(title=title, title_style="bold green")
    table.add_column("ID", style="bold")
    table.add_column("Folder")
    table.add_column("Status")
    table.add_column("Task")
    table.add_row(
        str(task.id),
        escape(describe_folder(task.folder)),
        f"[{task.style}]{escape(task.status)}[/]",
        escape(format_task_body(task.body, width)),
    )
    return table


def task_cell(task: Task, width: int) -> Table:
    """Nested ID / Task / Status table shown inside a folder view."""
    table = Table(box=None, padding=(0, 1), show_edge=False)
    table.add_column("ID")
    table.add_column("Task")
    table.add_column("Status")
    table.add_row(
        str(task.id),
        escape(format_task_body(task.body, width)),
        f"[{task.style}]{escape(task.status)}[/]",
    )
    return table


def folder_table(rows: List[DisplayRow], width: int, nested: bool = False) -> Table:
    """Paint rendered folder rows as (nested) rich tables."""
    if nested:
        table = Table(box=None, padding=(0, 1), show_edge=False)
    else:
        table = Table()
    table.add_column("Type", style="bold green")
    table.add_column("Contents")

    for row in rows:
        if row.kind == FOLDER:
            table.add_row(
                f"Folder: {escape(row.name or '')}",
                folder_table(list(row.children), width, nested=True),
            )
        elif row.kind == COLLAPSED:
            table.add_row("Folder", "------")
        elif row.task is not None:
            table.add_row("Task", task_cell(row.task, width))

    return table


@cli.command("add")
@click.option("-f", "--folder", required=True, help="Folder to store the task in")
@click.option("-t", "--task", "body", required=True, help="What needs to be done")
@click.pass_obj
@handle_errors
def add(config: TrackerConfig, folder: str, body: str):
    """Add a new task."""
    console = Console()
    store = get_store(config, console)

    task = lib.add_task(store, config, folder, body)
    console.print(task_table(task, "Created!", config.body_width))


@cli.command("delete")
@click.option("-i", "--id", "task_id", type=TaskId, required=True, help="Task id")
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_obj
@handle_errors
def delete(config: TrackerConfig, task_id: int, yes: bool):
    """Remove a task."""
    console = Console()
    store = get_store(config, console)

    try:
        task = lib.get_task(store, task_id)
    except NotFoundError:
        console.print("[red]No Task with that ID[/]")
        return

    console.print(task_table(task, "Delete?", config.body_width))

    if not yes and not Confirm.ask(
        "[bold red]Are You Sure?[/]", console=console, default=False
    ):
        console.print("[bold green]Deletion Canceled[/]")
        return

    try:
        lib.delete_task(store, task_id)
    except NotFoundError:
        console.print("[red]No Task with that ID[/]")
        return

    console.print(f"[blue]Successfully Deleted Task {task_id}[/]")


@cli.command("update")
@click.option("-i", "--id", "task_id", type=TaskId, required=True, help="Task id")
@click.option("-t", "--task", "body", default=None, help="New task text")
@click.option("-f", "--folder", default=None, help="New folder")
@click.option(
    "-s",
    "--status",
    default=None,
    help="New status (Incomplete, In Progress, Complete, or any text)",
)
@click.pass_obj
@handle_errors
def update(
    config: TrackerConfig,
    task_id: int,
    body: Optional[str],
    folder: Optional[str],
    status: Optional[str],
):
    """Update a task's text, folder or status."""
    console = Console()
    store = get_store(config, console)

    try:
        task = lib.update_task(
            store, config, task_id, body=body, folder=folder, status=status
        )
    except NotFoundError:
        console.print(f"[red]ERROR: Task Doesn't Exist[/] (ID {task_id})")
        return

    console.print(task_table(task, "Updated!", config.body_width))


@cli.command("list")
@click.option("-f", "--folder", default=None, help="Only list this folder (and below)")
@click.option(
    "-d",
    "--depth",
    type=click.IntRange(min=0),
    default=None,
    help="How many folder levels to expand (default: 3)",
)
@click.pass_obj
@handle_errors
def list_(config: TrackerConfig, folder: Optional[str], depth: Optional[int]):
    """List tasks as a nested folder view."""
    console = Console()
    store = get_store(config, console)

    if depth is None:
        depth = config.default_depth

    root = lib.load_folder_tree(store, folder)
    table = folder_table(render_folder(root, depth), config.body_width)
    if root.is_empty():
        table.add_row("", "No Tasks Here!")

    console.print(table)


@cli.command("status")
@click.pass_obj
def status_(config: TrackerConfig):
    """Show the suggested status values."""
    console = Console()
    rows = [
        [status, "(default)" if status == config.default_status else ""]
        for status in config.statuses
    ]
    console.print(tabulate(rows, headers=["Status", ""], tablefmt="plain"))
    console.print("\nAny other text is accepted as a custom status.")
