"""Tests for folder tree building and rendering."""

import itertools

import pytest

from foldertasks.errors import InvalidPathError
from foldertasks.tree import (
    COLLAPSED,
    FOLDER,
    TASK,
    DisplayRow,
    Folder,
    build_folder_tree,
    render_folder,
)

from helpers import make_task, rendered_tasks


def sample_tasks():
    """Tasks spread over a few folder levels, in load order."""
    return [
        make_task(1, "A"),
        make_task(2, "B"),
        make_task(3, "Buy milk", "home/errands"),
        make_task(4, "Post letter", "home/errands"),
        make_task(5, "Sweep", "home"),
        make_task(6, "Deep", "work/projects/alpha/beta"),
        make_task(7, "Report", "work"),
    ]


def collect(folder: Folder, prefix: str = ""):
    """Map every task id to the folder path it ended up in."""
    placed = {}
    for task in folder.tasks:
        assert task.id not in placed
        placed[task.id] = prefix
    for name, sub in folder.children():
        path = f"{prefix}/{name}" if prefix else name
        for task_id, where in collect(sub, path).items():
            assert task_id not in placed
            placed[task_id] = where
    return placed


class TestBuildFolderTree:
    """Test build_folder_tree."""

    def test_every_task_placed_once(self):
        """Each task lands in exactly the folder its path names."""
        tasks = sample_tasks()
        root = build_folder_tree(tasks)

        assert collect(root) == {task.id: task.folder for task in tasks}
        assert root.task_count() == len(tasks)

    def test_root_tasks_keep_order(self):
        """Root tasks stay in insertion order and create no folders."""
        root = build_folder_tree([make_task(1, "A"), make_task(2, "B")])
        assert [t.body for t in root.tasks] == ["A", "B"]
        assert root.subfolders == {}

    def test_same_folder_order_is_stable(self):
        root = build_folder_tree(
            [make_task(1, "z", "f"), make_task(2, "a", "f"), make_task(3, "m", "f")]
        )
        assert [t.id for t in root.subfolders["f"].tasks] == [1, 2, 3]

    def test_subfolders_sorted(self):
        """Subfolder iteration is sorted regardless of insertion order."""
        root = build_folder_tree(
            [make_task(1, "x", "zeta"), make_task(2, "y", "alpha"), make_task(3, "z", "mid")]
        )
        assert [name for name, _ in root.children()] == ["alpha", "mid", "zeta"]

    def test_tasks_in_tree_have_relative_folders(self):
        """Stored copies carry the consumed path; inputs are untouched."""
        task = make_task(1, "Buy milk", "home/errands")
        root = build_folder_tree([task])

        placed = root.subfolders["home"].subfolders["errands"].tasks[0]
        assert placed.folder == ""
        assert placed.body == "Buy milk"
        assert task.folder == "home/errands"

    @pytest.mark.parametrize("folder", ["/home", "home//x", "a/ /b"])
    def test_corrupt_stored_path(self, folder):
        """An empty segment in stored data is an error, not a nameless folder."""
        with pytest.raises(InvalidPathError):
            build_folder_tree([make_task(1, "bad", folder)])

    def test_height(self):
        root = build_folder_tree(sample_tasks())
        assert root.height() == 5
        assert Folder().height() == 1
        assert Folder().is_empty()


class TestRenderFolder:
    """Test render_folder."""

    def test_full_depth_reveals_everything(self):
        tasks = sample_tasks()
        root = build_folder_tree(tasks)

        rows = render_folder(root, root.height())
        assert sorted(t.id for t in rendered_tasks(rows)) == [t.id for t in tasks]
        assert all(row.kind != COLLAPSED for row in _walk(rows))

    def test_depth_one_hides_subfolders(self):
        """Depth 1 shows only placeholders for subfolders."""
        root = build_folder_tree(sample_tasks())
        rows = render_folder(root, 1)

        assert [row.kind for row in rows] == [COLLAPSED, COLLAPSED, TASK, TASK]
        assert all(row.name is None and row.children == () for row in rows[:2])
        assert [t.body for t in rendered_tasks(rows)] == ["A", "B"]

    def test_depth_zero_behaves_like_one(self):
        root = build_folder_tree(sample_tasks())
        assert render_folder(root, 0) == render_folder(root, 1)

    def test_depth_two(self):
        root = build_folder_tree(sample_tasks())
        rows = render_folder(root, 2)

        home, work = rows[0], rows[1]
        assert (home.kind, home.name) == (FOLDER, "home")
        assert [row.kind for row in home.children] == [COLLAPSED, TASK]
        assert home.children[1].task.body == "Sweep"
        assert (work.kind, work.name) == (FOLDER, "work")
        assert [row.kind for row in work.children] == [COLLAPSED, TASK]

    def test_folders_before_tasks(self):
        root = build_folder_tree([make_task(1, "root task"), make_task(2, "x", "sub")])
        rows = render_folder(root, 3)
        assert [row.kind for row in rows] == [FOLDER, TASK]

    def test_empty_tree_renders_no_rows(self):
        assert render_folder(Folder(), 3) == []

    def test_deterministic_across_input_order(self):
        """Only same-folder order matters for the rendered result."""
        tasks = sample_tasks()
        groups = {}
        for task in tasks:
            groups.setdefault(task.folder, []).append(task)

        expected = render_folder(build_folder_tree(tasks), 4)
        for order in itertools.permutations(groups):
            shuffled = [task for folder in order for task in groups[folder]]
            assert render_folder(build_folder_tree(shuffled), 4) == expected

    def test_render_does_not_mutate(self):
        """Rendering at several depths leaves the tree as it was."""
        root = build_folder_tree(sample_tasks())
        before = collect(root)

        first = render_folder(root, 3)
        render_folder(root, 1)
        render_folder(root, 10)

        assert collect(root) == before
        assert render_folder(root, 3) == first


def _walk(rows):
    for row in rows:
        yield row
        yield from _walk(row.children)


def test_display_row_defaults():
    row = DisplayRow(kind=COLLAPSED)
    assert row.task is None
    assert row.children == ()
