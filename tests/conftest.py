"""Pytest configuration for foldertasks tests."""

import random

import pytest

from foldertasks.config import TrackerConfig
from foldertasks.store import TaskStore


@pytest.fixture
def db_path(tmp_path):
    """Path of a temporary task database."""
    return tmp_path / "tasks.db"


@pytest.fixture
def config(tmp_path, db_path):
    """Configuration pointing at the temporary database."""
    return TrackerConfig(data_dir=tmp_path, db_file=db_path, default_depth=3)


@pytest.fixture
def store(db_path):
    """Task store with schema and a seeded random source."""
    store = TaskStore(db_path, rng=random.Random(1234))
    store.ensure_schema()
    return store
