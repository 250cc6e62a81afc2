"""Configuration management for foldertasks.

Settings are validated with Pydantic. Paths and defaults can be overridden
via environment variables, or per invocation through ``load_config``.
"""

import os
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_STATUSES = ["Incomplete", "In Progress", "Complete"]


def get_data_dir() -> Path:
    """Get data directory from environment or default."""
    if path := os.environ.get("FOLDERTASKS_HOME"):
        return Path(path).expanduser()
    return Path.home() / ".tasks"


def get_db_path() -> Optional[Path]:
    """Get explicit database path from environment, if any."""
    if path := os.environ.get("FOLDERTASKS_DB"):
        return Path(path).expanduser()
    return None


def get_default_depth() -> Union[int, str]:
    """Get default list depth from environment or default.

    The raw environment value is returned; the model validates it.
    """
    return os.environ.get("FOLDERTASKS_DEPTH") or 3


class TrackerConfig(BaseModel):
    """Task tracker configuration.

    Attributes:
        data_dir: Directory holding the database
        db_file: Explicit database file (defaults to data_dir/tasks.db)
        default_depth: How many folder levels ``list`` expands by default
        statuses: Canonical status values, first one is the default
        max_id_attempts: Random draws before id allocation gives up
        body_width: Column width task bodies are wrapped to
    """

    model_config = ConfigDict(validate_default=True)

    data_dir: Path = Field(default_factory=get_data_dir)
    db_file: Optional[Path] = Field(default_factory=get_db_path)
    default_depth: int = Field(default_factory=get_default_depth, ge=1)
    statuses: List[str] = Field(default_factory=lambda: list(DEFAULT_STATUSES))
    max_id_attempts: int = Field(default=512, ge=1)
    body_width: int = Field(default=25, ge=1)

    @field_validator("statuses")
    @classmethod
    def validate_statuses(cls, v: List[str]) -> List[str]:
        """Require at least one non-blank status."""
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError("statuses must contain at least one value")
        return cleaned

    @property
    def db_path(self) -> Path:
        """Resolved path of the SQLite database."""
        if self.db_file is not None:
            return self.db_file
        return self.data_dir / "tasks.db"

    @property
    def default_status(self) -> str:
        """Status given to newly created tasks."""
        return self.statuses[0]


def load_config(**overrides: Any) -> TrackerConfig:
    """Build the configuration, ignoring overrides that are None."""
    return TrackerConfig(**{k: v for k, v in overrides.items() if v is not None})
