"""Pydantic models shared by every operation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FileRecord(BaseModel):
    """
    A regular file discovered during a catalog walk.

    Immutable for the duration of one run. ``mtime`` is whole seconds since
    the epoch, or None when it could not be read.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    size_bytes: int
    mtime: Optional[int] = None
    catalog: Path

    @property
    def relative_path(self) -> Path:
        """Path of the file relative to its catalog root."""
        return self.path.relative_to(self.catalog)
