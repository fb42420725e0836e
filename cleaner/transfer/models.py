"""
Pydantic models for catalog transfer.

Models:
- TransferMode: copy or move
- ConflictDecision: what to do when the destination file exists
- TransferAction: what actually happened to one file
- MovedFile: outcome for one source file
- TransferResult: outcome of a whole transfer run
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class TransferMode(str, Enum):
    """Copy keeps the source, move removes it on success."""

    copy = "copy"
    move = "move"


class ConflictDecision(str, Enum):
    """Decision for a source file whose destination already exists."""

    replace = "r"
    keep = "k"
    skip = "s"


class TransferAction(str, Enum):
    """Action performed on one source file."""

    copied = "copied"
    moved = "moved"
    replaced = "replaced"
    kept = "kept"
    skipped = "skipped"
    failed = "failed"


class MovedFile(BaseModel):
    """Outcome of one file transfer."""

    source_path: Path
    destination_path: Path
    action: TransferAction
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.action is not TransferAction.failed


class TransferResult(BaseModel):
    """Outcome of merging source catalogs into a destination catalog."""

    mode: TransferMode
    destination: Path
    files: list[MovedFile] = Field(default_factory=list)
    skipped_catalogs: list[Path] = Field(default_factory=list)

    def count(self, action: TransferAction) -> int:
        return sum(1 for f in self.files if f.action is action)

    @property
    def errors(self) -> list[MovedFile]:
        return [f for f in self.files if f.action is TransferAction.failed]
