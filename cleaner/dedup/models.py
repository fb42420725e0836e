"""
Pydantic models for duplicate removal.

Models:
- ScanConfig: Catalogs to scan and hashing parameters
- ScanStats: Running scan statistics
- FileEntry: One file of a duplicate group
- DedupGroup: Files sharing the same size and SHA256
- ScanResult: Final scan result
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from cleaner.core.models import FileRecord


class DedupAction(str, Enum):
    """Action to take on a file in a dedup group."""

    keep = "keep"
    delete = "delete"


class ScanConfig(BaseModel):
    """Configuration for a duplicate scan."""

    catalogs: list[Path] = Field(default_factory=list, description="Catalogs to scan")
    chunk_size: int = Field(
        default=65536,
        gt=0,
        description="SHA256 hashing chunk size in bytes",
    )


class ScanStats(BaseModel):
    """Scan statistics, updated while the scan runs."""

    total_scanned: int = 0
    total_hashed: int = 0
    total_errors: int = 0
    size_groups: int = 0
    duplicate_groups: int = 0


class FileEntry(BaseModel):
    """Single file of a duplicate group."""

    record: FileRecord
    sha256_hash: str
    action: DedupAction = DedupAction.keep
    reason: str = ""

    @property
    def file_path(self) -> Path:
        return self.record.path

    @property
    def size_bytes(self) -> int:
        return self.record.size_bytes

    @property
    def mtime(self) -> Optional[int]:
        return self.record.mtime


class DedupGroup(BaseModel):
    """Group of files with identical size and SHA256 (a duplicate set)."""

    group_id: int
    sha256_hash: str
    size_bytes: int
    files: list[FileEntry] = Field(default_factory=list)
    keeper: Optional[FileEntry] = None
    to_delete: list[FileEntry] = Field(default_factory=list)


class ScanResult(BaseModel):
    """Final scan result."""

    total_scanned: int = 0
    duplicate_groups_count: int = 0
    total_duplicates: int = 0
    space_reclaimable_bytes: int = 0
    groups: list[DedupGroup] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
