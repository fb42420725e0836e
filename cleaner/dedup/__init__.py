"""
Duplicate removal.

Modules:
- scanner: Two-phase content grouping (size, then SHA256)
- priority_engine: Retained-file selection (oldest wins)
- deleter: Batch deletion with confirmation
- models: Pydantic data models
"""

from cleaner.dedup.models import (
    DedupAction,
    DedupGroup,
    FileEntry,
    ScanConfig,
    ScanResult,
    ScanStats,
)

__all__ = [
    "DedupAction",
    "DedupGroup",
    "FileEntry",
    "ScanConfig",
    "ScanResult",
    "ScanStats",
]
