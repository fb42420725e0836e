"""
Duplicate scanner with two-phase grouping.

Features:
- Catalog walk shared with the other operations
- Phase 1: group by exact size, singleton sizes are never hashed
- Phase 2: chunked SHA256 of each surviving file, group by hash
- Unreadable files are counted and skipped, the scan goes on
- Progress callback every 100 hashed files

Equal SHA256 is treated as equal content; no byte-by-byte comparison is made.
"""

from __future__ import annotations

import hashlib
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from cleaner.core.models import FileRecord
from cleaner.core.walker import walk_catalogs
from cleaner.dedup.models import (
    DedupGroup,
    FileEntry,
    ScanConfig,
    ScanResult,
    ScanStats,
)

logger = structlog.get_logger(__name__)


class DedupScanner:
    """
    Find sets of files with identical content across all catalogs.

    Duplicate detection is catalog-agnostic: a file in one catalog that
    duplicates a file in another is part of the same group.
    """

    def __init__(
        self,
        config: ScanConfig,
        progress_callback: Optional[Callable[[ScanStats], None]] = None,
    ):
        """
        Initialize scanner.

        Args:
            config: Scan configuration
            progress_callback: Optional callback for progress updates
        """
        self.config = config
        self.progress_callback = progress_callback
        self.stats = ScanStats()
        self.errors: list[str] = []

    def scan(self, records: Optional[Iterable[FileRecord]] = None) -> ScanResult:
        """
        Main scan entry point.

        Steps:
        1. Walk the catalogs (unless ``records`` is given)
        2. Group by size, drop singletons
        3. Hash and group by SHA256, drop singletons

        Args:
            records: Pre-enumerated files (skips the walk)

        Returns:
            ScanResult with duplicate groups, in first-encountered order
        """
        start_time = time.time()
        self.stats = ScanStats()
        self.errors = []

        logger.info(
            "dedup_scan_started",
            catalogs=[str(c) for c in self.config.catalogs],
        )

        if records is None:
            records = walk_catalogs(self.config.catalogs)

        size_groups = self.group_by_size(records)
        self.stats.size_groups = len(size_groups)

        groups: list[DedupGroup] = []
        for size_bytes, members in size_groups.items():
            for sha256_hash, entries in self.group_by_hash(members).items():
                groups.append(
                    DedupGroup(
                        group_id=len(groups) + 1,
                        sha256_hash=sha256_hash,
                        size_bytes=size_bytes,
                        files=entries,
                    )
                )
        self.stats.duplicate_groups = len(groups)

        total_duplicates = sum(len(g.files) - 1 for g in groups)
        space_reclaimable = sum(g.size_bytes * (len(g.files) - 1) for g in groups)

        result = ScanResult(
            total_scanned=self.stats.total_scanned,
            duplicate_groups_count=len(groups),
            total_duplicates=total_duplicates,
            space_reclaimable_bytes=space_reclaimable,
            groups=groups,
            errors=list(self.errors),
        )

        logger.info(
            "dedup_scan_completed",
            total_scanned=result.total_scanned,
            total_hashed=self.stats.total_hashed,
            duplicate_groups=result.duplicate_groups_count,
            total_duplicates=result.total_duplicates,
            errors=self.stats.total_errors,
            elapsed_seconds=round(time.time() - start_time, 2),
        )

        return result

    def group_by_size(self, records: Iterable[FileRecord]) -> dict[int, list[FileRecord]]:
        """
        Partition files by exact byte size.

        Returns:
            size -> files, only for sizes shared by 2+ files
        """
        by_size: dict[int, list[FileRecord]] = {}
        for record in records:
            self.stats.total_scanned += 1
            by_size.setdefault(record.size_bytes, []).append(record)

        return {size: members for size, members in by_size.items() if len(members) > 1}

    def group_by_hash(self, members: list[FileRecord]) -> dict[str, list[FileEntry]]:
        """
        Partition same-size files by SHA256.

        Files that cannot be read are skipped; the others are still grouped.

        Returns:
            sha256 -> entries, only for hashes shared by 2+ files
        """
        by_hash: dict[str, list[FileEntry]] = {}
        for record in members:
            try:
                sha256_hash = self._hash_file(record.path)
            except OSError as e:
                self.stats.total_errors += 1
                self.errors.append(f"{record.path}: {e.strerror or e}")
                logger.warning(
                    "dedup_hash_failed",
                    file_path=str(record.path),
                    error=str(e),
                )
                continue

            self.stats.total_hashed += 1
            by_hash.setdefault(sha256_hash, []).append(
                FileEntry(record=record, sha256_hash=sha256_hash)
            )

            if self.progress_callback and self.stats.total_hashed % 100 == 0:
                self.progress_callback(self.stats)

        return {h: entries for h, entries in by_hash.items() if len(entries) > 1}

    def _hash_file(self, file_path: Path) -> str:
        """
        Compute SHA256 hash (chunked for memory efficiency).

        Raises:
            OSError: If the file cannot be read
        """
        sha256 = hashlib.sha256()

        with open(file_path, "rb") as f:
            while chunk := f.read(self.config.chunk_size):
                sha256.update(chunk)

        return sha256.hexdigest()
