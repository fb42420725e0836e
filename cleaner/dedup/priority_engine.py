"""
Retained-file selection for duplicate groups.

The oldest file (smallest modification time) is kept. A file whose mtime is
unknown counts as infinitely new, so a dated copy is always preferred. Ties
keep the first file in walk order.
"""

from __future__ import annotations

import sys
from typing import Optional

import structlog

from cleaner.dedup.models import DedupAction, DedupGroup, FileEntry

logger = structlog.get_logger(__name__)

UNKNOWN_MTIME = sys.maxsize


class PriorityEngine:
    """Select which file to keep among duplicates."""

    def select_keeper(self, group: DedupGroup) -> DedupGroup:
        """
        Select 1 file to KEEP, mark the others for DELETE.

        Args:
            group: Duplicate group with files in walk order

        Returns:
            Updated DedupGroup with keeper and to_delete set
        """
        if not group.files:
            return group

        # min() returns the first of equal keys, which gives the walk-order tie-break
        keeper = min(group.files, key=self.mtime_key)
        keeper.action = DedupAction.keep
        keeper.reason = "oldest"
        group.keeper = keeper

        group.to_delete = []
        for entry in group.files:
            if entry is keeper:
                continue
            entry.action = DedupAction.delete
            entry.reason = "newer copy"
            group.to_delete.append(entry)

        logger.debug(
            "dedup_keeper_selected",
            group_id=group.group_id,
            keeper=str(keeper.file_path),
            to_delete=len(group.to_delete),
        )

        return group

    @staticmethod
    def mtime_key(entry: FileEntry) -> int:
        """Sort key: mtime, unknown mtimes last."""
        return effective_mtime(entry.mtime)


def effective_mtime(mtime: Optional[int]) -> int:
    return UNKNOWN_MTIME if mtime is None else mtime
