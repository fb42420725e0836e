"""
Same-basename collision removal.

Files sharing a basename anywhere in the input catalogs form a set; the
newest (largest mtime) is kept and the others are deleted. Unknown mtimes
count as oldest. Ties keep the first file in walk order. In interactive mode
one confirmation covers the whole set.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import structlog

from cleaner.core.models import FileRecord
from cleaner.core.prompts import ConfirmationProvider
from cleaner.core.walker import walk_catalogs
from cleaner.tidy.base import Reporter, TidyResult

logger = structlog.get_logger(__name__)


def _newest_key(record: FileRecord) -> int:
    return -1 if record.mtime is None else record.mtime


class SameNameRemover:
    operation = "same-name"

    def __init__(
        self,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        self.provider = provider
        self.report = reporter or print

    @staticmethod
    def group_by_name(records: Iterable[FileRecord]) -> dict[str, list[FileRecord]]:
        """basename -> files, only for basenames shared by 2+ files."""
        by_name: dict[str, list[FileRecord]] = {}
        for record in records:
            by_name.setdefault(record.path.name, []).append(record)
        return {name: members for name, members in by_name.items() if len(members) > 1}

    def run(self, catalogs: Iterable[str | Path]) -> TidyResult:
        result = TidyResult(self.operation)
        groups = self.group_by_name(walk_catalogs(catalogs))

        logger.info("same_name_started", groups=len(groups))

        for name, members in groups.items():
            keeper = max(members, key=_newest_key)
            older = [r for r in members if r is not keeper]
            result.candidates += len(older)

            if self.provider.interactive:
                self.report(f"SAME NAME FOUND: {name}")
                self.report(f"  Suggested keep newest: {keeper.path}")
                for record in older:
                    self.report(f"  Older: {record.path}")

            if not self.provider.approve("Delete older files and keep newest?"):
                result.declined += len(older)
                self.report("SKIPPED SAME-NAME SET.")
                continue

            for record in older:
                try:
                    record.path.unlink()
                except OSError as e:
                    result.errors += 1
                    result.error_details.append((str(record.path), str(e)))
                    self.report(f"ERROR: delete {record.path}: {e.strerror or e}")
                    logger.warning("same_name_delete_failed", file_path=str(record.path), error=str(e))
                    continue
                result.applied += 1
                result.applied_files.append(str(record.path))
                self.report(f"DELETED OLDER: {record.path}")

            self.report(f"KEPT NEWEST: {keeper.path}")

        logger.info(
            "same_name_completed",
            deleted=result.applied,
            declined=result.declined,
            errors=result.errors,
        )
        return result
