"""
Interactive per-file rename.

For every file the operator types a new basename; an empty answer keeps the
current one. Nothing is renamed in automatic mode.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import structlog

from cleaner.core.models import FileRecord
from cleaner.tidy.base import FileTidier, TidyResult

logger = structlog.get_logger(__name__)


class InteractiveRenamer(FileTidier):
    operation = "rename"

    def run(self, catalogs: Iterable[str | Path]) -> TidyResult:
        if not self.provider.interactive:
            self.report("RENAME: nothing to do in default mode")
            return TidyResult(self.operation)
        return super().run(catalogs)

    def is_candidate(self, record: FileRecord) -> bool:
        return True

    def question(self, record: FileRecord) -> str:
        return f"New name for {record.path} (empty keeps it): "

    def declined_line(self, record: FileRecord) -> str:
        return f"KEPT NAME: {record.path}"

    def handle(self, record: FileRecord, result: TidyResult) -> None:
        new_name = self.provider.ask(self.question(record), default="")

        if not new_name or new_name == record.path.name:
            result.declined += 1
            self.report(self.declined_line(record))
            return

        if not self.is_valid_name(new_name):
            result.declined += 1
            self.report(f"SKIPPED RENAME (invalid name): {record.path} -> {new_name}")
            return

        target = record.path.with_name(new_name)
        if os.path.lexists(target):
            result.declined += 1
            self.report(f"SKIPPED RENAME (target exists): {record.path} -> {target}")
            return

        try:
            os.rename(record.path, target)
        except OSError as e:
            self.record_error(record, e, result)
            return

        result.applied += 1
        result.applied_files.append(str(record.path))
        self.report(f"RENAMED: {record.path} -> {target}")
        logger.debug("rename_done", source=str(record.path), target=str(target))

    @staticmethod
    def is_valid_name(name: str) -> bool:
        """A basename: no separator, not '.' or '..'."""
        if name in (".", ".."):
            return False
        if "/" in name or os.sep in name:
            return False
        return not (os.altsep and os.altsep in name)
