"""Remove temporary files (basename matches a configured shell pattern)."""

from __future__ import annotations

import fnmatch
from typing import Iterable, Optional

from cleaner.core.models import FileRecord
from cleaner.core.prompts import ConfirmationProvider
from cleaner.tidy.base import ConfirmedTidier, Reporter


class TemporaryFileRemover(ConfirmedTidier):
    operation = "temporary"

    def __init__(
        self,
        patterns: Iterable[str],
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        super().__init__(provider, reporter)
        self.patterns = list(patterns)

    def is_candidate(self, record: FileRecord) -> bool:
        name = record.path.name
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.patterns)

    def question(self, record: FileRecord) -> str:
        return f"Delete temporary file {record.path}?"

    def declined_line(self, record: FileRecord) -> str:
        return f"KEPT TEMPORARY: {record.path}"

    def apply(self, record: FileRecord) -> str:
        record.path.unlink()
        return f"DELETED TEMPORARY: {record.path}"
