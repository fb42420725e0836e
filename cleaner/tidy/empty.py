"""Remove zero-byte files."""

from __future__ import annotations

from cleaner.core.models import FileRecord
from cleaner.tidy.base import ConfirmedTidier


class EmptyFileRemover(ConfirmedTidier):
    operation = "empty"

    def is_candidate(self, record: FileRecord) -> bool:
        return record.size_bytes == 0

    def question(self, record: FileRecord) -> str:
        return f"Delete empty file {record.path}?"

    def declined_line(self, record: FileRecord) -> str:
        return f"KEPT EMPTY: {record.path}"

    def apply(self, record: FileRecord) -> str:
        record.path.unlink()
        return f"DELETED EMPTY: {record.path}"
