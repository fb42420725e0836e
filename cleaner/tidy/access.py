"""Normalize permission bits to the configured value."""

from __future__ import annotations

import os
import stat
from typing import Optional

from cleaner.config.cleanup_config import format_permissions
from cleaner.core.models import FileRecord
from cleaner.core.prompts import ConfirmationProvider
from cleaner.tidy.base import ConfirmedTidier, Reporter


class AccessNormalizer(ConfirmedTidier):
    operation = "access"

    def __init__(
        self,
        mode: int,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        super().__init__(provider, reporter)
        self.mode = mode

    def current_mode(self, record: FileRecord) -> int:
        return stat.S_IMODE(os.lstat(record.path).st_mode)

    def is_candidate(self, record: FileRecord) -> bool:
        try:
            return self.current_mode(record) != self.mode
        except OSError as e:
            self.report(f"ERROR: {self.operation} {record.path}: {e.strerror or e}")
            return False

    def question(self, record: FileRecord) -> str:
        return f"Change access of {record.path} to {format_permissions(self.mode)}?"

    def declined_line(self, record: FileRecord) -> str:
        return f"KEPT ACCESS: {record.path}"

    def apply(self, record: FileRecord) -> str:
        before = self.current_mode(record)
        os.chmod(record.path, self.mode)
        return (
            f"CHANGED ACCESS: {record.path} "
            f"({format_permissions(before)} -> {format_permissions(self.mode)})"
        )
