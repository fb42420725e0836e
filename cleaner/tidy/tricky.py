"""
Replace tricky characters in filenames.

Each tricky character of the basename is replaced by the substitute; the
file stays in its folder. An existing file under the new name is never
overwritten.
"""

from __future__ import annotations

import os
from typing import Optional

import structlog

from cleaner.core.models import FileRecord
from cleaner.core.prompts import ConfirmationProvider
from cleaner.tidy.base import ConfirmedTidier, Reporter

logger = structlog.get_logger(__name__)


class TrickyNameFixer(ConfirmedTidier):
    operation = "tricky"

    def __init__(
        self,
        tricky_characters: str,
        substitute: str,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        super().__init__(provider, reporter)
        self.tricky_characters = set(tricky_characters)
        self.substitute = substitute

    def sanitize(self, name: str) -> str:
        """
        Examples:
            >>> fixer.sanitize('report:v2?.txt')
            'report_v2_.txt'
        """
        return "".join(self.substitute if c in self.tricky_characters else c for c in name)

    def is_candidate(self, record: FileRecord) -> bool:
        return any(c in self.tricky_characters for c in record.path.name)

    def question(self, record: FileRecord) -> str:
        return f"Rename {record.path} to {self.sanitize(record.path.name)}?"

    def declined_line(self, record: FileRecord) -> str:
        return f"KEPT NAME: {record.path}"

    def apply(self, record: FileRecord) -> Optional[str]:
        target = record.path.with_name(self.sanitize(record.path.name))

        if os.path.lexists(target):
            self.report(f"SKIPPED RENAME (target exists): {record.path} -> {target}")
            logger.info("tricky_target_exists", source=str(record.path), target=str(target))
            return None

        os.rename(record.path, target)
        return f"RENAMED: {record.path} -> {target}"
