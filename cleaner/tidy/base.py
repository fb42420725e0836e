"""
Shared loop for the per-file tidy operations.

Subclasses pick the candidate files and handle each one. ConfirmedTidier
covers the common case of one fixed action per file: every candidate is
approved individually (automatic mode approves everything) and every
outcome is reported on one line. An OSError on one file is reported and
counted without stopping the loop.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from cleaner.core.models import FileRecord
from cleaner.core.prompts import ConfirmationProvider
from cleaner.core.walker import walk_catalogs

logger = structlog.get_logger(__name__)

Reporter = Callable[[str], None]


class TidyResult:
    """Result of one tidy operation."""

    def __init__(self, operation: str):
        self.operation = operation
        self.candidates: int = 0
        self.applied: int = 0
        self.declined: int = 0
        self.errors: int = 0
        self.applied_files: list[str] = []
        self.error_details: list[tuple[str, str]] = []  # (file_path, error)


class FileTidier(ABC):
    """Base class: walk, filter, handle each candidate."""

    operation: str = ""

    def __init__(
        self,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        self.provider = provider
        self.report = reporter or print

    def run(self, catalogs: Iterable[str | Path]) -> TidyResult:
        """Apply the operation to every candidate under ``catalogs``."""
        result = TidyResult(self.operation)
        records = list(walk_catalogs(catalogs))

        logger.info("tidy_started", operation=self.operation, files=len(records))

        for record in records:
            if not self.is_candidate(record):
                continue
            result.candidates += 1
            self.handle(record, result)

        logger.info(
            "tidy_completed",
            operation=self.operation,
            candidates=result.candidates,
            applied=result.applied,
            declined=result.declined,
            errors=result.errors,
        )
        return result

    @abstractmethod
    def is_candidate(self, record: FileRecord) -> bool:
        """Does the operation concern this file?"""

    @abstractmethod
    def handle(self, record: FileRecord, result: TidyResult) -> None:
        """Decide on, apply and report one candidate."""

    def record_error(self, record: FileRecord, error: OSError, result: TidyResult) -> None:
        result.errors += 1
        result.error_details.append((str(record.path), str(error)))
        self.report(f"ERROR: {self.operation} {record.path}: {error.strerror or error}")
        logger.warning(
            "tidy_file_failed",
            operation=self.operation,
            file_path=str(record.path),
            error=str(error),
        )


class ConfirmedTidier(FileTidier):
    """Tidier applying one fixed action per file after a yes/no approval."""

    def handle(self, record: FileRecord, result: TidyResult) -> None:
        if not self.provider.approve(self.question(record)):
            result.declined += 1
            self.report(self.declined_line(record))
            return

        try:
            line = self.apply(record)
        except OSError as e:
            self.record_error(record, e, result)
            return

        if line is None:
            return
        result.applied += 1
        result.applied_files.append(str(record.path))
        self.report(line)

    @abstractmethod
    def question(self, record: FileRecord) -> str:
        """Interactive confirmation question for this file."""

    @abstractmethod
    def declined_line(self, record: FileRecord) -> str:
        """Report line when the operator declines."""

    @abstractmethod
    def apply(self, record: FileRecord) -> Optional[str]:
        """
        Perform the action.

        Returns:
            Report line, or None if the action was not performed (the
            subclass has already reported why)

        Raises:
            OSError: Reported as a per-file error by ``handle``
        """
