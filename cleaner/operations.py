"""
Operation runners.

Each runner takes the run settings, the confirmation provider and the
reporter, and drives the engines of one operation. ``run_operations``
executes the selected operations in their fixed order.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from cleaner.config.cleanup_config import Operation, RunSettings
from cleaner.core.prompts import ConfirmationProvider
from cleaner.dedup.deleter import DeletionResult, DuplicateDeleter
from cleaner.dedup.models import ScanConfig
from cleaner.dedup.priority_engine import PriorityEngine
from cleaner.dedup.scanner import DedupScanner
from cleaner.tidy import (
    AccessNormalizer,
    EmptyFileRemover,
    InteractiveRenamer,
    SameNameRemover,
    TemporaryFileRemover,
    TrickyNameFixer,
)
from cleaner.transfer.conflict_resolver import ConflictResolver
from cleaner.transfer.file_mover import FileMover
from cleaner.transfer.models import TransferMode

logger = structlog.get_logger(__name__)

Reporter = Callable[[str], None]


def run_duplicates(
    settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter
) -> DeletionResult:
    """Scan all catalogs, keep the oldest file of each duplicate set, delete the rest."""
    scanner = DedupScanner(
        ScanConfig(catalogs=settings.catalogs, chunk_size=settings.config.hash_chunk_size)
    )
    scan_result = scanner.scan()

    for error in scan_result.errors:
        reporter(f"ERROR: hash {error}")

    if scan_result.total_scanned == 0:
        reporter("No files found.")
        return DeletionResult()

    if not scan_result.groups:
        reporter("No duplicates found.")
        return DeletionResult()

    engine = PriorityEngine()
    groups = [engine.select_keeper(group) for group in scan_result.groups]

    return DuplicateDeleter(provider, reporter).delete_duplicates(groups)


def run_empty(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    return EmptyFileRemover(provider, reporter).run(settings.catalogs)


def run_temporary(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    remover = TemporaryFileRemover(settings.config.temporary_patterns, provider, reporter)
    return remover.run(settings.catalogs)


def run_same_name(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    return SameNameRemover(provider, reporter).run(settings.catalogs)


def run_access(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    normalizer = AccessNormalizer(settings.config.permission_bits, provider, reporter)
    return normalizer.run(settings.catalogs)


def run_tricky(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    fixer = TrickyNameFixer(
        settings.config.tricky_characters,
        settings.config.tricky_substitute,
        provider,
        reporter,
    )
    return fixer.run(settings.catalogs)


def _run_transfer(
    mode: TransferMode,
    settings: RunSettings,
    provider: ConfirmationProvider,
    reporter: Reporter,
):
    mover = FileMover(ConflictResolver(provider, reporter), reporter)
    return mover.transfer(settings.catalogs, settings.destination, mode)


def run_move(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    return _run_transfer(TransferMode.move, settings, provider, reporter)


def run_copy(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    return _run_transfer(TransferMode.copy, settings, provider, reporter)


def run_rename(settings: RunSettings, provider: ConfirmationProvider, reporter: Reporter):
    return InteractiveRenamer(provider, reporter).run(settings.catalogs)


OPERATION_RUNNERS: dict[Operation, Callable[..., Any]] = {
    Operation.duplicates: run_duplicates,
    Operation.empty: run_empty,
    Operation.temporary: run_temporary,
    Operation.same_name: run_same_name,
    Operation.access: run_access,
    Operation.tricky: run_tricky,
    Operation.move: run_move,
    Operation.copy: run_copy,
    Operation.rename: run_rename,
}


def run_operations(
    settings: RunSettings,
    provider: ConfirmationProvider,
    reporter: Reporter = print,
) -> dict[Operation, Any]:
    """
    Run every selected operation in the fixed order.

    Returns:
        operation -> result object of that operation
    """
    results: dict[Operation, Any] = {}
    for operation in settings.ordered_operations():
        logger.info("operation_started", operation=operation.value)
        results[operation] = OPERATION_RUNNERS[operation](settings, provider, reporter)
    return results
