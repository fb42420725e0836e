"""
Merge source catalogs into a destination catalog.

For every file of every source catalog, in order:
- destination path = destination root / path relative to the source root
- no file there: create parent folders, copy (metadata preserved) or move
- file there: ConflictResolver decides replace / keep / skip

A source catalog that resolves to the destination itself is skipped. Keep
and skip never delete the source, even in move mode.

Writes into the destination go through a temporary file in the same folder
followed by a rename, so an interrupted run never leaves a truncated file
under the final name.
"""

from __future__ import annotations

import errno
import os
import shutil
import uuid
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from cleaner.config.exceptions import CleanerError
from cleaner.core.models import FileRecord
from cleaner.core.walker import walk_catalog
from cleaner.transfer.conflict_resolver import ConflictResolver
from cleaner.transfer.models import (
    ConflictDecision,
    MovedFile,
    TransferAction,
    TransferMode,
    TransferResult,
)

logger = structlog.get_logger(__name__)

Reporter = Callable[[str], None]


class FileMover:
    """
    Transfer engine for copy and move.

    Attributes:
        resolver: Conflict resolver (shares the run's confirmation provider)
        report: Receives one line per file action
    """

    def __init__(
        self,
        resolver: ConflictResolver,
        reporter: Optional[Reporter] = None,
    ):
        """
        Initialize the mover.

        Args:
            resolver: Decides what happens when the destination exists
            reporter: Receives one line per action (default: print)
        """
        self.resolver = resolver
        self.report = reporter or print

    @property
    def automatic(self) -> bool:
        return not self.resolver.provider.interactive

    def transfer(
        self,
        sources: Iterable[str | Path],
        destination: str | Path,
        mode: TransferMode,
    ) -> TransferResult:
        """
        Merge every source catalog into ``destination``.

        Args:
            sources: Source catalogs, processed in order
            destination: Destination catalog root (created if missing)
            mode: Copy or move

        Returns:
            TransferResult with one MovedFile per source file

        Raises:
            CleanerError: If the destination catalog cannot be created
            InvalidResponseError: Unrecognized interactive answer
        """
        destination = Path(destination)
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CleanerError(f"cannot create destination catalog {destination}: {e}") from e

        destination_real = destination.resolve()
        result = TransferResult(mode=mode, destination=destination)

        logger.info("transfer_started", destination=str(destination), mode=mode.value)

        for source in sources:
            source = Path(source)
            if not source.is_dir():
                logger.debug("transfer_catalog_missing", catalog=str(source))
                continue

            if source.resolve() == destination_real:
                result.skipped_catalogs.append(source)
                self.report(f"SKIP: input catalog equals destination catalog: {source}")
                logger.info("transfer_catalog_is_destination", catalog=str(source))
                continue

            self._transfer_catalog(source, destination, destination_real, mode, result)

        logger.info(
            "transfer_completed",
            destination=str(destination),
            mode=mode.value,
            copied=result.count(TransferAction.copied),
            moved=result.count(TransferAction.moved),
            replaced=result.count(TransferAction.replaced),
            kept=result.count(TransferAction.kept),
            skipped=result.count(TransferAction.skipped),
            failed=result.count(TransferAction.failed),
        )
        return result

    def _transfer_catalog(
        self,
        source: Path,
        destination: Path,
        destination_real: Path,
        mode: TransferMode,
        result: TransferResult,
    ) -> None:
        # Materialized before any write so files created in a nested
        # destination are not walked again.
        records = list(walk_catalog(source))

        # Files under a destination nested inside the source are earlier
        # output; a source nested inside the destination is merged normally.
        if destination_real.is_relative_to(source.resolve()):
            outside = [
                r for r in records if not r.path.resolve().is_relative_to(destination_real)
            ]
            if len(outside) != len(records):
                nested = len(records) - len(outside)
                self.report(
                    f"SKIP: {nested} file(s) already inside destination catalog: {source}"
                )
                records = outside

        for record in records:
            dest_path = self.destination_path(record, destination)
            result.files.append(self.transfer_file(record.path, dest_path, mode))

    @staticmethod
    def destination_path(record: FileRecord, destination: Path) -> Path:
        """Destination root joined with the path relative to the source catalog."""
        return destination / record.relative_path

    def transfer_file(self, source: Path, dest: Path, mode: TransferMode) -> MovedFile:
        """
        Transfer one file, resolving a conflict if ``dest`` exists.

        Per-file I/O errors are reported and returned as ``failed``.
        """
        try:
            if dest.is_dir() and not dest.is_symlink():
                raise IsADirectoryError(errno.EISDIR, "destination is a directory", str(dest))

            if not os.path.lexists(dest):
                dest.parent.mkdir(parents=True, exist_ok=True)
                source_error = self._write(source, dest, mode)
                if source_error:
                    # Written to the destination, source still in place
                    self.report(f"COPIED: {source} -> {dest}")
                    self.report(f"SOURCE KEPT: {source}: {source_error}")
                    return MovedFile(
                        source_path=source,
                        destination_path=dest,
                        action=TransferAction.copied,
                        error=source_error,
                    )
                action = TransferAction.copied if mode is TransferMode.copy else TransferAction.moved
                label = "COPIED" if mode is TransferMode.copy else "MOVED"
                self.report(f"{label}: {source} -> {dest}")
                logger.debug(
                    "transfer_file_done",
                    source=str(source),
                    destination=str(dest),
                    action=action.value,
                )
                return MovedFile(source_path=source, destination_path=dest, action=action)

            decision = self.resolver.resolve(source, dest)
            return self._apply_decision(decision, source, dest, mode)

        except OSError as e:
            self.report(f"ERROR: {mode.value} {source}: {e.strerror or e}")
            logger.warning(
                "transfer_file_failed",
                source=str(source),
                destination=str(dest),
                error=str(e),
            )
            return MovedFile(
                source_path=source,
                destination_path=dest,
                action=TransferAction.failed,
                error=str(e),
            )

    def _apply_decision(
        self,
        decision: ConflictDecision,
        source: Path,
        dest: Path,
        mode: TransferMode,
    ) -> MovedFile:
        suffix = " (newer kept)" if self.automatic else ""

        if decision is ConflictDecision.replace:
            source_error = self._write(source, dest, mode)
            self.report(f"REPLACED{suffix}: {dest}")
            if source_error:
                self.report(f"SOURCE KEPT: {source}: {source_error}")
                return MovedFile(
                    source_path=source,
                    destination_path=dest,
                    action=TransferAction.replaced,
                    error=source_error,
                )
            action = TransferAction.replaced
        elif decision is ConflictDecision.keep:
            self.report(f"KEPT{suffix}: {dest}")
            action = TransferAction.kept
        else:
            self.report(f"SKIPPED: {source}")
            action = TransferAction.skipped

        logger.debug(
            "transfer_conflict_applied",
            source=str(source),
            destination=str(dest),
            decision=decision.name,
        )
        return MovedFile(source_path=source, destination_path=dest, action=action)

    def _write(self, source: Path, dest: Path, mode: TransferMode) -> Optional[str]:
        """
        Copy or move ``source`` onto ``dest``, overwriting it if present.

        Returns:
            None, or the reason the source of a cross-filesystem move could
            not be removed after ``dest`` was written

        Raises:
            OSError: If ``dest`` could not be written
        """
        if mode is TransferMode.move:
            try:
                os.replace(source, dest)
                return None
            except OSError as e:
                if e.errno != errno.EXDEV:
                    raise
            # Different filesystem: copy then delete the source
            self._atomic_copy(source, dest)
            try:
                source.unlink()
            except OSError as e:
                logger.warning(
                    "transfer_source_not_removed",
                    source=str(source),
                    destination=str(dest),
                    error=str(e),
                )
                return e.strerror or str(e)
            return None

        self._atomic_copy(source, dest)
        return None

    @staticmethod
    def _atomic_copy(source: Path, dest: Path) -> None:
        """
        Copy via a temporary file in the destination folder, then rename.

        Raises:
            OSError: If the copy fails or the sizes differ afterwards
        """
        tmp_dest = dest.parent / f".{dest.name}.{uuid.uuid4().hex[:8]}.tmp"

        try:
            shutil.copy2(source, tmp_dest)

            source_size = source.stat().st_size
            tmp_size = tmp_dest.stat().st_size
            if source_size != tmp_size:
                raise OSError(
                    errno.EIO,
                    f"size mismatch after copy: source={source_size} tmp={tmp_size}",
                    str(tmp_dest),
                )

            os.replace(tmp_dest, dest)
        except BaseException:
            if os.path.lexists(tmp_dest):
                tmp_dest.unlink()
            raise
