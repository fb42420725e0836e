"""
Batch deletion of duplicate files.

Features:
- Automatic mode: every non-retained file is deleted
- Interactive mode: one yes/no confirmation per duplicate group (default no)
- Per-file failures are reported and counted, the run continues
- One report line per action
"""

from __future__ import annotations

from typing import Callable, Optional

import structlog

from cleaner.core.prompts import ConfirmationProvider
from cleaner.dedup.models import DedupGroup, FileEntry

logger = structlog.get_logger(__name__)

Reporter = Callable[[str], None]


class DeletionResult:
    """Result of batch deletion."""

    def __init__(self):
        self.total_to_delete: int = 0
        self.deleted: int = 0
        self.skipped: int = 0
        self.errors: int = 0
        self.groups_declined: int = 0
        self.space_reclaimed_bytes: int = 0
        self.skip_reasons: list[tuple[str, str]] = []  # (file_path, reason)
        self.error_details: list[tuple[str, str]] = []  # (file_path, error)
        self.deleted_files: list[str] = []


class DuplicateDeleter:
    """
    Delete the non-retained members of duplicate groups.

    Safety checks (per file):
    1. File still exists
    2. Keeper still exists
    """

    def __init__(
        self,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        """
        Initialize deleter.

        Args:
            provider: Source of the per-group confirmation
            reporter: Receives one line per action (default: print)
        """
        self.provider = provider
        self.report = reporter or print

    def delete_duplicates(self, groups: list[DedupGroup]) -> DeletionResult:
        """
        Handle every group; keepers must already be selected.

        Args:
            groups: Duplicate groups with keeper/to_delete set

        Returns:
            DeletionResult with counts and details
        """
        result = DeletionResult()
        result.total_to_delete = sum(len(g.to_delete) for g in groups)

        logger.info(
            "dedup_deletion_started",
            total_to_delete=result.total_to_delete,
            groups=len(groups),
            interactive=self.provider.interactive,
        )

        for group in groups:
            self.delete_group(group, result)

        logger.info(
            "dedup_deletion_completed",
            deleted=result.deleted,
            skipped=result.skipped,
            errors=result.errors,
            groups_declined=result.groups_declined,
        )

        return result

    def delete_group(self, group: DedupGroup, result: DeletionResult) -> None:
        """Confirm (interactive mode only) and delete one group."""
        if group.keeper is None:
            raise ValueError(f"Group {group.group_id} has no keeper selected")

        if self.provider.interactive:
            self.report("DUPLICATES FOUND (same content):")
            self.report(f"  Suggested keep oldest: {group.keeper.file_path}")
            for entry in group.to_delete:
                self.report(f"  Duplicate: {entry.file_path}")

            if not self.provider.approve("Delete duplicates and keep oldest?"):
                result.groups_declined += 1
                result.skipped += len(group.to_delete)
                self.report("SKIPPED DUPLICATE SET.")
                return

        for entry in group.to_delete:
            self._delete_entry(entry, group, result)

        self.report(f"KEPT OLDEST: {group.keeper.file_path}")

    def _delete_entry(self, entry: FileEntry, group: DedupGroup, result: DeletionResult) -> None:
        safe, reason = self._safety_check(entry, group)
        if not safe:
            result.skipped += 1
            result.skip_reasons.append((str(entry.file_path), reason))
            self.report(f"SKIPPED DUPLICATE: {entry.file_path} ({reason})")
            logger.debug("dedup_file_skipped", file_path=str(entry.file_path), reason=reason)
            return

        try:
            entry.file_path.unlink()
        except OSError as e:
            result.errors += 1
            result.error_details.append((str(entry.file_path), str(e)))
            self.report(f"ERROR: delete {entry.file_path}: {e.strerror or e}")
            logger.warning(
                "dedup_delete_failed",
                file_path=str(entry.file_path),
                error=str(e),
            )
            return

        result.deleted += 1
        result.space_reclaimed_bytes += entry.size_bytes
        result.deleted_files.append(str(entry.file_path))
        self.report(f"DELETED DUPLICATE: {entry.file_path}")
        logger.info(
            "dedup_file_deleted",
            file_path=str(entry.file_path),
            size_bytes=entry.size_bytes,
        )

    def _safety_check(self, entry: FileEntry, group: DedupGroup) -> tuple[bool, str]:
        """
        Run safety checks before deleting a file.

        Returns:
            (is_safe, reason_if_not_safe)
        """
        if not entry.file_path.exists():
            return False, "file no longer exists"

        if group.keeper is not None and not group.keeper.file_path.exists():
            return False, "keeper file no longer exists"

        return True, ""
