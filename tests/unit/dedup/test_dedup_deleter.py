"""
Unit tests for DuplicateDeleter.

Tests:
- Automatic mode deletes every non-retained file
- Interactive mode: one confirmation per group, default no
- Safety checks (file / keeper vanished)
- Per-file failures do not abort the run
"""

import hashlib
from pathlib import Path
from unittest.mock import patch

import pytest

from cleaner.core.models import FileRecord
from cleaner.core.prompts import AutomaticProvider
from cleaner.dedup.deleter import DuplicateDeleter
from cleaner.dedup.models import DedupGroup, FileEntry
from cleaner.dedup.priority_engine import PriorityEngine


def _make_group(
    tmp_path: Path,
    names: list[str],
    content: bytes = b"duplicate content",
    group_id: int = 1,
) -> DedupGroup:
    """Real files, first name oldest, keeper selected."""
    sha256 = hashlib.sha256(content).hexdigest()
    entries = []
    for i, name in enumerate(names):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        entries.append(
            FileEntry(
                record=FileRecord(
                    path=path, size_bytes=len(content), mtime=1000 + i, catalog=tmp_path
                ),
                sha256_hash=sha256,
            )
        )
    group = DedupGroup(group_id=group_id, sha256_hash=sha256, size_bytes=len(content), files=entries)
    return PriorityEngine().select_keeper(group)


class TestAutomaticMode:
    """--default behaviour."""

    def test_deletes_all_but_keeper(self, tmp_path, report_lines):
        group = _make_group(tmp_path, ["keep.txt", "dup1.txt", "dup2.txt"])
        deleter = DuplicateDeleter(AutomaticProvider(), report_lines.append)

        result = deleter.delete_duplicates([group])

        assert (tmp_path / "keep.txt").exists()
        assert not (tmp_path / "dup1.txt").exists()
        assert not (tmp_path / "dup2.txt").exists()
        assert result.deleted == 2
        assert result.total_to_delete == 2
        assert result.space_reclaimed_bytes == 2 * len(b"duplicate content")
        assert report_lines == [
            f"DELETED DUPLICATE: {tmp_path / 'dup1.txt'}",
            f"DELETED DUPLICATE: {tmp_path / 'dup2.txt'}",
            f"KEPT OLDEST: {tmp_path / 'keep.txt'}",
        ]

    def test_delete_failure_does_not_abort(self, tmp_path, report_lines):
        group_a = _make_group(tmp_path / "a", ["keep.txt", "dup.txt"], b"AAA")
        group_b = _make_group(tmp_path / "b", ["keep.txt", "dup.txt"], b"BBB", group_id=2)
        failing = group_a.to_delete[0].file_path
        real_unlink = Path.unlink

        def fake_unlink(self, *args, **kwargs):
            if self == failing:
                raise PermissionError(13, "Permission denied", str(self))
            return real_unlink(self, *args, **kwargs)

        deleter = DuplicateDeleter(AutomaticProvider(), report_lines.append)
        with patch.object(Path, "unlink", fake_unlink):
            result = deleter.delete_duplicates([group_a, group_b])

        assert failing.exists()
        assert not (tmp_path / "b" / "dup.txt").exists()
        assert result.errors == 1
        assert result.deleted == 1
        assert result.error_details[0][0] == str(failing)
        assert f"ERROR: delete {failing}: Permission denied" in report_lines

    def test_missing_keeper_rejected(self, tmp_path):
        group = DedupGroup(group_id=1, sha256_hash="x", size_bytes=0)
        deleter = DuplicateDeleter(AutomaticProvider(), lambda line: None)

        with pytest.raises(ValueError):
            deleter.delete_duplicates([group])


class TestInteractiveMode:
    """One confirmation per duplicate set."""

    def test_confirmed_set_deleted(self, tmp_path, scripted_provider, report_lines):
        group = _make_group(tmp_path, ["keep.txt", "dup.txt"])
        provider = scripted_provider("y")

        result = DuplicateDeleter(provider, report_lines.append).delete_duplicates([group])

        assert result.deleted == 1
        assert not (tmp_path / "dup.txt").exists()
        assert report_lines[:3] == [
            "DUPLICATES FOUND (same content):",
            f"  Suggested keep oldest: {tmp_path / 'keep.txt'}",
            f"  Duplicate: {tmp_path / 'dup.txt'}",
        ]
        assert "Delete duplicates and keep oldest? [y/N] " in provider._output.getvalue()

    @pytest.mark.parametrize("answer", ["", "n", "no", "whatever"])
    def test_declined_set_untouched(self, tmp_path, scripted_provider, report_lines, answer):
        group = _make_group(tmp_path, ["keep.txt", "dup1.txt", "dup2.txt"])

        result = DuplicateDeleter(scripted_provider(answer), report_lines.append).delete_duplicates(
            [group]
        )

        assert result.deleted == 0
        assert result.groups_declined == 1
        assert result.skipped == 2
        assert (tmp_path / "dup1.txt").exists()
        assert (tmp_path / "dup2.txt").exists()
        assert report_lines[-1] == "SKIPPED DUPLICATE SET."

    def test_one_question_per_set(self, tmp_path, scripted_provider, report_lines):
        group_a = _make_group(tmp_path / "a", ["k.txt", "d1.txt", "d2.txt"], b"AAA")
        group_b = _make_group(tmp_path / "b", ["k.txt", "d1.txt"], b"BBB", group_id=2)
        provider = scripted_provider("n", "y")

        result = DuplicateDeleter(provider, report_lines.append).delete_duplicates(
            [group_a, group_b]
        )

        assert provider._output.getvalue().count("[y/N]") == 2
        assert result.deleted == 1
        assert (tmp_path / "a" / "d1.txt").exists()
        assert not (tmp_path / "b" / "d1.txt").exists()


class TestSafetyChecks:
    """Files changed since the scan."""

    def test_vanished_file_skipped(self, tmp_path, report_lines):
        group = _make_group(tmp_path, ["keep.txt", "dup.txt"])
        group.to_delete[0].file_path.unlink()

        result = DuplicateDeleter(AutomaticProvider(), report_lines.append).delete_duplicates([group])

        assert result.skipped == 1
        assert result.deleted == 0
        assert "no longer exists" in result.skip_reasons[0][1]

    def test_vanished_keeper_protects_copies(self, tmp_path, report_lines):
        group = _make_group(tmp_path, ["keep.txt", "dup.txt"])
        group.keeper.file_path.unlink()

        result = DuplicateDeleter(AutomaticProvider(), report_lines.append).delete_duplicates([group])

        assert (tmp_path / "dup.txt").exists()
        assert result.skipped == 1
        assert "keeper" in result.skip_reasons[0][1]
