"""
Catalog enumeration.

Walks a directory tree and yields a FileRecord for every regular file inside
it. Symbolic links are never followed nor reported, whether they point to
files or to directories. Directories and files are visited in sorted order
so that two runs over an unchanged tree see the same sequence.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable, Iterator

import structlog

from cleaner.core.models import FileRecord

logger = structlog.get_logger(__name__)


def _on_walk_error(error: OSError) -> None:
    logger.warning(
        "walk_directory_unreadable",
        directory=error.filename,
        error=error.strerror or str(error),
    )


def walk_catalog(root: str | Path) -> Iterator[FileRecord]:
    """
    Yield every regular file under ``root``.

    A root that does not exist or is not a directory yields nothing, so that
    a mixed list of catalogs can be processed in one batch.

    Args:
        root: Catalog root directory

    Yields:
        FileRecord with absolute path, size, mtime and catalog
    """
    catalog = Path(os.path.abspath(root))

    if not catalog.is_dir():
        logger.debug("walk_catalog_skipped", catalog=str(catalog))
        return

    for dirpath, dirnames, filenames in os.walk(catalog, onerror=_on_walk_error):
        dirnames.sort()
        current = Path(dirpath)

        for filename in sorted(filenames):
            file_path = current / filename
            try:
                st = os.lstat(file_path)
            except OSError as e:
                logger.warning("walk_stat_failed", file_path=str(file_path), error=str(e))
                continue

            if not stat.S_ISREG(st.st_mode):
                continue

            yield FileRecord(
                path=file_path,
                size_bytes=st.st_size,
                mtime=int(st.st_mtime),
                catalog=catalog,
            )


def walk_catalogs(roots: Iterable[str | Path]) -> Iterator[FileRecord]:
    """
    Walk several catalogs in the given order.

    A file reachable from more than one catalog (repeated or nested catalog
    arguments, symlinked catalog roots) is yielded once, under the first
    catalog that reaches it.
    """
    seen: set[str] = set()
    for root in roots:
        for record in walk_catalog(root):
            real = os.path.realpath(record.path)
            if real in seen:
                logger.debug("walk_file_already_seen", file_path=str(record.path))
                continue
            seen.add(real)
            yield record
