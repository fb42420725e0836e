"""
Single-pass tidy operations over the input catalogs.

Modules:
- base: Shared walk / confirm / report loop
- empty: Remove zero-byte files
- temporary: Remove files matching temporary patterns
- same_name: Keep only the newest of files sharing a basename
- access: Normalize permission bits
- tricky: Replace tricky characters in filenames
- renamer: Interactive per-file rename
"""

from cleaner.tidy.access import AccessNormalizer
from cleaner.tidy.base import TidyResult
from cleaner.tidy.empty import EmptyFileRemover
from cleaner.tidy.renamer import InteractiveRenamer
from cleaner.tidy.same_name import SameNameRemover
from cleaner.tidy.temporary import TemporaryFileRemover
from cleaner.tidy.tricky import TrickyNameFixer

__all__ = [
    "AccessNormalizer",
    "EmptyFileRemover",
    "InteractiveRenamer",
    "SameNameRemover",
    "TemporaryFileRemover",
    "TidyResult",
    "TrickyNameFixer",
]
