"""
Shared infrastructure for all operations.

Modules:
- models: FileRecord
- walker: Catalog enumeration
- prompts: Confirmation providers (terminal / automatic)
"""

from cleaner.core.models import FileRecord
from cleaner.core.prompts import (
    AutomaticProvider,
    ConfirmationProvider,
    TerminalProvider,
    build_provider,
)
from cleaner.core.walker import walk_catalog, walk_catalogs

__all__ = [
    "AutomaticProvider",
    "ConfirmationProvider",
    "FileRecord",
    "TerminalProvider",
    "build_provider",
    "walk_catalog",
    "walk_catalogs",
]
