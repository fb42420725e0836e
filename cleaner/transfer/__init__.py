"""
Catalog-to-catalog transfer (copy / move) with conflict resolution.

Modules:
- conflict_resolver: Replace / keep / skip decision for an existing destination
- file_mover: Merges source catalogs into the destination catalog
- models: Pydantic data models
"""

from cleaner.transfer.models import (
    ConflictDecision,
    MovedFile,
    TransferAction,
    TransferMode,
    TransferResult,
)

__all__ = [
    "ConflictDecision",
    "MovedFile",
    "TransferAction",
    "TransferMode",
    "TransferResult",
]
