"""
Conflict resolution for transfers.

Default policy: the newer file wins. If the source is strictly newer than the
existing destination the default is replace, otherwise keep. An unreadable
timestamp counts as the epoch.

In interactive mode the operator may accept the default (empty answer) or
answer r / k / s. Any other answer aborts the whole run.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

import structlog

from cleaner.core.prompts import ConfirmationProvider
from cleaner.transfer.models import ConflictDecision

logger = structlog.get_logger(__name__)

Reporter = Callable[[str], None]

CHOICES = tuple(d.value for d in ConflictDecision)


def read_mtime(path: Path) -> int:
    """Whole-second mtime, 0 when it cannot be read."""
    try:
        return int(os.stat(path).st_mtime)
    except OSError as e:
        logger.debug("conflict_mtime_unreadable", path=str(path), error=str(e))
        return 0


class ConflictResolver:
    """Decide between replace, keep and skip for one conflicting file."""

    def __init__(
        self,
        provider: ConfirmationProvider,
        reporter: Optional[Reporter] = None,
    ):
        """
        Initialize resolver.

        Args:
            provider: Source of the operator decision
            reporter: Receives the conflict description (default: print)
        """
        self.provider = provider
        self.report = reporter or print

    def default_decision(self, source: Path, destination: Path) -> ConflictDecision:
        """Replace only if the source is strictly newer."""
        if read_mtime(source) > read_mtime(destination):
            return ConflictDecision.replace
        return ConflictDecision.keep

    def resolve(self, source: Path, destination: Path) -> ConflictDecision:
        """
        Decide what to do with ``source`` given that ``destination`` exists.

        Raises:
            InvalidResponseError: Unrecognized interactive answer
            TerminalUnavailableError: No terminal to ask on
        """
        default = self.default_decision(source, destination)

        if not self.provider.interactive:
            return default

        self.report("CONFLICT: destination already exists")
        self.report(f"  SRC: {source}")
        self.report(f"  DST: {destination}")
        if default is ConflictDecision.replace:
            self.report("  Suggested: keep newer -> REPLACE destination")
        else:
            self.report("  Suggested: keep newer -> KEEP destination")

        answer = self.provider.choose(
            f"Choose [r]eplace / [k]eep / [s]kip (default: {default.value}): ",
            CHOICES,
            default=default.value,
        )
        decision = ConflictDecision(answer)

        logger.debug(
            "conflict_resolved",
            source=str(source),
            destination=str(destination),
            default=default.name,
            decision=decision.name,
        )
        return decision
