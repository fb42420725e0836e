"""
Shared pytest fixtures for catalog-cleaner.

- Logging configured per test (stderr, WARNING) so log lines never mix with
  the action report on stdout
- Scripted terminal provider feeding canned operator answers
- Helpers to build catalogs with controlled content and mtimes
"""

import io
import os
import sys
from pathlib import Path

import pytest

# Add repo root to PYTHONPATH (once for all tests)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from cleaner.config.logging import configure_logging  # noqa: E402
from cleaner.core.prompts import TerminalProvider  # noqa: E402


@pytest.fixture(autouse=True)
def quiet_logging():
    """Re-bind logging to the current stderr before each test."""
    configure_logging(level="WARNING", json_format=False)
    yield


@pytest.fixture
def scripted_provider():
    """
    Factory for a TerminalProvider answering from a script.

    Usage:
        provider = scripted_provider("y", "", "k")
        provider._output.getvalue()  # questions asked
    """

    def _make(*answers: str) -> TerminalProvider:
        text = "".join(f"{a}\n" for a in answers)
        return TerminalProvider(input_stream=io.StringIO(text), output_stream=io.StringIO())

    return _make


@pytest.fixture
def report_lines():
    """List collecting report lines; pass ``report_lines.append`` as reporter."""
    return []


def make_file(path: Path, content: bytes = b"", mtime: int | None = None) -> Path:
    """Create ``path`` (and parents) with ``content`` and an optional mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make():
    """Fixture access to ``make_file``."""
    return make_file
