"""
Confirmation providers.

Every operation that may need an operator decision calls a provider instead
of touching the terminal directly. The provider is chosen once at startup:

- AutomaticProvider (``--default``): returns the computed default, no I/O.
- TerminalProvider: asks on the controlling terminal (``/dev/tty``), since
  stdin/stdout may be pipes carrying file lists or the action report.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, TextIO

import structlog

from cleaner.config.exceptions import InvalidResponseError, TerminalUnavailableError

logger = structlog.get_logger(__name__)

TTY_PATH = "/dev/tty"

YES_ANSWERS = {"y", "yes"}


class ConfirmationProvider(ABC):
    """Source of operator decisions."""

    interactive: bool = False

    def close(self) -> None:
        """Release the terminal, if one was opened."""

    @abstractmethod
    def confirm(self, question: str, default: bool = False) -> bool:
        """Yes/no question. Any answer other than yes declines."""

    @abstractmethod
    def approve(self, question: str) -> bool:
        """
        Should the suggested action go ahead?

        Automatic mode always approves; interactive mode asks, default no.
        """

    @abstractmethod
    def choose(self, question: str, choices: Iterable[str], default: str) -> str:
        """
        Single-letter choice.

        Returns:
            The chosen letter, lowercased

        Raises:
            InvalidResponseError: If the answer is not one of ``choices``
        """

    @abstractmethod
    def ask(self, question: str, default: str = "") -> str:
        """Free-text answer."""


class AutomaticProvider(ConfirmationProvider):
    """Non-interactive provider: every decision is the computed default."""

    interactive = False

    def confirm(self, question: str, default: bool = False) -> bool:
        return default

    def approve(self, question: str) -> bool:
        return True

    def choose(self, question: str, choices: Iterable[str], default: str) -> str:
        return default.lower()

    def ask(self, question: str, default: str = "") -> str:
        return default


class TerminalProvider(ConfirmationProvider):
    """
    Interactive provider reading one line per question.

    The terminal is opened lazily on the first question so that runs that
    never need a decision work without one. Tests may inject explicit
    streams instead.
    """

    interactive = True

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        tty_path: str = TTY_PATH,
    ):
        """
        Initialize provider.

        Args:
            input_stream: Where answers are read (default: the terminal)
            output_stream: Where questions are written (default: the terminal)
            tty_path: Terminal device to open when no stream is given
        """
        self._input = input_stream
        self._output = output_stream
        self.tty_path = tty_path
        self._tty: Optional[TextIO] = None

    def close(self) -> None:
        if self._tty is not None:
            self._tty.close()
            self._tty = None

    def confirm(self, question: str, default: bool = False) -> bool:
        hint = "[Y/n]" if default else "[y/N]"
        answer = self._read_answer(f"{question} {hint} ").strip().lower()
        if not answer:
            return default
        return answer in YES_ANSWERS

    def approve(self, question: str) -> bool:
        return self.confirm(question, default=False)

    def choose(self, question: str, choices: Iterable[str], default: str) -> str:
        allowed = {c.lower() for c in choices}
        answer = self._read_answer(question).strip().lower()
        if not answer:
            return default.lower()
        if answer not in allowed:
            logger.error("prompt_invalid_response", response=answer, allowed=sorted(allowed))
            raise InvalidResponseError(answer)
        return answer

    def ask(self, question: str, default: str = "") -> str:
        answer = self._read_answer(question).strip()
        return answer or default

    def _read_answer(self, prompt: str) -> str:
        reader, writer = self._streams()
        writer.write(prompt)
        writer.flush()

        line = reader.readline()
        if not line:
            raise TerminalUnavailableError("end of input while waiting for an answer")
        return line.rstrip("\r\n")

    def _streams(self) -> tuple[TextIO, TextIO]:
        if self._input is not None and self._output is not None:
            return self._input, self._output

        if self._tty is None:
            try:
                self._tty = open(self.tty_path, "r+", encoding="utf-8")
            except OSError as e:
                logger.error("prompt_terminal_unavailable", tty_path=self.tty_path, error=str(e))
                raise TerminalUnavailableError(
                    f"cannot open terminal {self.tty_path}: {e}"
                ) from e

        return self._input or self._tty, self._output or self._tty


def build_provider(automatic: bool) -> ConfirmationProvider:
    """Select the provider for this run."""
    if automatic:
        return AutomaticProvider()
    return TerminalProvider()
