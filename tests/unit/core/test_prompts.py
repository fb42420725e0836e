"""
Unit tests for confirmation providers.

Tests:
- AutomaticProvider returns defaults without I/O
- TerminalProvider answer parsing (yes/no, choices, free text)
- Invalid choice is fatal
- Missing terminal / end of input is fatal
"""

import io

import pytest

from cleaner.config.exceptions import InvalidResponseError, TerminalUnavailableError
from cleaner.core.prompts import AutomaticProvider, TerminalProvider, build_provider


class TestAutomaticProvider:
    """Automatic mode never asks."""

    def test_defaults(self):
        provider = AutomaticProvider()

        assert provider.interactive is False
        assert provider.approve("Delete?") is True
        assert provider.confirm("Sure?") is False
        assert provider.confirm("Sure?", default=True) is True
        assert provider.choose("Pick", "rks", default="K") == "k"
        assert provider.ask("Name?", default="same") == "same"


class TestTerminalConfirm:
    """Yes/no questions."""

    @pytest.mark.parametrize(
        "answer,expected",
        [("y", True), ("Y", True), ("yes", True), ("n", False), ("", False), ("maybe", False)],
    )
    def test_confirm_default_no(self, scripted_provider, answer, expected):
        provider = scripted_provider(answer)
        assert provider.confirm("Delete?") is expected

    def test_confirm_empty_uses_default_yes(self, scripted_provider):
        provider = scripted_provider("")
        assert provider.confirm("Delete?", default=True) is True

    def test_approve_defaults_to_no(self, scripted_provider):
        provider = scripted_provider("")
        assert provider.approve("Delete?") is False

    def test_question_written_to_output(self, scripted_provider):
        provider = scripted_provider("y")
        provider.confirm("Delete duplicates and keep oldest?")

        assert provider._output.getvalue() == "Delete duplicates and keep oldest? [y/N] "


class TestTerminalChoose:
    """Single-letter choices."""

    def test_empty_answer_accepts_default(self, scripted_provider):
        provider = scripted_provider("")
        assert provider.choose("Choose: ", "rks", default="k") == "k"

    @pytest.mark.parametrize("answer,expected", [("r", "r"), ("R", "r"), (" s ", "s"), ("K", "k")])
    def test_recognized_answers(self, scripted_provider, answer, expected):
        provider = scripted_provider(answer)
        assert provider.choose("Choose: ", "rks", default="k") == expected

    def test_unrecognized_answer_is_fatal(self, scripted_provider):
        provider = scripted_provider("x")

        with pytest.raises(InvalidResponseError) as exc:
            provider.choose("Choose: ", "rks", default="k")

        assert exc.value.response == "x"

    def test_end_of_input_is_fatal(self):
        provider = TerminalProvider(input_stream=io.StringIO(""), output_stream=io.StringIO())

        with pytest.raises(TerminalUnavailableError):
            provider.choose("Choose: ", "rks", default="k")


class TestTerminalAsk:
    """Free-text answers."""

    def test_ask_returns_stripped_answer(self, scripted_provider):
        provider = scripted_provider("  new-name.txt  ")
        assert provider.ask("Name? ") == "new-name.txt"

    def test_ask_empty_returns_default(self, scripted_provider):
        provider = scripted_provider("")
        assert provider.ask("Name? ", default="old.txt") == "old.txt"


class TestTerminalDevice:
    """Opening the controlling terminal."""

    def test_missing_terminal_is_fatal(self, tmp_path):
        provider = TerminalProvider(tty_path=str(tmp_path / "no-such-tty"))

        with pytest.raises(TerminalUnavailableError):
            provider.confirm("Delete?")

    def test_terminal_opened_lazily_and_closed(self, tmp_path):
        fake_tty = tmp_path / "tty"
        fake_tty.write_text("")
        provider = TerminalProvider(input_stream=io.StringIO("y\n"), tty_path=str(fake_tty))

        assert provider._tty is None
        assert provider.confirm("Delete?") is True
        assert provider._tty is not None

        provider.close()
        assert provider._tty is None
        assert fake_tty.read_text() == "Delete? [y/N] "


def test_build_provider():
    assert isinstance(build_provider(automatic=True), AutomaticProvider)
    assert isinstance(build_provider(automatic=False), TerminalProvider)
