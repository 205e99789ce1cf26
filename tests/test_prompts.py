import io
from unittest.mock import patch

import pytest
from rich.console import Console

from awssm.secrets.domains import prompts
from awssm.secrets.domains.errors import SelectionError
from awssm.secrets.domains.prompts import TerminalPrompter, parse_choice


@pytest.fixture
def prompter(monkeypatch):
    monkeypatch.setattr(prompts, "_is_termios_available", False)
    return TerminalPrompter(Console(file=io.StringIO()))


def _type(monkeypatch, answer):
    monkeypatch.setattr("builtins.input", lambda *args: answer)


class TestParseChoice:
    def test_valid(self):
        assert parse_choice(" 2 ", 3) == 2

    @pytest.mark.parametrize("answer", ["", "one", "1.5", "-1", "+1", "1_0", "\u0661", "\u00b2"])
    def test_not_a_number(self, answer):
        with pytest.raises(SelectionError) as exc_info:
            parse_choice(answer, 3)
        assert "integer" in str(exc_info.value)

    @pytest.mark.parametrize("answer", ["3", "10"])
    def test_out_of_range(self, answer):
        with pytest.raises(SelectionError) as exc_info:
            parse_choice(answer, 3)
        assert "between 0 and 2" in str(exc_info.value)


class TestTerminalPrompter:
    def test_numbered_choice(self, prompter, monkeypatch):
        _type(monkeypatch, "1")
        assert prompter.choose("Select secret", ["db-pass", "DB-Replica"]) == 1

        listing = prompter.console.file.getvalue()
        assert "0: db-pass" in listing
        assert "1: DB-Replica" in listing

    def test_numbered_choice_single_chance(self, prompter, monkeypatch):
        _type(monkeypatch, "7")
        with pytest.raises(SelectionError):
            prompter.choose("Select secret", ["db-pass", "DB-Replica"])

    def test_ask_trims(self, prompter, monkeypatch):
        _type(monkeypatch, "  yes \n")
        assert prompter.ask("Sure? ") == "yes"
        assert "Sure?" in prompter.console.file.getvalue()

    def test_ask_end_of_input(self, prompter, monkeypatch):
        def eof(*args):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)
        assert prompter.ask("Sure? ") == ""


class _Tty(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def menu_prompter(monkeypatch):
    monkeypatch.setattr(prompts, "_is_termios_available", True)
    monkeypatch.setattr(prompts.sys, "stdin", _Tty())
    return TerminalPrompter(Console(file=io.StringIO()))


class TestMenuChoice:
    def test_menu_returns_picked_index(self, menu_prompter):
        with patch("simple_term_menu.TerminalMenu") as menu_class:
            menu_class.return_value.show.return_value = 1
            assert menu_prompter.choose("Select secret", ["db-pass", "DB-Replica"]) == 1

        assert menu_class.call_args.kwargs["menu_entries"] == ["db-pass", "DB-Replica"]
        output = menu_prompter.console.file.getvalue()
        assert "Select secret" in output
        assert "DB-Replica" in output

    def test_cancelled_menu(self, menu_prompter):
        with patch("simple_term_menu.TerminalMenu") as menu_class:
            menu_class.return_value.show.return_value = None
            with pytest.raises(SelectionError) as exc_info:
                menu_prompter.choose("Select secret", ["db-pass", "DB-Replica"])

        assert str(exc_info.value) == "No secret selected"

    def test_numbered_list_when_not_a_terminal(self, monkeypatch):
        monkeypatch.setattr(prompts, "_is_termios_available", True)
        monkeypatch.setattr(prompts.sys, "stdin", io.StringIO())
        _type(monkeypatch, "0")
        with patch("simple_term_menu.TerminalMenu") as menu_class:
            prompter = TerminalPrompter(Console(file=io.StringIO()))
            assert prompter.choose("Select secret", ["db-pass", "DB-Replica"]) == 0

        menu_class.assert_not_called()
