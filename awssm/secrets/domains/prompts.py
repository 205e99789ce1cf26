"""Interactive prompts: picking one of several secrets and yes/no questions."""
import sys
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from .errors import SelectionError

try:
    import termios  # noqa: F401
    _is_termios_available = True
except ImportError:
    _is_termios_available = False


class TerminalPrompter:
    """
    Prompts on the controlling terminal.

    Workflows only rely on `choose` and `ask`, so tests pass any object
    offering the same two methods.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console(stderr=True)

    def choose(self, title: str, labels: Sequence[str]) -> int:
        """
        Let the user pick one of labels.

        Uses a fuzzy type-to-filter menu on capable terminals, a numbered
        list otherwise.

        Returns:
            Index into labels

        Raises:
            SelectionError: If the choice is cancelled, not a number or out of range
        """
        if _is_termios_available and sys.stdin.isatty():
            return self._choose_from_menu(title, labels)
        return self._choose_by_number(title, labels)

    def _choose_from_menu(self, title: str, labels: Sequence[str]) -> int:
        from simple_term_menu import TerminalMenu

        self.console.print(f"[sea_green3 bold]?[/sea_green3 bold] [bold]{escape(title)}[/bold] "
                           "[gray46]Use arrows to move, type to filter[/gray46]")
        menu = TerminalMenu(menu_entries=list(labels),
                            menu_cursor_style=["fg_red", "bold"],
                            menu_highlight_style=["fg_red", "bold"],
                            search_key=None,
                            search_highlight_style=["fg_purple"])
        index = menu.show()
        if index is None:
            raise SelectionError("No secret selected")
        self.console.print(f"[sea_green3 bold]✓[/sea_green3 bold] [grey74]{escape(labels[index])}[/grey74]")
        return index

    def _choose_by_number(self, title: str, labels: Sequence[str]) -> int:
        self.console.print("Multiple secrets were found")
        for i, label in enumerate(labels):
            self.console.print(f"{i}: {escape(label)}", highlight=False)

        answer = self.ask(f"\n{title}: ")
        return parse_choice(answer, len(labels))

    def ask(self, question: str) -> str:
        """Write question to stderr and read one trimmed line from stdin.

        End of input counts as an empty answer.
        """
        try:
            return self.console.input(escape(question)).strip()
        except EOFError:
            return ""


def parse_choice(answer: str, count: int) -> int:
    """
    Convert a typed answer into an index below count.

    Raises:
        SelectionError: If the answer is not a number or out of range
    """
    text = answer.strip()
    if not (text.isascii() and text.isdigit()):
        raise SelectionError("Please enter an integer value")
    index = int(text)

    max_index = count - 1
    if index > max_index:
        raise SelectionError(f"Please enter a value between 0 and {max_index}")
    return index
