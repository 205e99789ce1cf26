"""Terminal rendering of secret values and secret tables."""
import json
import math
from typing import Any, Iterable, Optional

from rich import box
from rich.console import Console
from rich.json import JSON
from rich.table import Table
from rich.text import Text

from .models import Secret


def format_json(data: Any, colored: bool = False) -> str:
    """
    Pretty-print a JSON-compatible value.

    Args:
        data: Parsed JSON value
        colored: Highlight for the terminal. Ignored when stdout is not a
            terminal, so piped output stays plain.

    Returns:
        Indented JSON text, with ANSI styling when colored
    """
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if not colored or not Console().is_terminal:
        return text

    console = Console(force_terminal=True, soft_wrap=True)
    with console.capture() as capture:
        console.print(JSON(text, indent=2))
    return capture.get().rstrip("\n")


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Not a JSON value: {name}")


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"Number out of range: {text}")
    return number


def format_secret_value(value: Optional[str], colored: bool = False) -> str:
    """
    Render a secret payload.

    JSON payloads are pretty-printed; anything else is returned unchanged.
    A missing value renders as an empty string.
    """
    raw = value or ""
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError:
        return raw
    return format_json(parsed, colored)


def render_table(secrets: Iterable[Secret], console: Optional[Console] = None) -> None:
    """Print secrets as a bordered Name/Description table framed by blank lines."""
    console = console or Console()

    table = Table(box=box.SQUARE)
    table.add_column("Name", justify="left")
    table.add_column("Description", justify="left")
    for secret in secrets:
        table.add_row(Text(secret.name), Text(secret.description or ""))

    console.print()
    console.print(table)
    console.print()
