"""Text editor invocation and scoped temporary files."""
import logging
import os
import shlex
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional

from .errors import EditorError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


def resolve_editor(environ: Mapping[str, str], configured: Optional[str] = None) -> str:
    """
    Pick the user's preferred text editor.

    Priority order:
    1. VISUAL environment variable
    2. EDITOR environment variable
    3. Editor from the config file
    4. vi
    """
    for candidate in (environ.get("VISUAL"), environ.get("EDITOR"), configured):
        if candidate:
            return candidate
    return DEFAULT_EDITOR


def edit_file(editor: str, path: Path) -> None:
    """
    Open path in editor and wait for it to exit.

    The editor command may carry its own arguments (e.g. "code --wait").
    Its exit status is not inspected.

    Raises:
        EditorError: If the editor cannot be launched
    """
    try:
        parts = shlex.split(editor)
    except ValueError as e:
        raise EditorError(f"Failed to open editor '{editor}': {e}") from e
    if not parts:
        raise EditorError("Failed to open editor: no editor command configured")
    command = [*parts, str(path)]
    logger.debug(f"Opening editor: {shlex.join(command)}")
    try:
        subprocess.run(command, check=False)
    except OSError as e:
        raise EditorError(f"Failed to open editor '{editor}': {e}") from e


@contextmanager
def scoped_temp_file(suffix: Optional[str] = None) -> Iterator[Path]:
    """
    Yield the path of a new empty temporary file and remove it on exit.

    Removal happens on every exit path and tolerates the file having been
    deleted in the meantime.
    """
    fd, name = tempfile.mkstemp(suffix=suffix)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
