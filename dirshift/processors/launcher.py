"""Open folders in external programs."""

import logging
import shlex
import subprocess
from pathlib import Path


logger = logging.getLogger(__name__)


def _spawn(command: list[str], cwd: Path | None = None) -> bool:
    if not command:
        return False
    try:
        subprocess.Popen(
            command,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning("Could not run %s: %s", command[0], e)
        return False
    return True


def open_in_terminal(path: Path, terminal_command: str) -> bool:
    """Start a terminal emulator whose working directory is `path`.

    Returns:
        True if the terminal process was started.
    """
    return _spawn(shlex.split(terminal_command), cwd=Path(path))


def open_in_editor(path: Path, editor_command: str) -> bool:
    """Open `path` with an editor command such as ``code``.

    Returns:
        True if the editor process was started.
    """
    command = shlex.split(editor_command)
    if not command:
        return False
    return _spawn([*command, str(path)])
