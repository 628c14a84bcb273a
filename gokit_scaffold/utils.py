"""Shared utility functions for gokit-scaffold.

Provides crash-safe file writing and Rich-based console reporting.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

_TEMP_PREFIX = ".gokit-scaffold-tmp-"


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_atomic(path: str | Path, content: bytes, mode: int = 0o644) -> Path:
    """Write *content* to *path* so readers never see a partial file.

    The bytes go to a temporary file in the target's own directory, which is
    flushed, fsynced and given *mode* before being renamed over *path*.  Parent
    directories are created first.  On any failure the temporary file is
    removed and the original exception propagates; *path* is left untouched.

    Returns:
        The target path.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=_TEMP_PREFIX)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return target


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_info(message: str) -> None:
    """Print a plain message to stdout."""
    console.print(message, markup=False)


def print_detail(message: str) -> None:
    """Print a dimmed progress line."""
    console.print(f"[dim]{escape(message)}[/dim]")


def print_error(message: str) -> None:
    """Print ``error: <message>`` in red on stderr."""
    err_console.print(f"[bold red]error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning on stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_problem(message: str) -> None:
    """Print one ``  - <message>`` bullet on stderr."""
    err_console.print(f"  - {message.strip()}", markup=False)
