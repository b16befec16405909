"""Shared console and logging helpers for vibe-generate.

User-facing output goes through Rich consoles (stdout for progress, stderr
for errors); diagnostics go through the standard ``logging`` tree, rendered
by a ``RichHandler`` when stderr is a terminal.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(level: str = "WARNING") -> None:
    """Configure the ``vibe_generate`` logger.

    Uses a ``RichHandler`` for interactive terminals and a plain
    ``StreamHandler`` otherwise. Both write to stderr so stdout only carries
    progress messages.

    Args:
        level: Logging level name (``"DEBUG"``, ``"INFO"``, ...).
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("vibe_generate")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.propagate = False

    handler: logging.Handler
    if sys.stderr.isatty():
        handler = RichHandler(
            console=err_console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s - %(name)s - %(message)s")
        )
    handler.setLevel(numeric_level)
    logger.addHandler(handler)

    logger.debug("Logging configured: level=%s", level.upper())


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print ``Error: <message>`` to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_template_table(names: Sequence[str], title: str = "Templates") -> None:
    """Print a numbered table of template names.

    Numbers start at 1 and line up with the choices accepted by the
    interactive template prompt.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", no_wrap=True, justify="right")
    table.add_column("Template")

    for index, name in enumerate(names, start=1):
        table.add_row(str(index), escape(name))

    console.print(table)
