"""Console and logging helpers for treestamp.

Library modules log through ``logging.getLogger(__name__)``; applications
call ``setup_logging`` once to route those records through Rich.  Plans can
be previewed as a Rich table before they are executed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from treestamp.actions import Action, ActionKind

console = Console()

LOGGER_NAME = "treestamp"

KIND_STYLES: dict[ActionKind, str] = {
    ActionKind.CREATE_DIRECTORY: "bright_blue",
    ActionKind.COPY_FILE: "white",
    ActionKind.WRITE_TEMPLATE: "bright_green",
}


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(level: str = "WARNING", target: Console | None = None) -> logging.Logger:
    """Attach a ``RichHandler`` to the ``treestamp`` logger.

    Calling it again replaces the previous handler rather than stacking a
    second one.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        target: Console to write to.  Defaults to the shared ``console``.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=target or console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def plan_table(actions: Iterable[Action], title: str = "Plan") -> Table:
    """Build a table with one row per action, in plan order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Action", no_wrap=True)
    table.add_column("Source", style="dim")
    table.add_column("Destination")

    for index, action in enumerate(actions, start=1):
        style = KIND_STYLES.get(action.kind, "white")
        table.add_row(
            str(index),
            f"[{style}]{action.kind.value}[/{style}]",
            Text(str(action.source)) if action.source is not None else "",
            Text(str(action.destination)),
        )
    return table


def print_plan(actions: Iterable[Action], title: str = "Plan") -> None:
    """Print a dry-run view of *actions* without touching the filesystem."""
    console.print(plan_table(actions, title=title))
    console.print()
