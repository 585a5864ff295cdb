"""Recursive copy built from the planning primitives, with no templating."""

from __future__ import annotations

from pathlib import Path

from treestamp.errors import PlainCopyError, TraversalError
from treestamp.processor import TreeStamper
from treestamp.traverse import ActionQueue, no_transform, traverse


def plain_copy(source: str | Path, dest: str | Path) -> ActionQueue:
    """Copy the tree at *source* to *dest* verbatim.

    Every file is copied, whatever its extension, and destination paths are
    never rendered.

    Raises:
        PlainCopyError: If the source tree cannot be traversed.
        ProcessingError: If copying fails part-way.
    """
    source = Path(source)
    try:
        actions = traverse(source, dest, no_transform, template_ext=None)
    except TraversalError as exc:
        raise PlainCopyError(source, exc) from exc
    TreeStamper(template_ext=None).process_actions(actions)
    return actions
