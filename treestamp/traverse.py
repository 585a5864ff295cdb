"""Depth-first traversal of a source tree into an ordered action plan.

``traverse`` walks the live filesystem once and returns an ``ActionQueue``
that, replayed in order, reproduces the source tree at the destination:

- Each directory produces a ``CREATE_DIRECTORY`` action placed at the front
  of its own level, ahead of everything discovered beneath it.
- Each file whose extension equals the template extension produces a
  ``WRITE_TEMPLATE`` action whose destination drops that extension.
- Every other file produces a ``COPY_FILE`` action.

Because an ancestor's directory creation always precedes any action landing
inside it, the executor can replay the queue linearly without creating
missing parents on the fly.  The walk is fail-fast: the first error aborts it
and no partial plan is returned.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterable, Iterator
from pathlib import Path

from treestamp.actions import Action, PathTransform, append_path, classify
from treestamp.errors import DirectoryReadFailed, EntryReadFailed

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_EXT: str = "hbs"
"""Files with this extension (no leading dot) are rendered as templates."""


def no_transform(path: Path) -> Path:
    """Identity transform hook: leaves destinations untouched."""
    return path


# ---------------------------------------------------------------------------
# ActionQueue
# ---------------------------------------------------------------------------


class ActionQueue:
    """Ordered plan of actions with O(1) insertion at both ends.

    Directory creation goes to the front, file actions to the back.  Once
    returned by ``traverse`` the queue is only read; it may be iterated any
    number of times (e.g. a dry run followed by execution).
    """

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self._actions: deque[Action] = deque(actions)

    # -- Building ----------------------------------------------------------

    def push_front(self, action: Action) -> None:
        logger.debug("pushed onto front of action list: %s", action.describe())
        self._actions.appendleft(action)

    def push_back(self, action: Action) -> None:
        logger.debug("pushed onto back of action list: %s", action.describe())
        self._actions.append(action)

    def push(self, action: Action) -> None:
        """Insert *action* at the end its kind calls for."""
        if action.kind.create_directory:
            self.push_front(action)
        else:
            self.push_back(action)

    def extend(self, other: Iterable[Action]) -> None:
        self._actions.extend(other)

    # -- Reading -----------------------------------------------------------

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __getitem__(self, index: int) -> Action:
        return self._actions[index]

    def __repr__(self) -> str:
        return f"ActionQueue({list(self._actions)!r})"

    def directories(self) -> list[Action]:
        """Directory-creation actions, in plan order."""
        return [a for a in self._actions if a.kind.create_directory]

    def files(self) -> list[Action]:
        """Copy and template actions, in plan order."""
        return [a for a in self._actions if not a.kind.create_directory]

    def to_list(self) -> list[Action]:
        return list(self._actions)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def _list_dir(directory: Path) -> list[Path]:
    """Return the children of *directory* sorted by name."""
    try:
        iterator = os.scandir(directory)
    except OSError as exc:
        raise DirectoryReadFailed(directory, exc) from exc

    children: list[Path] = []
    with iterator:
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                break
            except OSError as exc:
                raise EntryReadFailed(directory, exc) from exc
            children.append(Path(entry.path))
    return sorted(children, key=lambda p: p.name)


def _traverse_dir(
    source: Path,
    dest: Path,
    transform: PathTransform,
    template_ext: str | None,
) -> ActionQueue:
    level = ActionQueue()
    level.push(Action.for_directory(dest, transform))

    logger.debug("descending into dir %r", str(source))
    for child in _list_dir(source):
        kind = classify(child, template_ext)
        if kind.create_directory:
            child_dest = append_path(dest, child, strip_extension=False)
            level.extend(_traverse_dir(child, child_dest, transform, template_ext))
        else:
            level.push(Action.build(kind, child, dest, transform))
    return level


def traverse(
    source_root: str | Path,
    dest_root: str | Path,
    transform: PathTransform = no_transform,
    template_ext: str | None = DEFAULT_TEMPLATE_EXT,
) -> ActionQueue:
    """Plan how to generate the tree at *source_root* under *dest_root*.

    Args:
        source_root: Directory (or single file) to mirror.
        dest_root: Where the root directory lands.  A file root is placed
            inside *dest_root*.
        transform: Hook applied exactly once to every composed destination.
            Anything it raises is wrapped in ``PathTransformFailed``.
        template_ext: Extension marking templates, or ``None`` to copy every
            file verbatim.

    Returns:
        The complete, ordered ``ActionQueue``.

    Raises:
        TraversalError: On the first failure; no partial plan is returned.
    """
    source_root = Path(source_root)
    dest_root = Path(dest_root)

    kind = classify(source_root, template_ext)
    if kind.create_directory:
        actions = _traverse_dir(source_root, dest_root, transform, template_ext)
    else:
        actions = ActionQueue()
        actions.push(Action.build(kind, source_root, dest_root, transform))

    logger.info(
        "planned %d action(s) for %r -> %r", len(actions), str(source_root), str(dest_root)
    )
    return actions
