"""Execution of planned actions.

``TreeStamper`` ties the pieces together: it plans with ``traverse`` (using
its renderer's ``transform_path`` as the destination hook) and replays the
resulting queue one action at a time.  Execution is fail-fast and not
transactional: actions applied before a failure stay applied.

Quick usage::

    from treestamp import TreeStamper

    stamper = TreeStamper()
    stamper.process("templates/app", "/tmp/out", {"name": "demo"})
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from treestamp.actions import Action, ActionKind
from treestamp.config import StampConfig
from treestamp.errors import (
    CopyFileError,
    CreateDirectoryError,
    ReadTemplateError,
    RenderingError,
    RenderTemplateError,
    WriteTemplateError,
)
from treestamp.json_map import JsonMap
from treestamp.templates import EscapeFn, EscapeMode, InsertData, TemplateRenderer
from treestamp.traverse import DEFAULT_TEMPLATE_EXT, ActionQueue, traverse
from treestamp.utils import setup_logging

logger = logging.getLogger(__name__)


class TreeStamper:
    """Plans and executes tree stamps with a shared ``TemplateRenderer``.

    The renderer and its base data are read-only after construction, so one
    stamper may serve concurrent calls as long as each writes to its own
    destination tree.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        template_ext: str | None = DEFAULT_TEMPLATE_EXT,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.template_ext = template_ext

    @classmethod
    def from_config(
        cls,
        config: StampConfig,
        helpers: Mapping[str, Callable[..., Any]] | None = None,
        base_data: JsonMap | Mapping[str, Any] | None = None,
        escape: EscapeFn | None = None,
    ) -> "TreeStamper":
        """Build a stamper from a ``StampConfig``.

        A custom *escape* callable overrides ``config.escape``.  The
        ``treestamp`` logger is routed through Rich at ``config.log_level``.
        """
        setup_logging(config.log_level)
        mode: EscapeMode | EscapeFn = escape if escape is not None else config.escape
        renderer = TemplateRenderer(escape=mode, helpers=helpers, base_data=base_data)
        return cls(renderer, template_ext=config.template_ext)

    # -- Rendering ---------------------------------------------------------

    def render(self, template: str, insert_data: InsertData = None) -> str:
        return self.renderer.render(template, insert_data)

    def transform_path(self, path: str | Path, insert_data: InsertData = None) -> Path:
        return self.renderer.transform_path(path, insert_data)

    # -- Planning ----------------------------------------------------------

    def plan(
        self,
        source: str | Path,
        dest: str | Path,
        insert_data: InsertData = None,
    ) -> ActionQueue:
        """Traverse *source* with path rendering as the destination hook."""
        return traverse(
            source,
            dest,
            self.renderer.path_transform(insert_data),
            self.template_ext,
        )

    # -- Execution ---------------------------------------------------------

    def process_action(self, action: Action, insert_data: InsertData = None) -> None:
        """Execute a single action.

        - ``CREATE_DIRECTORY`` behaves like ``mkdir -p``.
        - ``COPY_FILE`` copies bytes and mode bits, overwriting the target.
        - ``WRITE_TEMPLATE`` reads the source as UTF-8, renders it, and writes
          the result, overwriting the target.  The source is read in text
          mode, so CRLF line endings come out as LF.

        Raises:
            ProcessingError: The subclass naming the step that failed.
        """
        logger.info("%s", action.describe())
        if action.kind is ActionKind.CREATE_DIRECTORY:
            try:
                action.destination.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise CreateDirectoryError(action, exc) from exc

        elif action.kind is ActionKind.COPY_FILE:
            try:
                shutil.copyfile(action.source, action.destination)
                shutil.copymode(action.source, action.destination)
            except OSError as exc:
                raise CopyFileError(action, exc) from exc

        elif action.kind is ActionKind.WRITE_TEMPLATE:
            try:
                with open(action.source, encoding="utf-8") as handle:
                    template = handle.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise ReadTemplateError(action, exc, path=action.source) from exc

            try:
                rendered = self.renderer.render(template, insert_data)
            except RenderingError as exc:
                raise RenderTemplateError(action, exc, path=action.source) from exc

            try:
                with open(action.destination, "w", encoding="utf-8", newline="") as handle:
                    handle.write(rendered)
            except OSError as exc:
                raise WriteTemplateError(action, exc) from exc

    def process_actions(
        self,
        actions: Iterable[Action],
        insert_data: InsertData = None,
    ) -> None:
        """Execute *actions* in order, stopping at the first failure."""
        for action in actions:
            self.process_action(action, insert_data)

    def process(
        self,
        source: str | Path,
        dest: str | Path,
        insert_data: InsertData = None,
    ) -> ActionQueue:
        """Plan *source* -> *dest* and execute the plan.

        Returns:
            The executed plan.

        Raises:
            TraversalError: If planning fails; nothing is written.
            ProcessingError: If an action fails; earlier actions stay applied.
        """
        actions = self.plan(source, dest, insert_data)
        self.process_actions(actions, insert_data)
        logger.info("stamped %d action(s) into %r", len(actions), str(dest))
        return actions

    async def process_async(
        self,
        source: str | Path,
        dest: str | Path,
        insert_data: InsertData = None,
    ) -> ActionQueue:
        """Run ``process`` in a worker thread so an event loop stays responsive."""
        return await asyncio.to_thread(self.process, source, dest, insert_data)
