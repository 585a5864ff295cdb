"""Planned filesystem actions and the helpers that build them.

An ``Action`` is one primitive operation (create a directory, copy a file, or
write a rendered template) with its destination already run through the
caller's transform hook.  Actions are immutable once built; the executor only
ever reads them.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from treestamp.errors import InvalidPath, PathTransformFailed, StatError

logger = logging.getLogger(__name__)

PathTransform = Callable[[Path], Path]
"""Destination hook: receives a composed path, returns the final one or raises."""


# ---------------------------------------------------------------------------
# Action kinds
# ---------------------------------------------------------------------------


class ActionKind(str, Enum):
    """The closed set of operations a plan can contain."""

    CREATE_DIRECTORY = "create_directory"
    COPY_FILE = "copy_file"
    WRITE_TEMPLATE = "write_template"

    @property
    def create_directory(self) -> bool:
        return self is ActionKind.CREATE_DIRECTORY

    @property
    def copy_file(self) -> bool:
        return self is ActionKind.COPY_FILE

    @property
    def write_template(self) -> bool:
        return self is ActionKind.WRITE_TEMPLATE

    @property
    def strip_extension(self) -> bool:
        """Templates lose their extension at the destination."""
        return self.write_template


# ---------------------------------------------------------------------------
# Path composition & classification
# ---------------------------------------------------------------------------


def append_path(base: str | Path, source: str | Path, strip_extension: bool = False) -> Path:
    """Join *base* with the final component of *source*.

    With *strip_extension* the last suffix is dropped (``b.hbs`` -> ``b``).
    No ``..`` normalisation is performed.

    Raises:
        InvalidPath: If *source* has no final component (``""`` or ``"/"``).
    """
    source = Path(source)
    if not source.name:
        raise InvalidPath(source)
    tail = source.stem if strip_extension else source.name
    appended = Path(base) / tail
    logger.debug(
        "appended tail %r to base %r (strip extension set to %s)",
        tail,
        str(base),
        strip_extension,
    )
    return appended


def is_directory(path: Path) -> bool:
    """Return whether *path* is a directory, following symlinks.

    Raises:
        StatError: If the path does not exist or cannot be inspected.
    """
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise StatError(path, exc) from exc
    return stat.S_ISDIR(mode)


def matches_template_ext(path: Path, template_ext: str | None) -> bool:
    """Exact, case-sensitive comparison of the path's extension (no dot)."""
    if template_ext is None:
        return False
    suffix = path.suffix
    return bool(suffix) and suffix[1:] == template_ext


def classify(path: str | Path, template_ext: str | None) -> ActionKind:
    """Decide which action a source entry produces."""
    path = Path(path)
    if is_directory(path):
        kind = ActionKind.CREATE_DIRECTORY
    elif matches_template_ext(path, template_ext):
        kind = ActionKind.WRITE_TEMPLATE
    else:
        kind = ActionKind.COPY_FILE
    logger.debug("detected kind %s for path %r", kind.value, str(path))
    return kind


def apply_transform(destination: Path, transform: PathTransform) -> Path:
    """Run the transform hook once, wrapping any failure with the path."""
    try:
        transformed = Path(transform(destination))
    except Exception as exc:
        raise PathTransformFailed(destination, exc) from exc
    logger.debug("transformed %r into %r", str(destination), str(transformed))
    return transformed


# ---------------------------------------------------------------------------
# Action model
# ---------------------------------------------------------------------------


class Action(BaseModel):
    """One planned filesystem operation.

    ``source`` is ``None`` for directory creation, which is synthesised from
    the directory being descended into.  ``destination`` is always the
    post-transform path.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    source: Optional[Path] = None
    destination: Path

    @model_validator(mode="after")
    def _check_source(self) -> "Action":
        if self.kind.create_directory and self.source is not None:
            raise ValueError("directory creation has no source path")
        if not self.kind.create_directory and self.source is None:
            raise ValueError(f"{self.kind.value} requires a source path")
        return self

    # -- Construction ------------------------------------------------------

    @classmethod
    def for_directory(cls, destination: str | Path, transform: PathTransform) -> "Action":
        """Directory creation for an already-composed destination."""
        return cls(
            kind=ActionKind.CREATE_DIRECTORY,
            destination=apply_transform(Path(destination), transform),
        )

    @classmethod
    def build(
        cls,
        kind: ActionKind,
        source: str | Path,
        dest_dir: str | Path,
        transform: PathTransform,
    ) -> "Action":
        """Compose the destination for *source* inside *dest_dir* and transform it."""
        source = Path(source)
        composed = append_path(dest_dir, source, kind.strip_extension)
        destination = apply_transform(composed, transform)
        if kind.create_directory:
            return cls(kind=kind, destination=destination)
        return cls(kind=kind, source=source, destination=destination)

    @classmethod
    def detect(
        cls,
        source: str | Path,
        dest_dir: str | Path,
        transform: PathTransform,
        template_ext: str | None,
    ) -> "Action":
        """Classify *source* and build the matching action."""
        kind = classify(source, template_ext)
        return cls.build(kind, source, dest_dir, transform)

    # -- Reporting ---------------------------------------------------------

    def describe(self) -> str:
        """One-line human readable form, e.g. ``copy_file a.txt -> out/a.txt``."""
        if self.source is None:
            return f"{self.kind.value} {self.destination}"
        return f"{self.kind.value} {self.source} -> {self.destination}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "source": str(self.source) if self.source is not None else None,
            "destination": str(self.destination),
        }
