"""Exception hierarchy for planning, rendering, and executing tree stamps.

Every error carries the offending path and the underlying cause so a failure
can be acted on without re-running with extra instrumentation.  Planning
errors derive from ``TraversalError``; execution errors derive from
``ProcessingError``.  Everything derives from ``TreeStampError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treestamp.actions import Action


class TreeStampError(Exception):
    """Base class for every error raised by ``treestamp``."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        cause: BaseException | None = None,
    ):
        self.path = path
        self.cause = cause
        super().__init__(message)


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


class TraversalError(TreeStampError):
    """Raised when walking a source tree fails.  No partial plan survives."""


class StatError(TraversalError):
    """The source path does not exist or its kind could not be determined."""

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(f"Failed to inspect {str(path)!r}: {cause}", path, cause)


class DirectoryReadFailed(TraversalError):
    """Listing a directory's contents failed."""

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(
            f"Failed to read directory at {str(path)!r}: {cause}", path, cause
        )


class EntryReadFailed(TraversalError):
    """Reading one entry of a directory listing failed mid-iteration."""

    def __init__(self, dir: Path, cause: BaseException):
        self.dir = dir
        super().__init__(
            f"Failed to read directory entry in {str(dir)!r}: {cause}", dir, cause
        )


class PathTransformFailed(TraversalError):
    """The destination transform hook raised for a composed path."""

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(
            f"Failed to transform path at {str(path)!r}: {cause}", path, cause
        )


class InvalidPath(TraversalError):
    """A source path has no usable final component (empty or a root)."""

    def __init__(self, path: Path):
        super().__init__(f"Path {str(path)!r} has no final component", path)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class RenderingError(TreeStampError):
    """Raised when the template engine rejects or fails to render a template."""

    def __init__(self, cause: BaseException, template: str = ""):
        self.template = template
        super().__init__(f"Failed to render template: {cause}", None, cause)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


class ProcessingError(TreeStampError):
    """Raised when executing a planned action fails.

    Actions executed before the failing one stay applied.
    """

    step = "process action"

    def __init__(self, action: Action, cause: BaseException, path: Path | None = None):
        self.action = action
        path = path if path is not None else action.destination
        super().__init__(f"Failed to {self.step} at {str(path)!r}: {cause}", path, cause)


class CreateDirectoryError(ProcessingError):
    step = "create directory"


class CopyFileError(ProcessingError):
    step = "copy file"


class ReadTemplateError(ProcessingError):
    step = "read template"


class RenderTemplateError(ProcessingError):
    step = "render template"


class WriteTemplateError(ProcessingError):
    step = "write template"


# ---------------------------------------------------------------------------
# Plain copy
# ---------------------------------------------------------------------------


class PlainCopyError(TreeStampError):
    """Raised by ``plain_copy`` when the source tree cannot be traversed."""

    def __init__(self, source: Path, cause: TraversalError):
        self.source = source
        super().__init__(
            f"Failed to traverse files at {str(source)!r}: {cause}", source, cause
        )
