"""treestamp -- stamp out directory trees from templates.

Walks a source tree and plans the primitive actions (create directory, copy
file, write rendered template) that reproduce it at a destination.  Files
ending in the template extension (``hbs`` by default) are rendered with Jinja2
and lose that extension; path names containing ``{{ ... }}`` are rendered too.

Quick usage::

    from treestamp import TreeStamper, traverse

    plan = traverse("skeleton", "/tmp/out")          # inspect only
    TreeStamper().process("skeleton", "/tmp/out", {"name": "demo"})
"""

from treestamp.actions import Action, ActionKind, append_path, classify
from treestamp.config import StampConfig
from treestamp.copytree import plain_copy
from treestamp.errors import (
    CopyFileError,
    CreateDirectoryError,
    DirectoryReadFailed,
    EntryReadFailed,
    InvalidPath,
    PathTransformFailed,
    PlainCopyError,
    ProcessingError,
    ReadTemplateError,
    RenderingError,
    RenderTemplateError,
    StatError,
    TraversalError,
    TreeStampError,
    WriteTemplateError,
)
from treestamp.json_map import JsonMap
from treestamp.processor import TreeStamper
from treestamp.templates import EscapeMode, TemplateRenderer
from treestamp.traverse import DEFAULT_TEMPLATE_EXT, ActionQueue, no_transform, traverse
from treestamp.utils import print_plan, setup_logging

__all__ = [
    "Action",
    "ActionKind",
    "ActionQueue",
    "CopyFileError",
    "CreateDirectoryError",
    "DEFAULT_TEMPLATE_EXT",
    "DirectoryReadFailed",
    "EntryReadFailed",
    "EscapeMode",
    "InvalidPath",
    "JsonMap",
    "PathTransformFailed",
    "PlainCopyError",
    "ProcessingError",
    "ReadTemplateError",
    "RenderTemplateError",
    "RenderingError",
    "StampConfig",
    "StatError",
    "TemplateRenderer",
    "TraversalError",
    "TreeStampError",
    "TreeStamper",
    "WriteTemplateError",
    "append_path",
    "classify",
    "no_transform",
    "plain_copy",
    "print_plan",
    "setup_logging",
    "traverse",
]
