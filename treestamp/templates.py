"""Jinja2 template rendering for tree stamping.

Provides the ``TemplateRenderer`` class, which renders template strings with a
``JsonMap`` of data composed from fixed base data plus per-call additions.
The environment runs in strict mode: referencing an undefined variable is a
``RenderingError``, never a silently empty substitution.

The renderer also supplies the standard destination transform hook,
``transform_path``, which renders a path string only when it contains a
template expression.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, StrictUndefined

from treestamp.errors import RenderingError
from treestamp.json_map import JsonMap

logger = logging.getLogger(__name__)

TEMPLATE_OPEN = "{{"

InsertData = Union[Callable[[JsonMap], None], Mapping[str, Any], None]
"""Per-call data: a callable filling the cloned map, or a mapping merged on top."""

EscapeFn = Callable[[str], str]


class EscapeMode(str, Enum):
    """How variables are escaped before being substituted."""

    NONE = "none"
    HTML = "html"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template strings for tree stamping.

    Configuration is fixed at construction; a renderer may be shared across
    threads for concurrent rendering but must not be reconfigured afterwards.

    Args:
        escape: ``EscapeMode.NONE`` (default), ``EscapeMode.HTML``, or a
            custom callable applied to every substituted value.
        helpers: Extra callables, registered both as filters
            (``{{ name | shout }}``) and as globals (``{{ shout(name) }}``)
            alongside the built-in ``CASE_HELPERS``.
        base_data: Data available to every render call.
    """

    def __init__(
        self,
        escape: EscapeMode | EscapeFn = EscapeMode.NONE,
        helpers: Mapping[str, Callable[..., Any]] | None = None,
        base_data: JsonMap | Mapping[str, Any] | None = None,
    ) -> None:
        env_kwargs: dict[str, Any] = {}
        if callable(escape):
            custom = escape
            env_kwargs["finalize"] = lambda value: custom(str(value))
            autoescape = False
        else:
            autoescape = EscapeMode(escape) is EscapeMode.HTML

        self.env = Environment(
            autoescape=autoescape,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            **env_kwargs,
        )
        # Caller helpers override case helpers of the same name.
        for name, helper in {**CASE_HELPERS, **(helpers or {})}.items():
            self.env.filters[name] = helper
            self.env.globals[name] = helper

        if isinstance(base_data, JsonMap):
            self.base_data = base_data.copy()
        else:
            self.base_data = JsonMap(base_data)

    # -- Rendering ---------------------------------------------------------

    def build_data(self, insert_data: InsertData = None) -> JsonMap:
        """Compose a fresh data map from the base data and *insert_data*."""
        data = self.base_data.copy()
        if insert_data is None:
            return data
        if callable(insert_data):
            insert_data(data)
        else:
            data.extend(insert_data)
        return data

    def render(self, template: str, insert_data: InsertData = None) -> str:
        """Render *template* with the base data plus *insert_data*.

        Example::

            TemplateRenderer().render("Hello {{name}}!", {"name": "Shinji"})
            # -> "Hello Shinji!"

        Raises:
            RenderingError: On syntax errors, undefined variables, or any
                exception raised while rendering, including one raised by a
                helper or filter.
        """
        data = self.build_data(insert_data)
        try:
            return self.env.from_string(template).render(data.to_dict())
        except Exception as exc:
            raise RenderingError(exc, template) from exc

    # -- Path transform ----------------------------------------------------

    def transform_path(self, path: str | Path, insert_data: InsertData = None) -> Path:
        """Render *path* as a template if it contains ``{{``.

        Intended as the transform hook passed to ``traverse``.  Paths without
        a template expression come back unchanged.
        """
        path_str = str(path)
        # Substring check only; a literal "{{" in a file name is rendered too.
        if TEMPLATE_OPEN not in path_str:
            return Path(path)
        return Path(self.render(path_str, insert_data))

    def path_transform(self, insert_data: InsertData = None) -> Callable[[Path], Path]:
        """Bind *insert_data* into a one-argument hook for ``traverse``."""
        return lambda path: self.transform_path(path, insert_data)


# ---------------------------------------------------------------------------
# Built-in case helpers
# ---------------------------------------------------------------------------

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _words(value: str) -> list[str]:
    """Split ``SomeThing``, ``some-thing`` or ``some thing`` into words."""
    return _WORD_RE.findall(value)


def slugify(value: str) -> str:
    """``My App!`` -> ``my-app``."""
    return "-".join(word.lower() for word in _words(value))


def pascal_case(value: str) -> str:
    """``some-thing`` -> ``SomeThing``."""
    return "".join(word.capitalize() for word in _words(value))


def snake_case(value: str) -> str:
    """``SomeThing`` -> ``some_thing``."""
    return "_".join(word.lower() for word in _words(value))


def camel_case(value: str) -> str:
    """``some_thing`` -> ``someThing``."""
    head, *rest = _words(value) or [""]
    return head.lower() + "".join(word.capitalize() for word in rest)


CASE_HELPERS: dict[str, Callable[[str], str]] = {
    "slugify": slugify,
    "pascal_case": pascal_case,
    "snake_case": snake_case,
    "camel_case": camel_case,
}
