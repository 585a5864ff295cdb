"""Shared pytest fixtures for the treestamp test suite.

Provides reusable fixtures for:
- Small source trees on disk (plain, nested, templated path names)
- Output directories under ``tmp_path``
- A default ``TemplateRenderer`` and ``TreeStamper``
- Restoring the ``treestamp`` logger after each test
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from treestamp import TemplateRenderer, TreeStamper
from treestamp.utils import LOGGER_NAME


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> text) under *root*.

    A key ending in ``/`` creates an empty directory instead of a file.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        target = root / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Source trees
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_tree(tmp_path: Path) -> Path:
    """``root/{a.txt, b.hbs, sub/c.txt}``."""
    return make_tree(
        tmp_path / "root",
        {
            "a.txt": "plain a\n",
            "b.hbs": "Hello {{name}}!\n",
            "sub/c.txt": "plain c\n",
        },
    )


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """A deeper tree with several levels, an empty directory, and templates."""
    return make_tree(
        tmp_path / "skeleton",
        {
            "README.md.hbs": "# {{name}}\n",
            "LICENSE": "MIT\n",
            "src/main.py.hbs": "print('{{name}}')\n",
            "src/util.py": "X = 1\n",
            "src/pkg/__init__.py": "",
            "src/pkg/deep/leaf.hbs": "{{ version }}\n",
            "docs/": "",
            "tests/test_main.py": "def test(): pass\n",
        },
    )


@pytest.fixture
def templated_names_tree(tmp_path: Path) -> Path:
    """A tree whose directory and file names contain template expressions."""
    return make_tree(
        tmp_path / "tpl",
        {
            "{{name}}/__init__.py.hbs": "NAME = '{{name}}'\n",
            "{{name}}/static.txt": "static\n",
            "{{name}}_config.json": "{}\n",
        },
    )


@pytest.fixture
def tree_factory():
    """The ``make_tree`` helper, for tests that need a custom layout."""
    return make_tree


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Destination root; not created up front."""
    return tmp_path / "out"


# ---------------------------------------------------------------------------
# Renderer / stamper
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def stamper() -> TreeStamper:
    return TreeStamper()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def restore_logger():
    """Undo handler and level changes made by ``setup_logging``."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
