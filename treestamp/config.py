"""treestamp configuration.

Typed settings for a ``TreeStamper``.  Pydantic v2 validates values at
construction, and the model round-trips through JSON or environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from treestamp.templates import EscapeMode
from treestamp.traverse import DEFAULT_TEMPLATE_EXT

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StampConfig(BaseModel):
    """Settings shared by every plan and render of a ``TreeStamper``."""

    template_ext: Optional[str] = Field(
        default=DEFAULT_TEMPLATE_EXT,
        description="Extension (no leading dot) marking templates; None copies everything",
    )
    escape: EscapeMode = Field(default=EscapeMode.NONE)
    log_level: str = Field(default="WARNING")

    @field_validator("template_ext")
    @classmethod
    def _check_template_ext(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not value:
            raise ValueError("template_ext must be non-empty; use None to disable templates")
        if value.startswith("."):
            raise ValueError(f"template_ext must not start with a dot: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "StampConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "StampConfig":
        """Build a ``StampConfig`` from environment variables.

        Recognised variables (all optional):
            TREESTAMP_TEMPLATE_EXT (empty string disables templating),
            TREESTAMP_ESCAPE (``none`` or ``html``), TREESTAMP_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if "TREESTAMP_TEMPLATE_EXT" in os.environ:
            kwargs["template_ext"] = os.environ["TREESTAMP_TEMPLATE_EXT"] or None
        if os.environ.get("TREESTAMP_ESCAPE"):
            kwargs["escape"] = os.environ["TREESTAMP_ESCAPE"].lower()
        if os.environ.get("TREESTAMP_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["TREESTAMP_LOG_LEVEL"]
        return cls(**kwargs)
