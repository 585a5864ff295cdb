"""String-keyed map of JSON-like values handed to templates."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import JsonValue, TypeAdapter

_JSON_VALUE: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class JsonMap(Mapping[str, Any]):
    """Template data: strings, numbers, bools, ``None``, lists, and nested maps.

    Values are validated on insertion, so anything a template sees can also
    be serialised to JSON.  ``copy()`` is deep; callers compose per-call data
    on a copy and the original (the base data) is never mutated.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        if data:
            self.extend(data)

    def insert(self, key: str, value: Any) -> None:
        """Insert or replace *key*.

        Raises:
            TypeError: If *key* is not a string.
            pydantic.ValidationError: If *value* is not JSON-like.
        """
        if not isinstance(key, str):
            raise TypeError(f"JsonMap keys must be strings, got {type(key).__name__}")
        if isinstance(value, JsonMap):
            value = value.to_dict()
        self._data[key] = _JSON_VALUE.validate_python(value)

    def extend(self, data: Mapping[str, Any]) -> None:
        for key, value in data.items():
            self.insert(key, value)

    def copy(self) -> "JsonMap":
        clone = JsonMap()
        clone._data = copy.deepcopy(self._data)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """A deep copy of the contents as a plain ``dict``."""
        return copy.deepcopy(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"JsonMap({self._data!r})"
