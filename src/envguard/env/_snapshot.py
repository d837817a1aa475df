"""Read-only views over the validated variables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .._tree import FrozenNamespace

__all__ = ["FrozenNamespace", "Snapshot"]


class Snapshot(Mapping[str, Any]):
    """Immutable, insertion-ordered mapping of variable name to value."""

    __slots__ = ("_data",)

    def __init__(self, data: MappingProxyType) -> None:
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Snapshot is read-only")

    def __repr__(self) -> str:
        return f"Snapshot({dict(self._data)!r})"
