"""Helpers for nested value trees: deep freezing, read-only namespaces and dot-path lookup."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, Sequence, Set
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from ._types import UNDEFINED, _Undefined


class FrozenNamespace:
    """Attribute-style read-only view (``ns.PORT`` or ``ns["PORT"]``)."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_data", data)

    def __getattr__(self, name: str) -> Any:
        if name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot set {name!r}: namespace is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete {name!r}: namespace is read-only")

    def __dir__(self) -> list[str]:
        return list(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrozenNamespace):
            return self._data == other._data
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{key}={value!r}" for key, value in self._data.items())
        return f"FrozenNamespace({items})"

    def as_mapping(self) -> Mapping[str, Any]:
        """Return the underlying read-only mapping."""
        return self._data


def _object_fields(value: Any) -> dict[str, Any] | None:
    """Return the field values of a pydantic model or dataclass instance."""
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    return None


def freeze(value: Any) -> Any:
    """Return a read-only copy of *value*.

    Mappings become ``MappingProxyType`` over a fresh dict, lists and tuples
    become tuples, sets become frozensets. Pydantic models and dataclass
    instances become a ``FrozenNamespace`` over their frozen fields, so
    ``value.port`` still reads but cannot be assigned. Nested containers are
    frozen too; scalars and other objects are returned unchanged.
    """
    if isinstance(value, FrozenNamespace):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set) and not isinstance(value, frozenset):
        return frozenset(freeze(item) for item in value)
    fields = _object_fields(value)
    if fields is not None:
        return FrozenNamespace(freeze(fields))
    return value


def thaw(value: Any) -> Any:
    """Return a plain ``dict`` / ``list`` copy of a frozen tree (e.g. for JSON output)."""
    if isinstance(value, FrozenNamespace):
        return thaw(value.as_mapping())
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [thaw(item) for item in value]
    return value


def resolve_dot_path(source: Any, path: str) -> Any:
    """Walk nested mappings and sequences using dot-separated segments.

    Numeric segments index into sequences (``"items.0.name"``). Returns
    ``UNDEFINED`` if any segment is missing.
    """
    current: Any = source
    for segment in path.split("."):
        if isinstance(current, FrozenNamespace):
            current = current.as_mapping()
        if isinstance(current, Mapping):
            current = current.get(segment, UNDEFINED)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not segment.isdigit() or int(segment) >= len(current):
                return UNDEFINED
            current = current[int(segment)]
        else:
            return UNDEFINED
        if isinstance(current, _Undefined):
            return UNDEFINED
    return current
