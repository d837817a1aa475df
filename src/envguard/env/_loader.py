"""``Env`` - schema-driven, validated snapshot of the environment.

Construction order:
1. Resolve the kind of every schema rule (unsupported kinds fail fast).
2. Read the environment source once and cast every variable: through its
   rule's caster when the schema declares it, as an optional string otherwise.
3. Check every schema key that never received a value; required ones fail.
4. Freeze the result. Nothing is published if any step raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .._tree import freeze
from .._types import UNDEFINED, _Undefined
from ._casters import CASTERS, cast_string, check_presence
from ._rules import FieldRule, Kind
from ._snapshot import FrozenNamespace, Snapshot
from ._source import EnvSource, OsEnvSource

logger = logging.getLogger(__name__)

EnvSchema = Mapping[str, FieldRule]

_UNDECLARED = FieldRule(Kind.string, required=False)


class Env:
    """Typed, validated, read-only view of the environment.

    Usage::

        env = Env({
            "PORT": FieldRule.number(required=True),
            "DEBUG": FieldRule.boolean(),
        })
        env.get("PORT")            # 8080
        env.get("DEBUG", False)    # fallback when unset
        env.all().PORT             # attribute view
        env.all(as_object=False)   # ordered mapping view

    Variables without a rule are kept as strings. Any casting, validation or
    presence failure raises an ``EnvError`` from the constructor.
    """

    def __init__(
        self,
        schema: EnvSchema | None = None,
        *,
        source: EnvSource | None = None,
    ) -> None:
        self._schema: Mapping[str, FieldRule] = MappingProxyType(dict(schema or {}))
        kinds = {key: rule.resolve_kind(key) for key, rule in self._schema.items()}

        environ = (source or OsEnvSource()).read()
        values: dict[str, Any] = {}

        for key, raw in environ.items():
            rule = self._schema.get(key)
            if rule is None:
                value = cast_string(key, raw, _UNDECLARED)
            else:
                value = CASTERS[kinds[key]](key, raw, rule)
            if not isinstance(value, _Undefined):
                values[key] = value

        for key, rule in self._schema.items():
            if key not in values:
                check_presence(key, UNDEFINED, rule)

        self._data: MappingProxyType = freeze(values)
        self._snapshot = Snapshot(self._data)
        self._namespace = FrozenNamespace(self._data)
        logger.debug(
            "Env snapshot built: %d variables, %d declared in schema",
            len(self._data),
            len(self._schema),
        )

    # -- lookup -------------------------------------------------------------

    def get(self, key: str, fallback: Any = None) -> Any:
        """Return the value for *key*, or *fallback* if it is not set."""
        return self._data.get(key, fallback)

    def all(self, as_object: bool = True) -> FrozenNamespace | Snapshot:
        """Return every variable.

        Args:
            as_object: ``True`` for a ``FrozenNamespace`` (attribute access),
                ``False`` for the ordered ``Snapshot`` mapping.
        """
        if as_object:
            return self._namespace
        return self._snapshot

    @property
    def env(self) -> FrozenNamespace:
        return self._namespace

    @property
    def schema(self) -> Mapping[str, FieldRule]:
        return self._schema

    # -- container protocol -------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<Env {len(self._data)} variables>"
