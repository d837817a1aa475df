"""Field rules: what each environment variable must become.

A schema maps variable names to ``FieldRule`` instances::

    schema = {
        "PORT": FieldRule.number(Annotated[int, Field(ge=1, le=65535)], required=True),
        "DEBUG": FieldRule.boolean(),
        "ALLOWED_IDS": FieldRule.array(items=Annotated[int, Field(ge=20)]),
        "STARTS_AT": FieldRule.date(required=True),
    }

The ``kind`` selects the caster; the ``constraint`` is any type annotation
pydantic can validate and is applied to the cast value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

from pydantic import TypeAdapter

from .._types import UNDEFINED, UnsupportedKindError, _Undefined


class Kind(str, Enum):
    """Supported target kinds."""

    string = "string"
    number = "number"
    boolean = "boolean"
    date = "date"
    array = "array"
    object = "object"
    any = "any"


_DEFAULT_CONSTRAINTS: dict[Kind, Any] = {
    Kind.string: str,
    Kind.number: Union[int, float],
    Kind.boolean: bool,
    Kind.date: datetime,
    Kind.array: list[Any],
    Kind.object: dict[str, Any],
    Kind.any: Any,
}


@dataclass(frozen=True)
class FieldRule:
    """Declaration for a single environment variable.

    Attributes:
        kind: Target kind (a ``Kind`` member or its string value). Anything
            else, including ``None``, is rejected when the ``Env`` is built.
        required: Whether the variable must be set.
        constraint: Type annotation validated against the cast value. Falls
            back to a per-kind default when left unset.
    """

    kind: Kind | str | None
    required: bool = False
    constraint: Any = UNDEFINED
    _adapter: TypeAdapter | None = field(default=None, init=False, repr=False, compare=False)

    # -- constructors -------------------------------------------------------

    @classmethod
    def string(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.string, required, constraint)

    @classmethod
    def number(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.number, required, constraint)

    @classmethod
    def boolean(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.boolean, required, constraint)

    @classmethod
    def date(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.date, required, constraint)

    @classmethod
    def array(
        cls,
        constraint: Any = UNDEFINED,
        *,
        items: Any = UNDEFINED,
        required: bool = False,
    ) -> FieldRule:
        """Array rule; ``items`` is shorthand for ``constraint=list[items]``."""
        if isinstance(constraint, _Undefined) and not isinstance(items, _Undefined):
            constraint = list[items]  # type: ignore[valid-type]
        return cls(Kind.array, required, constraint)

    @classmethod
    def object(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.object, required, constraint)

    @classmethod
    def any(cls, constraint: Any = UNDEFINED, *, required: bool = False) -> FieldRule:
        return cls(Kind.any, required, constraint)

    # -- resolution ---------------------------------------------------------

    def resolve_kind(self, variable: str) -> Kind:
        """Return the ``Kind`` for this rule or raise ``UnsupportedKindError``."""
        if self.kind is None:
            raise UnsupportedKindError(variable, None)
        try:
            return Kind(self.kind)
        except (ValueError, TypeError):
            raise UnsupportedKindError(variable, self.kind) from None

    @property
    def adapter(self) -> TypeAdapter:
        """Cached pydantic ``TypeAdapter`` for the effective constraint."""
        if self._adapter is None:
            constraint = self.constraint
            if isinstance(constraint, _Undefined):
                constraint = _DEFAULT_CONSTRAINTS[self.resolve_kind("<rule>")]
            object.__setattr__(self, "_adapter", TypeAdapter(constraint))
        return self._adapter  # type: ignore[return-value]
