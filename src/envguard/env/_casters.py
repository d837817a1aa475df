"""Per-kind casters.

Each caster turns the raw string read from the environment into a typed
value, then validates that value against the field rule's constraint. All
casters share the signature ``(variable, raw, rule) -> value`` where *raw* is
``UNDEFINED`` when the variable is not set.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from dateutil import parser as date_parser
from pydantic import ValidationError

from .._types import (
    UNDEFINED,
    MissingRequiredError,
    UnparseableBooleanError,
    UnparseableDateError,
    UnparseableJSONError,
    UnparseableNumberError,
    ValidationFailedError,
    _Undefined,
)
from ._rules import FieldRule, Kind

Caster = Callable[[str, Any, FieldRule], Any]


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------


def check_presence(variable: str, raw: Any, rule: FieldRule) -> bool:
    """Return ``True`` if *raw* holds a value.

    An absent value is fine for an optional rule (returns ``False``) and
    raises ``MissingRequiredError`` for a required one.
    """
    if not isinstance(raw, _Undefined):
        return True
    if rule.required:
        raise MissingRequiredError(variable)
    return False


def _validate(variable: str, casted: Any, rule: FieldRule) -> Any:
    """Run the rule's constraint over *casted* and return the validated value."""
    try:
        return rule.adapter.validate_python(casted)
    except ValidationError as e:
        raise ValidationFailedError.from_pydantic(variable, e, casted) from e


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------


def cast_string(variable: str, raw: Any, rule: FieldRule) -> Any:
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    return _validate(variable, str(raw), rule)


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------


def _format_number(value: int | float) -> str:
    """Render *value* the way a canonical numeric literal is written.

    Integers use plain digits. Floats use the shortest round-trip digits,
    positional for magnitudes in ``[1e-6, 1e21)`` and ``<m>e<sign><exp>``
    otherwise. Past 2**53 that pads the shortest digits with zeros, so
    ``2.0**60`` renders as ``"1152921504606847000"``.
    """
    if isinstance(value, int):
        return str(value)
    if value == 0:
        return "0"
    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def cast_number(variable: str, raw: Any, rule: FieldRule) -> Any:
    """Cast to ``int`` (integral values) or ``float``.

    The canonical rendering of the parsed value must reproduce *raw* exactly,
    so ``"1e3"``, ``"1.0"``, ``"+5"`` or ``"1_000"`` are rejected rather than
    silently reinterpreted.
    """
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    try:
        number = float(raw)
    except (TypeError, ValueError):
        raise UnparseableNumberError(variable) from None
    if math.isnan(number) or math.isinf(number):
        raise UnparseableNumberError(variable)
    if _format_number(number) != raw:
        raise UnparseableNumberError(variable)
    casted: int | float = number
    if number.is_integer() and abs(number) < 1e21:
        casted = int(raw)
    return _validate(variable, casted, rule)


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

_TRUTHY = frozenset({"true", "yes", "on", "1"})
_FALSY = frozenset({"false", "no", "off", "0"})


def cast_boolean(variable: str, raw: Any, rule: FieldRule) -> Any:
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    lower = raw.lower()
    if lower in _TRUTHY:
        casted = True
    elif lower in _FALSY:
        casted = False
    else:
        raise UnparseableBooleanError(variable)
    return _validate(variable, casted, rule)


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------


def cast_date(variable: str, raw: Any, rule: FieldRule) -> Any:
    """Cast a calendar date or timestamp to an aware UTC ``datetime``.

    ISO-8601 is tried first; other forms such as RFC 2822
    (``"Tue, 01 Jan 2019 00:00:00 GMT"``) or ``"January 1, 2019"`` go through
    ``dateutil``. Values without an offset are read as UTC.
    """
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        try:
            parsed = date_parser.parse(raw)
        except (ValueError, OverflowError):
            raise UnparseableDateError(variable) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return _validate(variable, parsed.astimezone(timezone.utc), rule)


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------


def cast_array(variable: str, raw: Any, rule: FieldRule) -> Any:
    """Cast bracketed values via JSON, anything else by splitting on commas.

    A value that opens or closes with a bracket is treated as JSON, so a
    truncated ``"[1,2"`` fails loudly instead of splitting into ``["[1", "2"]``.
    """
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    if raw.startswith("[") or raw.endswith("]"):
        try:
            casted = json.loads(raw)
        except ValueError:
            raise UnparseableJSONError(variable) from None
    else:
        casted = raw.split(",")
    return _validate(variable, casted, rule)


# ---------------------------------------------------------------------------
# Object / any
# ---------------------------------------------------------------------------


def cast_object(variable: str, raw: Any, rule: FieldRule) -> Any:
    if not check_presence(variable, raw, rule):
        return UNDEFINED
    try:
        casted = json.loads(raw)
    except ValueError:
        raise UnparseableJSONError(variable) from None
    return _validate(variable, casted, rule)


CASTERS: dict[Kind, Caster] = {
    Kind.string: cast_string,
    Kind.number: cast_number,
    Kind.boolean: cast_boolean,
    Kind.date: cast_date,
    Kind.array: cast_array,
    Kind.object: cast_object,
    Kind.any: cast_object,
}
