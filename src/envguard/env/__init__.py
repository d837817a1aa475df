"""Schema-driven environment variable loading.

Reads the process environment once, casts each declared variable to its
kind, validates it with pydantic, and exposes the result as an immutable
snapshot. Any failure aborts construction.
"""

from .._types import (
    EnvError,
    MissingRequiredError,
    UnparseableBooleanError,
    UnparseableDateError,
    UnparseableJSONError,
    UnparseableNumberError,
    UnsupportedKindError,
    ValidationFailedError,
)
from ._loader import Env, EnvSchema
from ._rules import FieldRule, Kind
from ._snapshot import FrozenNamespace, Snapshot
from ._source import EnvSource, FakeEnvSource, OsEnvSource
from ._testing import override_environ

__all__ = [
    # Core
    "Env",
    "EnvSchema",
    "FieldRule",
    "Kind",
    # Views
    "Snapshot",
    "FrozenNamespace",
    # Sources
    "EnvSource",
    "OsEnvSource",
    "FakeEnvSource",
    # Errors
    "EnvError",
    "MissingRequiredError",
    "UnsupportedKindError",
    "ValidationFailedError",
    "UnparseableJSONError",
    "UnparseableNumberError",
    "UnparseableDateError",
    "UnparseableBooleanError",
    # Testing
    "override_environ",
]
