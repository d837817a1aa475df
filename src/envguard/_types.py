"""Foundation types shared across envguard.

Provides the ``UNDEFINED`` sentinel and the exception taxonomy raised by the
environment loader and the directory config aggregator.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError


# ---------------------------------------------------------------------------
# Sentinel
# ---------------------------------------------------------------------------


class _Undefined:
    """Sentinel for absent values (distinct from ``None``)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


# ---------------------------------------------------------------------------
# Base exceptions
# ---------------------------------------------------------------------------


class EnvguardError(Exception):
    """Base exception for every error raised by envguard."""


class EnvError(EnvguardError):
    """Base exception for failures while building an ``Env`` snapshot.

    Every subclass records the offending variable name on ``.variable``.
    """

    def __init__(self, variable: str, message: str) -> None:
        self.variable = variable
        super().__init__(message)


class ConfigError(EnvguardError):
    """Base exception for directory config aggregation errors."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


# ---------------------------------------------------------------------------
# Env construction errors
# ---------------------------------------------------------------------------


class UnsupportedKindError(EnvError):
    """Raised when a field rule declares a kind outside the supported set."""

    def __init__(self, variable: str, kind: Any = None) -> None:
        self.kind = kind
        if kind is None:
            message = f'The schema kind for variable "{variable}" is undefined.'
        else:
            message = f'Schema kind "{kind}" for variable "{variable}" is not supported.'
        super().__init__(variable, message)


class MissingRequiredError(EnvError):
    """Raised when a required variable is not set."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable, f'Required variable "{variable}" is not set.')


class ValidationFailedError(EnvError):
    """Raised when a cast value fails its field rule constraint.

    ``messages`` holds one line per violation, each naming the sub-path (when
    nested) and the offending value.
    """

    def __init__(self, variable: str, messages: Iterable[str] | None = None) -> None:
        self.messages: tuple[str, ...] = tuple(messages or ())
        if self.messages:
            message = f'Validation failed for variable "{variable}": {", ".join(self.messages)}'
        else:
            message = f'Validation failed for variable "{variable}".'
        super().__init__(variable, message)

    @classmethod
    def from_pydantic(
        cls,
        variable: str,
        error: ValidationError,
        source: Any,
    ) -> "ValidationFailedError":
        """Build from a pydantic ``ValidationError`` raised while validating *source*.

        The reported value is picked from *source* (the cast value) at the
        error location, falling back to the input pydantic reports when the
        location does not resolve inside *source*.
        """
        from ._tree import resolve_dot_path

        messages = []
        for detail in error.errors():
            path = ".".join(str(part) for part in detail.get("loc", ()))
            value = resolve_dot_path(source, path) if path else source
            if isinstance(value, _Undefined):
                value = detail.get("input")
            prefix = f'"{path}" ' if path else ""
            messages.append(f"{prefix}{detail['msg']}, but got {value!r}")
        return cls(variable, messages)


class UnparseableJSONError(EnvError):
    """Raised when a value expected to be JSON could not be decoded."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable, f'The variable "{variable}" could not be parsed as JSON')


class UnparseableNumberError(EnvError):
    """Raised when a value is not a canonical number literal."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable, f'The variable "{variable}" could not be parsed as a number')


class UnparseableDateError(EnvError):
    """Raised when a value is not a recognisable calendar timestamp."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable, f'The variable "{variable}" could not be parsed as a date')


class UnparseableBooleanError(EnvError):
    """Raised when a value is not one of the recognised boolean tokens."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable, f'The variable "{variable}" could not be parsed as a boolean')


# ---------------------------------------------------------------------------
# Config directory errors
# ---------------------------------------------------------------------------


class ConfigDirectoryNotFoundError(ConfigError):
    """Raised when the config directory does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f'The path "{path}" could not be accessed')


class ConfigPathNotDirectoryError(ConfigError):
    """Raised when the config path exists but is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f'The path "{path}" is not a directory')
