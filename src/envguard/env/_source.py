"""Environment sources: where raw variable values come from."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Protocol, runtime_checkable

from dotenv import dotenv_values


@runtime_checkable
class EnvSource(Protocol):
    """Abstraction over the environment-variable table.

    ``read`` is called exactly once per ``Env`` and must return a point-in-time
    copy.
    """

    def read(self) -> Mapping[str, str]:
        ...


class OsEnvSource:
    """Reads ``os.environ``, optionally filling gaps from a dotenv file.

    Values already present in the process environment win over the file; the
    process environment itself is never modified.
    """

    def __init__(self, dotenv_path: str | os.PathLike[str] | None = None) -> None:
        self.dotenv_path = Path(dotenv_path) if dotenv_path is not None else None

    def read(self) -> Mapping[str, str]:
        values: dict[str, str] = {}
        if self.dotenv_path is not None and self.dotenv_path.is_file():
            for key, value in dotenv_values(self.dotenv_path).items():
                if value is not None:
                    values[key] = value
        values.update(os.environ)
        return values


class FakeEnvSource:
    """Dict-backed environment source for tests.

    >>> source = FakeEnvSource({"DEBUG": "1"})
    >>> source.read()["DEBUG"]
    '1'
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: dict[str, str] = dict(env or {})

    def read(self) -> Mapping[str, str]:
        return dict(self._env)

    # -- Mutation helpers for test setup ------------------------------------

    def set_env(self, key: str, value: str) -> None:
        self._env[key] = value

    def unset_env(self, key: str) -> None:
        self._env.pop(key, None)
