"""Per-extension file loaders for the config directory aggregator.

A loader is a callable ``(Path) -> Any`` returning the config object held by
one file. ``read_file`` wraps a loader call into a ``LoadResult`` so the
aggregator can tell a skippable file apart from a fatal env failure.
"""

from __future__ import annotations

import importlib.util
import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Mapping

from .._types import UNDEFINED, EnvError

FileLoader = Callable[[Path], Any]


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a single config file.

    Attributes:
        path: The file that was read.
        value: The loaded config object (``UNDEFINED`` unless loaded).
        reason: Why the file was not loaded.
        error: The exception raised by the loader, if any.
        fatal: ``True`` when the error must abort the whole aggregation.
    """

    path: Path
    value: Any = UNDEFINED
    reason: str | None = None
    error: Exception | None = None
    fatal: bool = False

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def loaded(cls, path: Path, value: Any) -> LoadResult:
        return cls(path, value=value)

    @classmethod
    def skipped(cls, path: Path, reason: str, error: Exception | None = None) -> LoadResult:
        return cls(path, reason=reason, error=error)

    @classmethod
    def failed(cls, path: Path, error: Exception) -> LoadResult:
        return cls(path, reason=str(error), error=error, fatal=True)


# ---------------------------------------------------------------------------
# Built-in loaders
# ---------------------------------------------------------------------------


def load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as fp:
        return json.load(fp)


def load_toml(path: Path) -> Any:
    with path.open("rb") as fp:
        return tomllib.load(fp)


def load_python(path: Path) -> Any:
    """Execute a Python config file and return its config object.

    Returns the module's ``config`` attribute when defined, otherwise every
    public global that is not a module, class or function.
    """
    module_name = "_envguard_config_" + path.stem.replace(".", "_").replace("-", "_")
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import config file {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if hasattr(module, "config"):
        return module.config
    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_")
        and not isinstance(value, (ModuleType, type))
        and not callable(value)
    }


DEFAULT_LOADERS: Mapping[str, FileLoader] = {
    ".json": load_json,
    ".toml": load_toml,
    ".py": load_python,
}


def read_file(path: Path, loaders: Mapping[str, FileLoader]) -> LoadResult:
    """Load *path* with the loader registered for its extension.

    Env construction failures raised while loading are reported as fatal;
    every other exception only causes the file to be skipped.
    """
    loader = loaders.get(path.suffix.lower())
    if loader is None:
        return LoadResult.skipped(path, f"no loader for '{path.suffix}' files")
    try:
        value = loader(path)
    except EnvError as e:
        return LoadResult.failed(path, e)
    except Exception as e:
        return LoadResult.skipped(path, f"{type(e).__name__}: {e}", e)
    return LoadResult.loaded(path, value)
