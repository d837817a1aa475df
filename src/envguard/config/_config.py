"""Directory-based config aggregation.

Every supported file in a directory contributes one top-level key to a frozen
tree::

    config/
        database.json         -> config.get("database.host")
        cache.config.toml     -> config.get("cache.ttl")
        app.py                -> config.get("app.port")

Files are read in name order. Unreadable files are skipped with a warning, but
an ``EnvError`` raised while a Python config builds its ``Env`` aborts the
whole load.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from .._tree import freeze, resolve_dot_path
from .._types import ConfigDirectoryNotFoundError, ConfigPathNotDirectoryError, _Undefined
from ._loaders import DEFAULT_LOADERS, FileLoader, read_file

logger = logging.getLogger(__name__)


class Config:
    """Frozen config tree with dotted-path lookup."""

    def __init__(self, tree: Mapping[str, Any]) -> None:
        self._root: Mapping[str, Any] = freeze(dict(tree))

    @property
    def root(self) -> Mapping[str, Any]:
        return self._root

    def get(self, path: str, fallback: Any = None) -> Any:
        """Return the value at dotted *path*, or *fallback* if it is not set."""
        value = resolve_dot_path(self._root, path)
        if isinstance(value, _Undefined):
            return fallback
        return value

    def keys(self) -> Iterator[str]:
        return iter(self._root)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return not isinstance(resolve_dot_path(self._root, path), _Undefined)

    def __repr__(self) -> str:
        return f"<Config keys={list(self._root)!r}>"


def config_key(file_name: str) -> str:
    """Return the tree key for *file_name*.

    The last extension is removed and any ``config`` segment is dropped:
    ``"example.config.py"`` -> ``"example"``.
    """
    parts = file_name.split(".")[:-1]
    return ".".join(part for part in parts if part != "config")


def load_config(
    path: str | os.PathLike[str],
    *,
    loaders: Mapping[str, FileLoader] | None = None,
) -> Config:
    """Load every config file in directory *path* into a new ``Config``.

    Args:
        path: Directory holding the config files.
        loaders: Extra or replacement loaders keyed by extension (``".yaml"``).

    Raises:
        ConfigDirectoryNotFoundError: *path* does not exist.
        ConfigPathNotDirectoryError: *path* is not a directory.
        EnvError: a Python config failed to build its ``Env``.
    """
    directory = Path(path)
    if not directory.exists():
        raise ConfigDirectoryNotFoundError(str(path))
    if not directory.is_dir():
        raise ConfigPathNotDirectoryError(str(path))

    active_loaders = {**DEFAULT_LOADERS, **(loaders or {})}
    tree: dict[str, Any] = {}

    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.name.startswith(".") or not entry.is_file():
            continue
        key = config_key(entry.name)
        if not key:
            continue

        result = read_file(entry, active_loaders)
        if result.fatal:
            raise result.error  # type: ignore[misc]
        if not result.ok:
            logger.warning("Skipping config file %s: %s", entry.name, result.reason)
            continue

        logger.debug("Loaded config file %s as '%s'", entry.name, key)
        tree[key] = result.value

    logger.info("Loaded %d config entries from %s", len(tree), directory)
    return Config(tree)
