"""Directory-based config aggregation.

Collects the config objects defined by files in one directory into a single
frozen tree addressable by dotted path.
"""

from .._types import ConfigDirectoryNotFoundError, ConfigError, ConfigPathNotDirectoryError
from ._config import Config, config_key, load_config
from ._loaders import DEFAULT_LOADERS, FileLoader, LoadResult, load_json, load_python, load_toml, read_file

__all__ = [
    # Core
    "Config",
    "load_config",
    "config_key",
    # Loaders
    "DEFAULT_LOADERS",
    "FileLoader",
    "LoadResult",
    "read_file",
    "load_json",
    "load_toml",
    "load_python",
    # Errors
    "ConfigError",
    "ConfigDirectoryNotFoundError",
    "ConfigPathNotDirectoryError",
]
