from ._types import ConfigError, EnvError, EnvguardError
from ._version import __version__
from .config import Config, load_config
from .env import Env, FieldRule, Kind

__all__ = [
    "__version__",
    "Env",
    "FieldRule",
    "Kind",
    "Config",
    "load_config",
    "EnvguardError",
    "EnvError",
    "ConfigError",
]
