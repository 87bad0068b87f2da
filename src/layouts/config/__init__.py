"""Layouts configuration.

Example:
    >>> from layouts.config import load_config
    >>> config = load_config(env=False, overrides={"default_layout": "base"})
    >>> config.default_layout
    'base'
"""

from layouts.exceptions import ConfigError, ConfigLoadError, ConfigValidationError

from ._loader import (
    ENV_PREFIX,
    config_from_dict,
    load_config,
    parse_env_vars,
    parse_string_value,
    read_config_file,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    DEFAULT_OMIT_KEYS,
    CyclePolicy,
    LayoutsConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RendererConfig,
)

__all__ = [
    "DEFAULT_OMIT_KEYS",
    "ENV_PREFIX",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "CyclePolicy",
    "LayoutsConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RendererConfig",
    "config_from_dict",
    "load_config",
    "parse_env_vars",
    "parse_string_value",
    "read_config_file",
    "read_toml_file",
    "set_nested_key",
]
