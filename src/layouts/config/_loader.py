# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

from __future__ import annotations

import json
import os
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from layouts._merge import deep_merge
from layouts.exceptions import ConfigLoadError, ConfigValidationError

from ._models import LayoutsConfig

if TYPE_CHECKING:
    from pathlib import Path

ENV_PREFIX: str = "LAYOUTS_"

# Environment variables that control logging directly and are not config keys
_RESERVED_ENV_KEYS: frozenset[str] = frozenset({"DEBUG", "LOG_LEVEL"})


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Load ``path`` as TOML.

    Raises:
        FileNotFoundError: When ``path`` is missing.
        ConfigLoadError: When the contents are not valid TOML.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        # lineno/colno are only set on Python 3.14+
        raise ConfigLoadError(
            f"Invalid TOML in config file: {e}",
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def read_config_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read layouts settings from a TOML file.

    A ``pyproject.toml`` contributes its ``[tool.layouts]`` table; any other
    file is read whole.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    data = read_toml_file(path)
    if path.name != "pyproject.toml":
        return data

    section = data.get("tool", {}).get("layouts", {})
    if not isinstance(section, dict):
        msg = "[tool.layouts] must be a table"
        raise ConfigLoadError(msg, path=path)
    return section


def parse_env_vars(
    prefix: str = ENV_PREFIX,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect ``LAYOUTS_*`` variables as nested config values.

    A double underscore separates nesting levels, so
    ``LAYOUTS_RENDERER__TRIM_BLOCKS=true`` becomes
    ``{"renderer": {"trim_blocks": True}}``. ``LAYOUTS_DEBUG`` and
    ``LAYOUTS_LOG_LEVEL`` belong to the logger and are skipped.
    """
    found: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for name, raw in os.environ.items():
        suffix = name.removeprefix(prefix)
        if suffix == name or not suffix or suffix in _RESERVED_ENV_KEYS:
            continue
        dotted = suffix.lower().replace("__", ".")
        set_nested_key(found, dotted, parse_string_value(raw))

    return found


def _looks_like_json(value: str) -> bool:
    return (value[:1], value[-1:]) in {("[", "]"), ("{", "}")}


def parse_string_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Coerce an environment string into the value it spells.

    ``true``/``false`` in any case become booleans, digits become ``int``,
    dotted numbers become ``float``, and bracketed text that parses as JSON
    becomes a list or dict. Everything else stays a string.

    Examples:
        >>> parse_string_value("FALSE")
        False
        >>> parse_string_value("3")
        3
        >>> parse_string_value('["{%", "%}"]')
        ['{%', '%}']
    """
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"

    number = float if "." in value else int
    try:
        return number(value)
    except ValueError:
        pass

    if _looks_like_json(value):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Assign ``value`` at the dotted ``key_path`` (``renderer.delimiters``) in ``d``.

    Missing or non-dict intermediate entries are replaced by empty dicts.
    """
    *parents, leaf = key_path.split(".")
    node = d
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


def _validation_error(e: ValidationError, source: str | None) -> ConfigValidationError:
    first = e.errors()[0]
    key = ".".join(str(part) for part in first["loc"])
    return ConfigValidationError(
        f"Invalid configuration value for '{key}': {first['msg']}",
        key=key,
        value=first.get("input"),
        expected=first["type"],
        source=source,
    )


def config_from_dict(
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    *,
    source: str | None = None,
) -> LayoutsConfig:
    """Validate a configuration dictionary.

    Raises:
        ConfigValidationError: If a value fails validation.
    """
    try:
        return LayoutsConfig.model_validate(data)
    except ValidationError as e:
        raise _validation_error(e, source) from e


def load_config(
    path: Path | None = None,
    *,
    env: bool = True,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> LayoutsConfig:
    """Load configuration from its sources.

    Sources are merged lowest to highest precedence: model defaults, the
    config file, ``LAYOUTS_*`` environment variables, then ``overrides``.

    Args:
        path: Optional ``layouts.toml`` or ``pyproject.toml`` to read.
        env: Whether to read environment variables.
        overrides: Explicit values, e.g. from CLI flags.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigLoadError: If the file cannot be parsed.
        ConfigValidationError: If the merged values fail validation.
    """
    merged: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source: str | None = None

    if path is not None:
        merged = deep_merge(merged, read_config_file(path))
        source = str(path)
    if env:
        env_values = parse_env_vars()
        if env_values:
            merged = deep_merge(merged, env_values)
            source = "env" if source is None else f"{source}+env"
    if overrides:
        merged = deep_merge(merged, overrides)

    return config_from_dict(merged, source=source)
