# pyright: reportAny=false, reportExplicitAny=false
"""Merge strategies for template data and store records."""

from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum
from typing import Any

type MergeFn = Callable[[Mapping[str, Any], Mapping[str, Any]], dict[str, Any]]


class MergeStrategy(StrEnum):
    """Built-in merge policies.

    DEEP and SHALLOW let later values win; DEFAULTS keeps the earliest value
    for every key.
    """

    DEEP = "deep"
    SHALLOW = "shallow"
    DEFAULTS = "defaults"


def copy_value(value: Any) -> Any:
    """Create a deep copy of a dict/list value.

    Args:
        value: The value to copy.

    Returns:
        A copy sharing no dicts or lists with the original.
    """
    if isinstance(value, Mapping):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two mappings, returning a new dictionary.

    Merge rules:
        - Mappings are recursively merged
        - Lists are replaced entirely (no element-wise merge)
        - Scalars are replaced with the override value
        - Keys missing from ``override`` keep their ``base`` values

    Args:
        base: Lower-precedence mapping.
        override: Higher-precedence mapping.

    Returns:
        Merged dictionary. Neither input is modified.
    """
    result: dict[str, Any] = {k: copy_value(v) for k, v in base.items()}

    for key, override_val in override.items():
        base_val = result.get(key)
        if isinstance(base_val, Mapping) and isinstance(override_val, Mapping):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = copy_value(override_val)

    return result


def shallow_merge(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    """Top-level merge where ``override`` wins."""
    return {**base, **override}


def defaults_merge(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    """Deep merge where values already in ``base`` win."""
    return deep_merge(override, base)


_STRATEGIES: dict[MergeStrategy, MergeFn] = {
    MergeStrategy.DEEP: deep_merge,
    MergeStrategy.SHALLOW: shallow_merge,
    MergeStrategy.DEFAULTS: defaults_merge,
}


def get_merge_fn(strategy: MergeStrategy | str) -> MergeFn:
    """Look up the merge function for a built-in strategy.

    Raises:
        ValueError: If ``strategy`` is not a known strategy name.
    """
    return _STRATEGIES[MergeStrategy(strategy)]


def merge_all(
    sources: Iterable[Mapping[str, Any] | None],
    merge_fn: MergeFn = deep_merge,
) -> dict[str, Any]:
    """Fold several mappings together from left to right, skipping ``None``."""
    result: dict[str, Any] = {}
    for source in sources:
        if source:
            result = merge_fn(result, source)
    return result


def omit(data: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``data`` without ``keys``."""
    excluded = set(keys)
    return {k: v for k, v in data.items() if k not in excluded}
