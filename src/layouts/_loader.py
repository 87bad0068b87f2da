# pyright: reportAny=false, reportExplicitAny=false
"""Normalize registration input into ``Template`` records."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import orjson
import yaml
from pydantic import ValidationError

from layouts.exceptions import TemplateLoadError

from ._frontmatter import parse_frontmatter
from ._merge import deep_merge
from ._models import Template

if TYPE_CHECKING:
    from pathlib import Path

_MISSING: Any = object()

TEMPLATE_FILE_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json", ".toml")


def _split_content(record: dict[str, Any]) -> dict[str, Any]:
    """Move front matter from ``content`` into ``data``.

    Explicit ``data`` values win over front-matter values.
    """
    content = record.get("content")
    if not isinstance(content, str):
        return record

    frontmatter, body = parse_frontmatter(content)
    if frontmatter is None:
        return record

    explicit_data = record.get("data") or {}
    if not isinstance(explicit_data, Mapping):
        return record
    return {
        **record,
        "content": body,
        "data": deep_merge(frontmatter, explicit_data),
    }


def _build(name: object, record: Mapping[str, Any]) -> Template:
    if not isinstance(name, str) or not name:
        msg = f"Template name must be a non-empty string, got {name!r}"
        raise TemplateLoadError(msg)

    fields = _split_content({**record, "name": name})
    try:
        return Template.model_validate(fields)
    except ValidationError as e:
        msg = f"Invalid template '{name}': {e}"
        raise TemplateLoadError(msg, name=name) from e


def _from_value(name: object, value: object) -> Template:
    """Normalize a single ``name -> value`` pair."""
    if isinstance(value, Template):
        if value.name == name:
            return value
        return value.model_copy(update={"name": name})
    if isinstance(value, str):
        return _build(name, {"content": value})
    if isinstance(value, Mapping):
        return _build(name, value)
    msg = (
        f"Template '{name}' must be a string, mapping, or Template, "
        f"got {type(value).__name__}"
    )
    raise TemplateLoadError(msg, name=name if isinstance(name, str) else None)


def _from_many(templates: object) -> dict[str, Template]:
    """Normalize a mapping of many templates or a sequence of named records."""
    if isinstance(templates, Mapping):
        return {
            template.name: template
            for template in (_from_value(k, v) for k, v in templates.items())
        }

    if isinstance(templates, Sequence) and not isinstance(templates, str | bytes):
        result: dict[str, Template] = {}
        for item in templates:
            if isinstance(item, Template):
                result[item.name] = item
            elif isinstance(item, Mapping) and "name" in item:
                template = _from_value(item["name"], item)
                result[template.name] = template
            else:
                msg = f"Each template in a sequence needs a name, got {item!r}"
                raise TemplateLoadError(msg)
        return result

    msg = f"Cannot load templates from {type(templates).__name__}"
    raise TemplateLoadError(msg)


def normalize(
    name: object,
    layout_or_record: object = _MISSING,
    content: object = _MISSING,
    /,
) -> dict[str, Template]:
    """Turn registration arguments into a ``name -> Template`` mapping.

    Accepted shapes:

    - ``normalize(template)`` with a ``Template`` instance
    - ``normalize({"a": {...}, "b": "content"})`` for many templates at once
    - ``normalize([{"name": "a", ...}, ...])`` for a sequence of named records
    - ``normalize("a", {...})`` or ``normalize("a", template)`` for one record
    - ``normalize("a", "content")`` for content only
    - ``normalize("a", "layout-name", "content")`` for content and layout;
      ``None`` content registers the layout with empty content

    Content strings may begin with a YAML front-matter block; its keys are
    merged under the record's ``data``.

    Args:
        name: Template name, or the collection of templates.
        layout_or_record: Record, content, or layout reference.
        content: Template content when ``layout_or_record`` is a layout.

    Returns:
        Normalized templates keyed by name.

    Raises:
        TemplateLoadError: If the arguments do not match any accepted shape
            or a record fails validation.
    """
    if layout_or_record is _MISSING:
        if content is not _MISSING:
            msg = "Content given without a layout argument"
            raise TemplateLoadError(msg)
        if isinstance(name, Template):
            return {name.name: name}
        return _from_many(name)

    if not isinstance(name, str):
        msg = f"Template name must be a string, got {type(name).__name__}"
        raise TemplateLoadError(msg)

    if content is _MISSING:
        template = _from_value(name, layout_or_record)
        return {template.name: template}

    if content is None:
        content = ""
    if not isinstance(content, str):
        msg = f"Content for template '{name}' must be a string"
        raise TemplateLoadError(msg, name=name)
    if layout_or_record is not None and not isinstance(
        layout_or_record, str | bool | int
    ):
        msg = f"Layout for template '{name}' must be a name or a boolean"
        raise TemplateLoadError(msg, name=name)

    return {name: _build(name, {"content": content, "layout": layout_or_record})}


def _read_structured_file(path: Path) -> object:
    suffix = path.suffix.lower()
    if suffix not in TEMPLATE_FILE_SUFFIXES:
        msg = f"Unsupported template file type '{suffix}'"
        raise TemplateLoadError(msg, path=path)

    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Failed to read template file: {e}"
        raise TemplateLoadError(msg, path=path) from e

    try:
        if suffix == ".json":
            return orjson.loads(raw)
        if suffix == ".toml":
            return tomllib.loads(raw.decode("utf-8"))
        return yaml.safe_load(raw)
    except (
        orjson.JSONDecodeError,
        tomllib.TOMLDecodeError,
        yaml.YAMLError,
        UnicodeDecodeError,
    ) as e:
        msg = f"Failed to parse template file: {e}"
        raise TemplateLoadError(msg, path=path) from e


def load_templates_file(path: Path) -> dict[str, Template]:
    """Read a YAML, JSON, or TOML file holding a mapping of templates.

    Args:
        path: The file to read. Its top level must map names to records or
            content strings.

    Returns:
        Normalized templates keyed by name.

    Raises:
        TemplateLoadError: If the file cannot be read, parsed, or normalized.
    """
    data = _read_structured_file(path)
    if not isinstance(data, Mapping):
        msg = "Template file must contain a mapping of template names"
        raise TemplateLoadError(msg, path=path)

    try:
        return normalize(data)
    except TemplateLoadError as e:
        raise TemplateLoadError(str(e), name=e.name, path=path) from e
