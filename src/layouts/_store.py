# pyright: reportExplicitAny=false
"""In-memory template store."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, overload

from ._loader import _MISSING, normalize
from ._logging import get_logger
from ._merge import deep_merge
from ._reference import resolve_reference

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from structlog.typing import FilteringBoundLogger

    from ._models import Template


class TemplateStore:
    """Mapping of template names to ``Template`` records.

    Registering a name that already exists deep-merges the new record into
    the stored one. Records live as long as the store; there is no eviction.
    """

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        self._templates: dict[str, Template] = {}
        self._logger: FilteringBoundLogger = logger or get_logger("store")

    def put(
        self,
        name: object,
        layout_or_record: object = _MISSING,
        content: object = _MISSING,
        /,
    ) -> TemplateStore:
        """Register one or more templates.

        Accepts every shape ``layouts._loader.normalize`` accepts:
        ``put("a", "base", "content")``, ``put("a", {"content": ...})``,
        ``put("a", "content")``, ``put({"a": ..., "b": ...})`` or
        ``put(template)``.

        The effective layout of each template is taken from its ``layout``
        field, then ``options["layout"]``, then ``locals["layout"]``.

        Args:
            name: Template name, or a collection of templates.
            layout_or_record: Record, content, or layout reference.
            content: Template content when ``layout_or_record`` is a layout.

        Returns:
            This store, for chaining.

        Raises:
            TemplateLoadError: If the input cannot be normalized.
        """
        for key, template in normalize(name, layout_or_record, content).items():
            reference = resolve_reference(template)
            if reference.found and template.layout != reference.value:
                template = template.model_copy(update={"layout": reference.value})
            self._logger.debug(
                "registering template",
                name=key,
                layout=reference.value,
                layout_source=reference.source.value,
            )
            self._templates[key] = self._merge(self._templates.get(key), template)

        return self

    @staticmethod
    def _merge(existing: Template | None, incoming: Template) -> Template:
        if existing is None:
            return incoming
        merged: dict[str, Any] = deep_merge(
            existing.model_dump(),
            incoming.model_dump(exclude_unset=True),
        )
        return type(existing).model_validate(merged)

    @overload
    def get(self, name: None = None) -> Mapping[str, Template]: ...

    @overload
    def get(self, name: str) -> Template | None: ...

    def get(self, name: str | None = None) -> Template | Mapping[str, Template] | None:
        """Look up a template by name.

        Args:
            name: The template name. When omitted, all templates are returned.

        Returns:
            The template or None when it is missing, or a read-only view of
            the whole store when ``name`` is omitted.
        """
        if name is None:
            return MappingProxyType(self._templates)
        return self._templates.get(name)

    def names(self) -> tuple[str, ...]:
        """Registered template names in insertion order."""
        return tuple(self._templates)

    def clear(self) -> None:
        self._templates.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __repr__(self) -> str:
        return f"TemplateStore(names={list(self._templates)!r})"
