"""Locating the layout reference of a template."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._models import LayoutReference, ReferenceSource

if TYPE_CHECKING:
    from ._models import Template


def resolve_reference(template: Template) -> LayoutReference:
    """Find the layout a template asks for.

    Sources are checked in order, first match wins:

    1. the template's own ``layout`` field
    2. ``options["layout"]``
    3. ``locals["layout"]``

    A ``None`` value counts as absent; ``False`` and other opt-out values are
    returned as found so they keep overriding lower-precedence sources.

    Args:
        template: The template to inspect.

    Returns:
        The reference with the source it was taken from, or a reference with
        ``ReferenceSource.NONE`` when no source defines one.
    """
    if template.layout is not None:
        return LayoutReference(template.layout, ReferenceSource.EXPLICIT)

    candidates = (
        (template.options, ReferenceSource.OPTIONS),
        (template.locals, ReferenceSource.LOCALS),
    )
    for mapping, source in candidates:
        value = mapping.get("layout")
        if value is not None:
            return LayoutReference(value, source)

    return LayoutReference(None, ReferenceSource.NONE)
