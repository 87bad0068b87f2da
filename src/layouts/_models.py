# pyright: reportExplicitAny=false
"""Template records and resolution results."""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

type LayoutValue = str | bool | int | None


class Template(BaseModel):
    """A named template stored in a ``TemplateStore``.

    Unknown keys are kept as extra fields so callers can attach their own
    metadata.

    Attributes:
        name: Unique template name.
        content: Raw template text, possibly containing a body placeholder.
        layout: Name of the next layout, an opt-out value, or None.
        data: Values merged into the render context.
        locals: Values merged into the render context before ``data``.
        options: Per-template options; ``options["layout"]`` is a secondary
            source for the layout reference.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="allow")

    name: str = Field(..., min_length=1)
    content: str = ""
    layout: LayoutValue = None
    data: dict[str, Any] = Field(default_factory=dict)
    locals: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def layout_reference(self) -> LayoutValue:
        """The layout to apply next: ``layout``, falling back to ``data["layout"]``."""
        if self.layout is not None:
            return self.layout
        value: LayoutValue = self.data.get("layout")
        return value


class ReferenceSource(StrEnum):
    """Where a template's layout reference was found."""

    EXPLICIT = "explicit"
    OPTIONS = "options"
    LOCALS = "locals"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class LayoutReference:
    """A layout reference and the field it came from."""

    value: LayoutValue
    source: ReferenceSource

    @property
    def found(self) -> bool:
        return self.source is not ReferenceSource.NONE


@dataclass(frozen=True, slots=True)
class FoldResult:
    """Outcome of folding a layout stack.

    Attributes:
        content: The flattened layouts with the innermost body placeholder
            still in place, or None for an empty stack.
        data: The merged context.
        tag: The body placeholder literal used while folding.
        regex: The compiled body placeholder pattern.
    """

    content: str | None
    data: dict[str, Any]
    tag: str
    regex: re.Pattern[str] = field(repr=False)
    stack: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Final content wrapped in its layouts, plus the merged context."""

    content: str
    data: dict[str, Any]
    stack: tuple[str, ...] = ()
