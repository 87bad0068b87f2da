# pyright: reportExplicitAny=false
"""Configuration models.

This module defines the immutable configuration objects passed into every
layouts operation.
"""

from enum import StrEnum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from layouts._falsey import DEFAULT_FALSEY_KEYWORDS
from layouts._merge import MergeStrategy, deep_merge
from layouts._tags import TagConfig

DEFAULT_OMIT_KEYS: tuple[str, ...] = (
    "merge_fn",
    "mergeFn",
    "content",
    "delims",
    "layout",
)


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class CyclePolicy(StrEnum):
    """How the resolver reacts to a layout appearing twice in one chain.

    A layout resolving to itself (directly, or through the default layout)
    always ends the chain quietly. For longer cycles, VISITED stops at the
    first name already in the stack and ERROR raises ``LayoutCycleError``.
    """

    VISITED = "visited"
    ERROR = "error"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class RendererConfig(BaseModel):
    """Settings for the Jinja2 environment that renders layouts.

    Attributes:
        enabled: Render layout content at each fold step. When False the
            layouts are only nested, never rendered.
        block_delims: Jinja2 block statement delimiters.
        comment_delims: Jinja2 comment delimiters.
        autoescape: Enable autoescaping (off for text templates).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
        strict_undefined: Raise on undefined variables instead of rendering
            them as empty strings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = True
    block_delims: tuple[str, str] = ("{%", "%}")
    comment_delims: tuple[str, str] = ("{#", "#}")
    autoescape: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    strict_undefined: bool = False


class LayoutsConfig(BaseModel):
    """Options for resolving and flattening layouts.

    Attributes:
        locals: Initial render context.
        omit_keys: Keys removed from template data before it is merged. Both
            ``merge_fn`` and the camel-case ``mergeFn`` are listed by default.
        merge_strategy: Built-in policy for merging template data.
        layout_delims: Interpolation delimiters of the layout renderer.
        default_tag: Shape of the body placeholder.
        delims: Overrides ``default_tag.delims`` when set.
        tag: Overrides ``default_tag.tag`` when set.
        default_layout: Layout used when a reference asks for the default.
        cycle_policy: Reaction to a layout appearing twice in a chain.
        falsey_keywords: Strings that disable a layout.
        renderer: Layout renderer settings.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    locals: dict[str, Any] = Field(default_factory=dict)
    omit_keys: tuple[str, ...] = DEFAULT_OMIT_KEYS
    merge_strategy: MergeStrategy = MergeStrategy.DEEP
    layout_delims: tuple[str, str] = ("{{", "}}")
    default_tag: TagConfig = Field(default_factory=TagConfig)
    delims: tuple[str, str] | None = None
    tag: str | None = None
    default_layout: str | None = None
    cycle_policy: CyclePolicy = CyclePolicy.VISITED
    falsey_keywords: tuple[str, ...] = DEFAULT_FALSEY_KEYWORDS
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def tag_config(self) -> TagConfig:
        """The body placeholder shape with ``delims``/``tag`` overrides applied."""
        update: dict[str, Any] = {}
        if self.delims is not None:
            update["delims"] = self.delims
        if self.tag is not None:
            update["tag"] = self.tag
        if not update:
            return self.default_tag
        return self.default_tag.model_copy(update=update)

    def with_overrides(self, overrides: dict[str, Any] | None = None, /) -> Self:
        """Return a validated copy with ``overrides`` deep-merged in.

        Args:
            overrides: Partial configuration values, nested like the model.

        Returns:
            This instance when there is nothing to override, otherwise a new
            configuration. The original is never modified.
        """
        if not overrides:
            return self
        merged = deep_merge(self.model_dump(), overrides)
        return type(self).model_validate(merged)
