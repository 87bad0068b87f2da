"""Layout rendering engine."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, cast

from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Mapping

    from jinja2 import Environment

    from layouts.config import LayoutsConfig


@dataclass(slots=True, frozen=True)
class RendererSettings:
    """Delimiters and flags for a layout renderer.

    Attributes:
        variable_delims: Interpolation delimiters, e.g. ``{{ title }}``.
        block_delims: Block statement delimiters, e.g. ``{% if x %}``.
        comment_delims: Comment delimiters.
        autoescape: Enable autoescaping (default: False for text templates).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
        strict_undefined: Raise on undefined variables.
    """

    variable_delims: tuple[str, str] = ("{{", "}}")
    block_delims: tuple[str, str] = ("{%", "%}")
    comment_delims: tuple[str, str] = ("{#", "#}")
    autoescape: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    strict_undefined: bool = False

    @classmethod
    def from_config(cls, config: LayoutsConfig) -> RendererSettings:
        """Build settings from ``layout_delims`` and the ``renderer`` section."""
        renderer = config.renderer
        return cls(
            variable_delims=config.layout_delims,
            block_delims=renderer.block_delims,
            comment_delims=renderer.comment_delims,
            autoescape=renderer.autoescape,
            trim_blocks=renderer.trim_blocks,
            lstrip_blocks=renderer.lstrip_blocks,
            keep_trailing_newline=renderer.keep_trailing_newline,
            strict_undefined=renderer.strict_undefined,
        )


class Renderer(Protocol):
    """Expands template syntax inside a layout string."""

    def __call__(
        self,
        template: str,
        context: Mapping[str, object],
        settings: RendererSettings,
    ) -> str: ...


@lru_cache(maxsize=16)
def create_environment(settings: RendererSettings) -> Environment:
    """Create a Jinja2 Environment for rendering layout strings.

    Environments are cached per settings, so repeated renders with the same
    delimiters share one environment and its template cache.

    Note: autoescape is disabled by default as layouts wrap arbitrary text.
    Set ``autoescape=True`` in the settings for HTML output.

    Args:
        settings: Delimiters and flags.

    Returns:
        Configured Jinja2 Environment.
    """
    from jinja2 import Environment, StrictUndefined, Undefined  # noqa: PLC0415

    return Environment(
        variable_start_string=settings.variable_delims[0],
        variable_end_string=settings.variable_delims[1],
        block_start_string=settings.block_delims[0],
        block_end_string=settings.block_delims[1],
        comment_start_string=settings.comment_delims[0],
        comment_end_string=settings.comment_delims[1],
        autoescape=settings.autoescape,  # noqa: S701
        trim_blocks=settings.trim_blocks,
        lstrip_blocks=settings.lstrip_blocks,
        keep_trailing_newline=settings.keep_trailing_newline,
        undefined=StrictUndefined if settings.strict_undefined else Undefined,
    )


class JinjaRenderer:
    """Default renderer backed by Jinja2.

    Template errors (``jinja2.TemplateSyntaxError``,
    ``jinja2.UndefinedError``, ...) propagate unchanged.
    """

    def __call__(
        self,
        template: str,
        context: Mapping[str, object],
        settings: RendererSettings,
    ) -> str:
        env = create_environment(settings)
        return cast("str", env.from_string(template).render(dict(context)))


def passthrough_renderer(
    template: str,
    context: Mapping[str, object],  # noqa: ARG001
    settings: RendererSettings,  # noqa: ARG001
) -> str:
    """Renderer that leaves layout content untouched."""
    return template


def render_template_string(
    template_str: str,
    context: BaseModel | Mapping[str, object],
    *,
    settings: RendererSettings | None = None,
) -> str:
    """Render a Jinja2 template string with context.

    Args:
        template_str: The Jinja2 template string.
        context: Pydantic model or dict for template variables.
        settings: Optional renderer settings; defaults to Jinja2's standard
            delimiters.

    Returns:
        Rendered string.
    """
    if isinstance(context, BaseModel):
        context_dict = context.model_dump()
    else:
        context_dict = dict(context)

    return JinjaRenderer()(template_str, context_dict, settings or RendererSettings())
