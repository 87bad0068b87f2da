# pyright: reportExplicitAny=false
"""Folding a layout stack into a single string."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._logging import get_logger
from ._merge import copy_value, deep_merge, get_merge_fn, merge_all, omit
from ._models import FoldResult
from ._renderer import JinjaRenderer, RendererSettings
from ._tags import make_regex, make_tag, replace_tag

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence

    from structlog.typing import FilteringBoundLogger

    from layouts.config import LayoutsConfig

    from ._merge import MergeFn
    from ._models import Template
    from ._renderer import Renderer
    from ._store import TemplateStore

# Stands in for body placeholders while a layout is rendered
_BODY_SENTINEL = "\x00layouts:body\x00"


def template_data(template: Template, omit_keys: Sequence[str]) -> dict[str, Any]:
    """Context contributed by a template.

    ``locals`` then ``data``, with ``omit_keys`` removed.
    """
    return omit(merge_all((template.locals, template.data), deep_merge), omit_keys)


def render_layout(
    content: str,
    context: dict[str, Any],
    *,
    tag: str,
    tag_name: str,
    regex: re.Pattern[str],
    settings: RendererSettings,
    renderer: Renderer,
) -> str:
    """Render a layout string while keeping its body placeholders intact.

    Placeholders are swapped for a sentinel before rendering and restored
    afterwards, so the placeholder delimiters may overlap the renderer's own.
    ``tag_name`` is bound to the placeholder literal in the render context.
    """
    shielded = regex.sub(lambda _: _BODY_SENTINEL, content)
    rendered = renderer(shielded, {**context, tag_name: tag}, settings)
    return rendered.replace(_BODY_SENTINEL, tag)


def fold_stack(
    stack: Sequence[str],
    store: TemplateStore,
    config: LayoutsConfig,
    *,
    renderer: Renderer | None = None,
    merge_fn: MergeFn | None = None,
    logger: FilteringBoundLogger | None = None,
) -> FoldResult:
    """Flatten a layout stack into one string and one context.

    Layouts are applied outermost first. Each step replaces the body
    placeholders of the content built so far with the next layout's raw
    content, merges that layout's data into the running context, then
    renders the result. The innermost body placeholder survives, ready to
    receive the page content.

    Args:
        stack: Layout names as returned by ``create_stack``.
        store: Templates the names refer to.
        config: Tag, renderer, and merge settings.
        renderer: Layout renderer. Defaults to ``JinjaRenderer``.
        merge_fn: Data merge function. Defaults to ``config.merge_strategy``.
        logger: Optional logger.

    Returns:
        The folded content (None for an empty stack) and merged context.
    """
    log = logger or get_logger("folder")
    tag_config = config.tag_config
    tag = make_tag(tag_config)
    regex = make_regex(tag_config)
    settings = RendererSettings.from_config(config)
    render = renderer or JinjaRenderer()
    merge = merge_fn if merge_fn is not None else get_merge_fn(config.merge_strategy)

    data: dict[str, Any] = copy_value(config.locals)
    content: str | None = None

    for name in stack:
        template = store.get(name)
        if template is None:
            log.debug("layout removed from store before folding", layout=name)
            continue

        accumulated = tag if content is None else content
        data = merge(data, template_data(template, config.omit_keys))
        nested = replace_tag(template.content, accumulated, regex)

        if config.renderer.enabled:
            content = render_layout(
                nested,
                data,
                tag=tag,
                tag_name=tag_config.tag,
                regex=regex,
                settings=settings,
                renderer=render,
            )
        else:
            content = nested
        log.debug("folded layout", layout=name)

    return FoldResult(
        content=content,
        data=data,
        tag=tag,
        regex=regex,
        stack=tuple(stack),
    )
