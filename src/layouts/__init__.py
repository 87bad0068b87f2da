r"""Layouts: resolve and flatten nested layout templates.

A layout is a named template that wraps other content through a body
placeholder (``{% body %}`` by default). Layouts may themselves use a
layout, forming a stack that is folded into one string.

Basic usage:
    from layouts import Layouts

    layouts = Layouts()
    layouts.set_layout("base", None, "<html>\n{% body %}\n</html>")
    layouts.set_layout("post", "base", "<article>{% body %}</article>")

    result = layouts.render("Hello", "post")
    # result.content == "<html>\n<article>Hello</article>\n</html>"

With data and layout syntax:
    layouts.set_layout(
        "page",
        {"content": "<h1>{{ title }}</h1>\n{% body %}", "data": {"title": "Home"}},
    )
    result = layouts.render("Welcome", "page")
    # result.content == "<h1>Home</h1>\nWelcome"
    # result.data == {"title": "Home"}
"""

from ._falsey import DEFAULT_FALSEY_KEYWORDS, assert_layout, is_falsey
from ._folder import fold_stack, render_layout
from ._frontmatter import YAMLFrontmatter, YAMLValue, parse_frontmatter
from ._layouts import Layouts
from ._loader import load_templates_file, normalize
from ._logging import create_logger, get_logger
from ._merge import (
    MergeFn,
    MergeStrategy,
    deep_merge,
    defaults_merge,
    get_merge_fn,
    shallow_merge,
)
from ._models import (
    FoldResult,
    LayoutReference,
    ReferenceSource,
    RenderResult,
    Template,
)
from ._reference import resolve_reference
from ._renderer import (
    JinjaRenderer,
    Renderer,
    RendererSettings,
    passthrough_renderer,
    render_template_string,
)
from ._resolver import create_stack
from ._store import TemplateStore
from ._tags import TagConfig, make_regex, make_tag, replace_tag
from .config import CyclePolicy, LayoutsConfig, load_config
from .exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    LayoutCycleError,
    LayoutsError,
    TemplateLoadError,
)

__all__ = [
    "DEFAULT_FALSEY_KEYWORDS",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "CyclePolicy",
    "FoldResult",
    "JinjaRenderer",
    "LayoutCycleError",
    "LayoutReference",
    "Layouts",
    "LayoutsConfig",
    "LayoutsError",
    "MergeFn",
    "MergeStrategy",
    "ReferenceSource",
    "RenderResult",
    "Renderer",
    "RendererSettings",
    "TagConfig",
    "Template",
    "TemplateLoadError",
    "TemplateStore",
    "YAMLFrontmatter",
    "YAMLValue",
    "assert_layout",
    "create_logger",
    "create_stack",
    "deep_merge",
    "defaults_merge",
    "fold_stack",
    "get_logger",
    "get_merge_fn",
    "is_falsey",
    "load_config",
    "load_templates_file",
    "normalize",
    "parse_frontmatter",
    "passthrough_renderer",
    "render_layout",
    "render_template_string",
    "replace_tag",
    "resolve_reference",
    "shallow_merge",
]
