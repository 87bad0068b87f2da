# pyright: reportExplicitAny=false, reportAny=false
"""The ``Layouts`` facade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from layouts.config import LayoutsConfig

from ._falsey import assert_layout
from ._folder import fold_stack, render_layout
from ._loader import _MISSING
from ._logging import create_logger
from ._merge import get_merge_fn
from ._models import RenderResult
from ._renderer import JinjaRenderer, RendererSettings
from ._resolver import create_stack
from ._store import TemplateStore
from ._tags import make_regex, make_tag, replace_tag

if TYPE_CHECKING:
    import re
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from ._merge import MergeFn
    from ._models import FoldResult, Template
    from ._renderer import Renderer


class Layouts:
    """Register layouts and wrap content in their resolved stacks.

    Example:
        >>> layouts = Layouts()
        >>> _ = layouts.set_layout("base", None, "before\\n{% body %}\\nafter")
        >>> layouts.render("<div>content</div>", "base").content
        'before\\n<div>content</div>\\nafter'

    Args:
        config: Immutable options. Defaults to ``LayoutsConfig()``.
        store: Template store to use. A new store is created when omitted.
        renderer: Layout renderer. Defaults to ``JinjaRenderer``.
        merge_fn: Data merge function; overrides ``config.merge_strategy``.
        logger: Logger. Built from ``config.logging`` when omitted.
    """

    def __init__(
        self,
        config: LayoutsConfig | None = None,
        *,
        store: TemplateStore | None = None,
        renderer: Renderer | None = None,
        merge_fn: MergeFn | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._config: LayoutsConfig = config if config is not None else LayoutsConfig()
        if logger is None:
            logger = create_logger(
                level=self._config.logging.level.value,
                log_format=self._config.logging.format.value,  # type: ignore[arg-type]
                log_file=self._config.logging.file,
            )
        self._logger: FilteringBoundLogger = logger
        # An empty store is falsy, so test for None explicitly.
        self._store: TemplateStore = (
            store if store is not None else TemplateStore(logger=logger)
        )
        self._renderer: Renderer = renderer if renderer is not None else JinjaRenderer()
        self._merge_fn: MergeFn | None = merge_fn

    @property
    def config(self) -> LayoutsConfig:
        return self._config

    @property
    def store(self) -> TemplateStore:
        return self._store

    @property
    def merge_fn(self) -> MergeFn:
        """The configured merge function."""
        if self._merge_fn is not None:
            return self._merge_fn
        return get_merge_fn(self._config.merge_strategy)

    def option(self, key: str) -> Any:
        """Get a configuration value by name.

        Raises:
            AttributeError: If ``key`` is not a configuration field.
        """
        if key not in LayoutsConfig.model_fields:
            msg = f"Unknown option '{key}'"
            raise AttributeError(msg)
        return getattr(self._config, key)

    def with_options(self, **overrides: Any) -> Self:
        """Return a ``Layouts`` sharing this store with updated options.

        This instance and its configuration are left unchanged.
        """
        return type(self)(
            self._config.with_overrides(overrides),
            store=self._store,
            renderer=self._renderer,
            merge_fn=self._merge_fn,
            logger=self._logger,
        )

    def _options(self, overrides: dict[str, Any]) -> LayoutsConfig:
        return self._config.with_overrides(overrides)

    # Store

    def set_layout(
        self,
        name: object,
        layout_or_record: object = _MISSING,
        content: object = _MISSING,
        /,
    ) -> Self:
        """Register layouts on the store.

        Example:
            >>> layouts = Layouts()
            >>> _ = layouts.set_layout("a", "b", "<h1>Foo</h1>\\n{% body %}\\n")
            >>> layouts.get_layout("a").layout
            'b'

        Args:
            name: Layout name, or a mapping of many layouts.
            layout_or_record: Name of the layout this one uses, or a record.
            content: Layout content, containing a body placeholder.

        Returns:
            This instance, for chaining.
        """
        self._store.put(name, layout_or_record, content)
        return self

    def get_layout(
        self, name: str | None = None
    ) -> Template | Mapping[str, Template] | None:
        """Get a stored layout by name, or every layout when ``name`` is omitted."""
        return self._store.get(name)

    # Tags

    def make_tag(self, **overrides: Any) -> str:
        """The literal body placeholder, e.g. ``{% body %}``."""
        return make_tag(self._options(overrides).tag_config)

    def make_regex(self, flags: int = 0, **overrides: Any) -> re.Pattern[str]:
        """A compiled pattern matching the body placeholder."""
        return make_regex(self._options(overrides).tag_config, flags)

    def replace_tag(self, replacement: str, content: str, **overrides: Any) -> str:
        """Replace body placeholders in ``content`` without rendering anything.

        Example:
            >>> Layouts().replace_tag("ABC", "Before {% body %} After")
            'Before ABC After'
        """
        return replace_tag(replacement, content, self._options(overrides).tag_config)

    def assert_layout(
        self, value: object, default_layout: str | None = None
    ) -> str | None:
        """Return the layout name ``value`` refers to, or None for no layout."""
        return assert_layout(
            value, default_layout, keywords=self._config.falsey_keywords
        )

    # Resolution

    def create_stack(self, name: object = None, **overrides: Any) -> tuple[str, ...]:
        """Resolve the layout chain starting at ``name``, outermost first."""
        config = self._options(overrides)
        return create_stack(
            name,
            self._store,
            default_layout=config.default_layout,
            cycle_policy=config.cycle_policy,
            falsey_keywords=config.falsey_keywords,
            logger=self._logger,
        )

    def stack(self, name: object = None, **overrides: Any) -> FoldResult:
        """Resolve and flatten the layout chain starting at ``name``.

        Returns:
            The folded layouts, with the innermost body placeholder left in
            place, and the merged data of every layout in the chain.
        """
        config = self._options(overrides)
        stack = create_stack(
            name,
            self._store,
            default_layout=config.default_layout,
            cycle_policy=config.cycle_policy,
            falsey_keywords=config.falsey_keywords,
            logger=self._logger,
        )
        return fold_stack(
            stack,
            self._store,
            config,
            renderer=self._renderer,
            merge_fn=self._merge_fn,
            logger=self._logger,
        )

    def render_layout(
        self,
        content: str,
        context: Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> str:
        """Render layout syntax in ``content``, leaving body placeholders as they are.

        Configured ``locals`` are merged under ``context``.
        """
        config = self._options(overrides)
        tag_config = config.tag_config
        data = self.merge_fn(config.locals, context or {})
        return render_layout(
            content,
            data,
            tag=make_tag(tag_config),
            tag_name=tag_config.tag,
            regex=make_regex(tag_config),
            settings=RendererSettings.from_config(config),
            renderer=self._renderer,
        )

    def render(
        self, content: str, name: object = None, **overrides: Any
    ) -> RenderResult:
        """Wrap ``content`` in the layout chain starting at ``name``.

        Page content is inserted as-is; it is never rendered.

        Args:
            content: The page (or inner layout) content.
            name: The first layout. ``None`` or ``True`` selects the default
                layout; falsey values disable layouts.
            **overrides: Per-call configuration overrides.

        Returns:
            The wrapped content and merged data. When no layout applies, the
            content is returned unchanged.
        """
        folded = self.stack(name, **overrides)
        if folded.content is None:
            return RenderResult(content=content, data=folded.data, stack=())

        self._logger.debug("rendering", layout=name, stack=list(folded.stack))
        return RenderResult(
            content=replace_tag(content, folded.content, folded.regex),
            data=folded.data,
            stack=folded.stack,
        )
