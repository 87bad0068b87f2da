"""Layout stack resolution."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from layouts.config import CyclePolicy
from layouts.exceptions import LayoutCycleError

from ._falsey import DEFAULT_FALSEY_KEYWORDS, assert_layout
from ._logging import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from ._store import TemplateStore


def create_stack(
    name: object,
    store: TemplateStore,
    *,
    default_layout: str | None = None,
    cycle_policy: CyclePolicy = CyclePolicy.VISITED,
    falsey_keywords: Iterable[str] = DEFAULT_FALSEY_KEYWORDS,
    logger: FilteringBoundLogger | None = None,
) -> tuple[str, ...]:
    """Build the chain of layouts that wraps a template.

    Starting at ``name``, each layout's own ``layout`` reference (or
    ``data["layout"]``) is followed until a reference disables layouts, names
    a missing template, or repeats a name. A layout resolving to itself ends
    the chain; so do missing names. Any other repeat ends the chain with a
    warning, or raises under ``CyclePolicy.ERROR``.

    Args:
        name: The first layout reference (a name, or a falsey/default value).
        store: Templates to resolve names against.
        default_layout: Name used when a reference asks for the default.
        cycle_policy: How repeated names are detected and handled.
        falsey_keywords: Strings that disable a layout.
        logger: Optional logger for resolution details.

    Returns:
        Layout names, outermost first. A page using ``a`` where ``a`` uses
        ``b`` yields ``("b", "a")``.

    Raises:
        LayoutCycleError: If a name repeats and ``cycle_policy`` is ERROR.
    """
    log = logger or get_logger("resolver")
    keywords = tuple(falsey_keywords)

    current = assert_layout(name, default_layout, keywords=keywords)
    stack: list[str] = []
    previous: str | None = None

    while current is not None:
        if current == previous:
            break
        if current in stack:
            chain = tuple(reversed(stack))
            if cycle_policy is CyclePolicy.ERROR:
                msg = f"Layout '{current}' appears twice in the chain {list(chain)}"
                raise LayoutCycleError(msg, name=current, stack=chain)
            log.warning("layout cycle detected", layout=current, stack=list(chain))
            break

        template = store.get(current)
        if template is None:
            log.debug("layout not found", layout=current)
            break

        stack.append(current)
        previous = current
        current = assert_layout(
            template.layout_reference, default_layout, keywords=keywords
        )

    result = tuple(reversed(stack))
    log.debug("created stack", start=name, stack=list(result))
    return result
