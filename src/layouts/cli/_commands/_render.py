# pyright: reportUnusedCallResult=false, reportAny=false
# ruff: noqa: D415, TC003  # Path needed at runtime for cyclopts parameter parsing
"""The render command."""

import sys
from pathlib import Path
from typing import Annotated

import jinja2
from cyclopts import Parameter

from layouts import parse_frontmatter
from layouts.cli._context import OutputFormat
from layouts.cli._shared import ExitCode, abort, emit
from layouts.exceptions import LayoutCycleError

from ._helpers import TemplatesOption, load_layouts


def _read_page(page: str) -> str:
    if page == "-":
        return sys.stdin.read()
    try:
        return Path(page).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        abort(f"Cannot read page '{page}': {e}", ExitCode.IO_ERROR)


def render(
    page: Annotated[str, Parameter(allow_leading_hyphen=True)],
    /,
    *,
    templates: TemplatesOption,
    layout: Annotated[
        str | None,
        Parameter(help="First layout to apply (defaults to the page's front matter)"),
    ] = None,
    output_format: Annotated[
        OutputFormat, Parameter(name="--format", help="Output format")
    ] = OutputFormat.TEXT,
) -> None:
    """Wrap a page in its layouts

    Args:
        page: Path to the page file, or '-' to read stdin
        templates: File holding the layout templates
        layout: Name of the first layout to apply
        output_format: Output format (text, json, or yaml)
    """
    layouts = load_layouts(templates)

    frontmatter, body = parse_frontmatter(_read_page(page))
    page_data = dict(frontmatter or {})
    page_layout = page_data.pop("layout", None)
    start = layout if layout is not None else page_layout

    try:
        result = layouts.render(body, start)
    except LayoutCycleError as e:
        abort(str(e), ExitCode.VALIDATION_ERROR)
    except jinja2.TemplateError as e:
        abort(f"Failed to render layout: {e}", ExitCode.VALIDATION_ERROR)

    payload = {
        "content": result.content,
        "data": layouts.merge_fn(result.data, page_data),
        "stack": list(result.stack),
    }
    emit(payload, output_format, plain=lambda: result.content)
