"""Helpers shared by layouts commands."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from layouts import Layouts, load_templates_file
from layouts.cli._context import CLIContext
from layouts.cli._shared import ExitCode, abort
from layouts.exceptions import TemplateLoadError

TemplatesOption = Annotated[
    Path,
    Parameter(name=["--templates", "-t"], help="YAML, JSON, or TOML template file"),
]


def load_layouts(templates: Path) -> Layouts:
    """Create a ``Layouts`` instance holding the templates in ``templates``.

    Exits with LOAD_ERROR when the file is missing or invalid.
    """
    ctx = CLIContext.get_current()

    if not templates.is_file():
        abort(f"Template file not found: {templates}", ExitCode.LOAD_ERROR)

    try:
        loaded = load_templates_file(templates)
    except TemplateLoadError as e:
        abort(str(e), ExitCode.LOAD_ERROR)

    layouts = Layouts(ctx.config, logger=ctx.logger)
    _ = layouts.set_layout(loaded)
    if ctx.logger is not None:
        ctx.logger.debug("loaded templates", path=str(templates), count=len(loaded))
    return layouts
