# pyright: reportExplicitAny=false
"""Exit codes, output writers, and error reporting for layouts commands.

Commands build plain payloads (dicts of names, stacks, and data) and hand
them to :func:`emit`, which serializes them for the requested format.
Failures go through :func:`abort`, which reports on stderr and exits.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

from ._context import OutputFormat

if TYPE_CHECKING:
    from rich.console import Console

Payload = dict[str, Any]

__all__ = [
    "ExitCode",
    "Payload",
    "abort",
    "dump_json",
    "dump_yaml",
    "emit",
    "markdown_table",
    "stderr_console",
]


class ExitCode(IntEnum):
    """Process exit status for layouts commands."""

    SUCCESS = 0
    # Config or templates file missing or malformed
    LOAD_ERROR = 1
    # Layout cycle under the error policy, or a template that fails to render
    VALIDATION_ERROR = 2
    # Named layout is not registered
    NOT_FOUND = 3
    # Page file could not be read
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def dump_json(payload: Payload, *, pretty: bool = True) -> str:
    """Serialize ``payload`` with orjson, indented unless ``pretty`` is off."""
    import orjson

    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(payload, option=option).decode()


def dump_yaml(payload: Payload) -> str:
    """Serialize ``payload`` as block-style YAML in insertion order."""
    import yaml

    return yaml.safe_dump(
        payload, sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def markdown_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Lay out ``rows`` under ``headers`` as a Markdown table.

    Args:
        headers: Column titles.
        rows: One sequence of cell strings per row, in column order.

    Returns:
        The rendered table.
    """
    from pytablewriter import MarkdownTableWriter

    writer = MarkdownTableWriter(
        headers=list(headers), value_matrix=[list(row) for row in rows], margin=1
    )
    return writer.dumps()


def emit(
    payload: Payload,
    output_format: OutputFormat,
    *,
    plain: Callable[[], str] | None = None,
) -> None:
    """Write ``payload`` to stdout in ``output_format``.

    JSON and YAML serialize the payload directly. For ``text`` and ``table``
    the command supplies ``plain``, which builds the human-readable form;
    without it those formats fall back to YAML.
    """
    if output_format is OutputFormat.JSON:
        text = dump_json(payload) + "\n"
    elif output_format is OutputFormat.YAML or plain is None:
        text = dump_yaml(payload)
    else:
        text = plain()
    _ = sys.stdout.write(text)


def stderr_console() -> Console:
    from rich.console import Console

    return Console(stderr=True)


def abort(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report ``message`` on stderr and exit the process with ``code``.

    Rich markup in ``message`` is escaped, so layout names and stacks such
    as ``['b', 'a']`` print as written.

    Raises:
        SystemExit: Always.
    """
    from rich.markup import escape

    target = console if console is not None else stderr_console()
    target.print(
        f"[bold red]error[/bold red] {escape(message)}", highlight=False, soft_wrap=True
    )
    raise SystemExit(code)
