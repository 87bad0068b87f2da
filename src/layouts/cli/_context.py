# pyright: reportUnusedCallResult=false
"""Per-invocation state shared between the launcher and the commands.

The launcher resolves global options (``--config``, ``--verbose``) into a
:class:`CLIContext` before dispatching. Commands read it back with
:meth:`CLIContext.get_current` instead of taking those options themselves.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from layouts.config import LayoutsConfig, load_config

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger


class OutputFormat(StrEnum):
    """Output formats accepted by ``--format``."""

    TEXT = "text"
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


_active: ContextVar[CLIContext | None] = ContextVar("layouts_cli", default=None)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Resolved global options for one CLI invocation.

    Attributes:
        config: Options every ``Layouts`` built by a command starts from.
        verbose: Whether debug logging goes to stderr.
        config_path: The ``--config`` file, when one was given.
        logger: Logger handed to each ``Layouts`` instance.
    """

    config: LayoutsConfig = field(repr=False)
    verbose: bool = False
    config_path: Path | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Return the active context.

        Outside a CLI run this is a fresh context whose config comes from
        ``LAYOUTS_*`` environment variables alone.
        """
        active = _active.get()
        return active if active is not None else cls(config=load_config())

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        _active.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Forget the active context."""
        _active.set(None)
