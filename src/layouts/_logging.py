"""Structlog loggers for layouts.

Loggers are built with :func:`structlog.wrap_logger` and never touch the
global structlog configuration, so embedding applications keep their own.
Output goes to stderr or to a log file, optionally size-rotated, as
key-value text or JSON lines.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]

DEFAULT_LOG_LEVEL: str = "warning"


def _level_number(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.WARNING)


def _resolve_level(level: str | None) -> int:
    """Pick the effective level.

    ``LAYOUTS_DEBUG`` wins over everything. An explicit ``level`` comes next,
    then ``LAYOUTS_LOG_LEVEL``, then warning.
    """
    if getenv("LAYOUTS_DEBUG"):
        return logging.DEBUG
    if level is not None:
        return _level_number(level)
    return _level_number(getenv("LAYOUTS_LOG_LEVEL", DEFAULT_LOG_LEVEL))


def _rotating_sink(path: Path, level: int, max_bytes: int, backup_count: int) -> object:
    # One private stdlib logger per file; structlog has already rendered the line.
    sink = logging.getLogger(f"layouts.{path.stem}.{id(path)}")
    sink.handlers.clear()
    sink.propagate = False
    sink.setLevel(level)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    sink.addHandler(handler)
    return sink


def _sink(
    log_file: str, level: int, max_bytes: int | None, backup_count: int | None
) -> object:
    if not log_file:
        return structlog.PrintLoggerFactory(file=sys.stderr)()

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    if max_bytes is not None and backup_count is not None:
        return _rotating_sink(path, level, max_bytes, backup_count)
    return structlog.WriteLoggerFactory(file=path.open("a"))()


def _processors(log_format: LogFormatType) -> list["Processor"]:
    chain: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        chain += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=False))
    return chain


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Build a standalone structlog logger.

    Args:
        level: Minimum level name (debug, info, warning, error). When omitted
            ``LAYOUTS_LOG_LEVEL`` applies. ``LAYOUTS_DEBUG`` forces debug.
        log_format: ``"text"`` for key-value lines, ``"json"`` for JSON lines.
        log_file: File to append to. Empty means stderr.
        max_bytes: Rotate the file once it reaches this size. Rotation needs
            ``backup_count`` as well.
        backup_count: Rotated files to keep.

    Returns:
        A filtering bound logger.
    """
    effective_level = _resolve_level(level)
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            _sink(log_file, effective_level, max_bytes, backup_count),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def get_logger(component: str = "") -> "FilteringBoundLogger":  # noqa: UP037
    """Return a stderr logger configured from the environment.

    ``component``, when given, is bound to every entry.
    """
    logger = create_logger()
    return logger.bind(component=component) if component else logger
