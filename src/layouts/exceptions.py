"""Layouts exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class LayoutsError(Exception):
    """Base exception for layouts errors."""


class TemplateLoadError(LayoutsError, ValueError):
    """Raised when templates cannot be normalized or read.

    Attributes:
        name: The template name being registered, if known.
        path: The template file being read, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and registration context.

        Args:
            message: Human-readable error message.
            name: The template name being registered.
            path: The file the templates were read from.
        """
        super().__init__(message)
        self.name: str | None = name
        self.path: Path | None = path


class LayoutCycleError(LayoutsError):
    """Raised when a layout chain references a layout already in the stack.

    Only raised when the resolver runs with the ``error`` cycle policy.

    Attributes:
        name: The layout name that was seen twice.
        stack: The stack resolved before the repeat, outermost first.
    """

    def __init__(self, message: str, *, name: str, stack: tuple[str, ...]) -> None:
        """Initialize with error message and the offending chain."""
        super().__init__(message)
        self.name: str = name
        self.stack: tuple[str, ...] = stack


class ConfigError(LayoutsError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
