"""Shared test fixtures for layouts tests."""

import pytest
from rich.console import Console

from layouts import Layouts, LayoutsConfig


@pytest.fixture
def layouts() -> Layouts:
    """A Layouts instance with default options and an empty store."""
    return Layouts(LayoutsConfig())


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
