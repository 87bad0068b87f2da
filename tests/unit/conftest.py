import os
from collections.abc import Iterator
from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _clean_layouts_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove LAYOUTS_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("LAYOUTS_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_cli_context() -> Iterator[None]:
    from layouts.cli import CLIContext

    yield
    CLIContext.reset()
