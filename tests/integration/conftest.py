import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from rich.console import Console

from layouts.cli import CLIContext, create_app

TEMPLATES_YAML = """\
base:
  content: "<html><title>{{ title }}</title>{% body %}</html>"
  data:
    title: Site
post:
  layout: base
  content: "<article>{% body %}</article>"
  data:
    author: me
"""


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _isolated_cli(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear LAYOUTS_* variables and the CLI context around each test."""
    for key in list(os.environ):
        if key.startswith("LAYOUTS_"):
            monkeypatch.delenv(key)
    yield
    CLIContext.reset()


@pytest.fixture
def templates_file(tmp_path: Path) -> Path:
    path = tmp_path / "templates.yaml"
    _ = path.write_text(TEMPLATES_YAML)
    return path


@pytest.fixture
def page_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.md"
    _ = path.write_text("---\nlayout: post\ntitle: Hello\n---\nHi there")
    return path


@pytest.fixture
def layouts_cli(console: Console) -> Callable[..., int]:
    """Run the CLI, including global options, and return the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str | Path) -> int:
        try:
            app.meta([str(arg) for arg in args])
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
