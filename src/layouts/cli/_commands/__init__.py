"""Layouts CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._inspect import list_layouts, stack
from ._render import render

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["list_layouts", "register_commands", "render", "stack"]


def register_commands(app: "App") -> None:
    app.command(render, name="render")
    app.command(stack, name="stack")
    app.command(list_layouts, name="list")
