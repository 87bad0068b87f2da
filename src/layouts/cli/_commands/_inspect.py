# pyright: reportUnusedCallResult=false
# ruff: noqa: D415
"""Commands for inspecting registered layouts."""

from typing import Annotated

from cyclopts import Parameter

from layouts.cli._context import OutputFormat
from layouts.cli._shared import ExitCode, abort, emit, markdown_table
from layouts.exceptions import LayoutCycleError

from ._helpers import TemplatesOption, load_layouts


def stack(
    name: str,
    /,
    *,
    templates: TemplatesOption,
    output_format: Annotated[
        OutputFormat, Parameter(name="--format", help="Output format")
    ] = OutputFormat.TEXT,
) -> None:
    """Show the layout chain for a layout, outermost first

    Args:
        name: The first layout of the chain
        templates: File holding the layout templates
        output_format: Output format (text, json, or yaml)
    """
    layouts = load_layouts(templates)
    if name not in layouts.store:
        abort(f"Layout '{name}' not found", ExitCode.NOT_FOUND)

    try:
        chain = layouts.create_stack(name)
    except LayoutCycleError as e:
        abort(str(e), ExitCode.VALIDATION_ERROR)

    emit(
        {"name": name, "stack": list(chain)},
        output_format,
        plain=lambda: "".join(f"{layout}\n" for layout in chain),
    )


def list_layouts(
    *,
    templates: TemplatesOption,
    output_format: Annotated[
        OutputFormat, Parameter(name="--format", help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """List registered layouts

    Args:
        templates: File holding the layout templates
        output_format: Output format (table, json, or yaml)
    """
    layouts = load_layouts(templates)
    templates_by_name = layouts.store.get()

    records = {
        name: {
            "layout": template.layout_reference,
            "data": sorted(template.data),
        }
        for name, template in templates_by_name.items()
    }

    def table() -> str:
        rows = [
            [
                name,
                "" if record["layout"] is None else str(record["layout"]),
                ", ".join(record["data"]),
            ]
            for name, record in records.items()
        ]
        return markdown_table(["Name", "Layout", "Data"], rows) + "\n"

    emit(records, output_format, plain=table)
