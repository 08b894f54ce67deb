"""Fixed-width text rendering of table data."""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

DEFAULT_TABLE_WIDTH = 1000


def render_table(
    rows: Sequence[Sequence[str]],
    header: Optional[str] = None,
    width: int = DEFAULT_TABLE_WIDTH,
) -> str:
    """
    Render rows of cell text as a boxed, fixed-width text table.

    Rows may have different lengths; short rows are padded with empty
    cells. The header, when given, is centered above the grid.

    Args:
        rows: Cell text per row
        header: Optional caption shown centered above the table
        width: Maximum width in columns (cells wrap beyond it)

    Returns:
        The rendered table without trailing whitespace, or an empty
        string when there are no cells
    """
    column_count = max((len(row) for row in rows), default=0)
    if column_count == 0:
        return ""

    table = Table(
        title=Text(header) if header is not None else None,
        title_justify="center",
        show_header=False,
        show_lines=True,
        box=box.DOUBLE_EDGE,
    )
    for _ in range(column_count):
        table.add_column()
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))

    console = Console(
        file=io.StringIO(),
        width=width,
        color_system=None,
        force_terminal=False,
        force_jupyter=False,
        no_color=True,
        highlight=False,
        emoji=False,
        markup=False,
    )
    console.print(table)
    rendered = console.file.getvalue()
    return "\n".join(line.rstrip() for line in rendered.splitlines()).strip("\n")
