"""Diff command implementation - compares one table between the two databases."""

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..client import DiffBackendClient
from ..config import Settings
from ..inline import fragments_to_text
from ..render import ResultView, RowTable, render_result
from ..session import DiffSession
from .report import generate_result_html, write_html

logger = logging.getLogger(__name__)

console = Console()


def _row_table(title: str, table: RowTable, style: str) -> Table:
    rich_table = Table(title=title, title_style=style, show_lines=False)
    for column in table.columns:
        rich_table.add_column(column)
    for row in table.rows:
        rich_table.add_row(*(Text(frag.raw) for frag in row))
    return rich_table


def print_result(view: ResultView, out: Console | None = None) -> None:
    """Print a single table diff to the terminal."""
    out = out or console
    summary = view.summary
    schema = f"{view.schema}." if view.schema else ""
    out.print(f"[bold]{escape(schema + view.table)}[/bold] (key: {escape(view.key_column)})")
    out.print(
        f"[green]Added:[/green] {summary.added_rows}  "
        f"[red]Removed:[/red] {summary.removed_rows}  "
        f"[yellow]Changed:[/yellow] {summary.changed_cells} cell(s) "
        f"in {summary.changed_rows} row(s)"
    )

    if view.added:
        out.print(_row_table("Added rows (only in DB2)", view.added, "green"))
    if view.removed:
        out.print(_row_table("Removed rows (only in DB1)", view.removed, "red"))
    if view.changes:
        changes = Table(title="Changed rows", title_style="yellow")
        changes.add_column("Key")
        changes.add_column("Column")
        changes.add_column("DB1")
        changes.add_column("DB2")
        for line in view.changes:
            changes.add_row(
                Text(line.key),
                Text(line.column),
                fragments_to_text(line.left),
                fragments_to_text(line.right),
                style="on grey15" if line.highlighted else None,
            )
        out.print(changes)

    if not summary.has_differences:
        out.print("[green]✓[/green] No differences found")


def diff_table(
    settings: Settings,
    table: str,
    key: str,
    schema: str | None = None,
    html: str | None = None,
    client: DiffBackendClient | None = None,
) -> int:
    """Fetch and print the diff of one table.

    Args:
        settings: Backend settings
        table: Table name
        key: Key column to match rows by
        schema: Optional schema name
        html: Optional output file for an HTML report
        client: Backend client (default: built from settings)

    Returns:
        0 if no differences found, 1 if differences found or errors occurred
    """
    client = client or DiffBackendClient(settings.backend_url, timeout=settings.timeout)
    session = DiffSession(client, schema=schema or "", table=table, key=key)

    if not session.submit():
        console.print(f"[red]Error:[/red] {escape(session.error or '')}")
        return 1

    view = render_result(session.result)
    print_result(view)

    if html:
        try:
            write_html(generate_result_html(view), html)
            console.print(f"[green]✓[/green] Report written to {html}")
        except OSError as e:
            console.print(f"[red]Error:[/red] Failed to write report: {e}")
            return 1

    return 1 if view.summary.has_differences else 0
