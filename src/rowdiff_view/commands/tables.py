"""Tables command implementation - compares every table the backend lists."""

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..client import DiffBackendClient
from ..config import Settings
from ..render import BatchLine, render_batch, render_result
from ..session import DiffSession
from .diff import print_result
from .report import generate_batch_html, generate_result_html, write_html

logger = logging.getLogger(__name__)

console = Console()


def print_batch(lines: list[BatchLine], out: Console | None = None) -> None:
    """Print the batch summary table."""
    out = out or console
    table = Table(title="Listed tables")
    table.add_column("Table")
    table.add_column("Key")
    table.add_column("Added", justify="right")
    table.add_column("Removed", justify="right")
    table.add_column("Changed", justify="right")
    table.add_column("Status")

    def num(value: int | None) -> str:
        return "" if value is None else str(value)

    for line in lines:
        table.add_row(
            Text(line.table),
            Text(line.key_column),
            num(line.added),
            num(line.removed),
            num(line.changed_cells),
            Text(line.status, style="" if line.ok else "red"),
        )
    out.print(table)


def diff_listed_tables(
    settings: Settings,
    schema: str | None = None,
    key: str | None = None,
    open_table: str | None = None,
    html: str | None = None,
    client: DiffBackendClient | None = None,
) -> int:
    """Compare all listed tables, optionally opening one table's detail.

    Args:
        settings: Backend settings
        schema: Optional schema name
        key: Key column to compare by (default: ID)
        open_table: Name of a listed table to fetch in detail afterwards
        html: Optional output file for an HTML report (detail page if a
            table was opened, batch page otherwise)
        client: Backend client (default: built from settings)

    Returns:
        0 if every table compared without differences, 1 otherwise
    """
    client = client or DiffBackendClient(settings.backend_url, timeout=settings.timeout)
    session = DiffSession(client, schema=schema or "", key=key or "")

    if not session.compare_listed():
        console.print(f"[red]Error:[/red] {escape(session.error or '')}")
        return 1

    fallback = key or settings.fallback_key
    lines = render_batch(session.list_results, fallback)
    print_batch(lines)
    page = generate_batch_html(lines, schema)

    has_changes = any(
        not line.ok or line.added or line.removed or line.changed_cells for line in lines
    )

    if open_table:
        outcome = next((o for o in session.list_results if o.table == open_table), None)
        if outcome is None:
            console.print(
                f"[red]Error:[/red] Table {escape(open_table)} is not in the listed tables"
            )
            return 1
        if not session.key and settings.fallback_key:
            session.key = settings.fallback_key
        if not session.open_table(outcome):
            console.print(f"[red]Error:[/red] {escape(session.error or '')}")
            return 1
        view = render_result(session.result)
        print_result(view)
        page = generate_result_html(view)
        has_changes = view.summary.has_differences

    if html:
        try:
            write_html(page, html)
            console.print(f"[green]✓[/green] Report written to {html}")
        except OSError as e:
            console.print(f"[red]Error:[/red] Failed to write report: {e}")
            return 1

    return 1 if has_changes else 0
