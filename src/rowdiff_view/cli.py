"""Command-line interface for rowdiff-view."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich_argparse import RichHelpFormatter

from . import __version__
from .config import ENV_BACKEND_URL, ENV_DEFAULT_KEY, ENV_TIMEOUT, Settings

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rowdiff-view",
        description="Readable reports and inline cell diffs for database row comparisons",
        epilog=(
            f"Environment: {ENV_BACKEND_URL} (backend base URL), "
            f"{ENV_TIMEOUT} (seconds), {ENV_DEFAULT_KEY} (fallback key column)"
        ),
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--backend", help="Diff backend base URL (default: from environment)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (shows backend requests)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare one table between the two databases",
        description="Fetch the row diff of one table and show it with inline cell highlights.",
        epilog="""
Examples:
  # Compare a table by its ID column
  rowdiff-view diff --table CUSTOMER --key ID

  # Scope to a schema and save an HTML report
  rowdiff-view diff --schema SALES --table ORDERS --key ORDER_NO --html orders.html

Exit codes:
  - 0: No differences found
  - 1: Differences found or errors occurred
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    diff_parser.add_argument("--schema", help="Schema name (optional)")
    diff_parser.add_argument("--table", default="", help="Table name (required)")
    diff_parser.add_argument("--key", default="", help="Key column used to match rows (required)")
    diff_parser.add_argument("--html", help="Also write an HTML report to this file")

    # tables command
    tables_parser = subparsers.add_parser(
        "tables",
        help="Compare every table the backend lists",
        description="Compare all listed tables by one key column (ID unless given).",
        epilog="""
Examples:
  # Compare all listed tables by ID
  rowdiff-view tables

  # Compare by another key and open one table in detail
  rowdiff-view tables --key PK_ID --open ACCOUNTS

Output columns:
  Table, Key, Added, Removed, Changed (cell count), Status
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    tables_parser.add_argument("--schema", help="Schema name (optional)")
    tables_parser.add_argument("--key", help="Key column for every table (default: ID)")
    tables_parser.add_argument("--open", dest="open_table", help="Show the detail of this table")
    tables_parser.add_argument("--html", help="Also write an HTML report to this file")

    # render command
    render_parser = subparsers.add_parser(
        "render",
        help="Render a saved backend response to HTML",
        description="Render a saved diff result (JSON object) or batch (JSON array) to HTML.",
        epilog="""
Examples:
  rowdiff-view render customer-diff.json --output customer-diff.html
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    render_parser.add_argument("input", help="JSON file saved from the diff backend")
    render_parser.add_argument("--output", required=True, help="Output HTML file path")

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export changed cells to CSV or Excel",
        description="Write one line per changed cell (table, key, column, db1, db2).",
        epilog="""
Examples:
  rowdiff-view export customer-diff.json --output changes.csv
  rowdiff-view export all-tables.json --output changes.xlsx
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    export_parser.add_argument("input", help="JSON file saved from the diff backend")
    export_parser.add_argument("--output", required=True, help="Output .csv or .xlsx file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )

    try:
        settings = Settings.from_env().override(backend_url=args.backend, timeout=args.timeout)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if args.command == "diff":
        from rowdiff_view.commands.diff import diff_table

        return diff_table(settings, args.table, args.key, args.schema, args.html)
    elif args.command == "tables":
        from rowdiff_view.commands.tables import diff_listed_tables

        return diff_listed_tables(settings, args.schema, args.key, args.open_table, args.html)
    elif args.command == "render":
        from rowdiff_view.commands.report import generate_report

        return generate_report(args.input, args.output, settings.fallback_key)
    elif args.command == "export":
        from rowdiff_view.commands.export import export_changes

        return export_changes(args.input, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
