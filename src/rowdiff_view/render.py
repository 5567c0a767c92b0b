"""Per-row, per-column rendering decisions for diff results.

The views built here are plain data; the HTML page and the terminal tables in
`rowdiff_view.commands` only lay them out.
"""

from dataclasses import dataclass
from typing import Iterable

from .aggregate import DiffSummary, columns_of, count_changed_cells, summarize
from .escape import display_text
from .inline import fragment, inline_diff
from .models import DiffResult, DisplayFragment, Row, TableDiffOutcome, cell
from .reconcile import reconcile


class NoKeyAvailable(LookupError):
    """No key column could be resolved for a table."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"No key available to open diff for table {table}.")


@dataclass(frozen=True)
class RowTable:
    """Rows shown as a plain table (added or removed rows)."""

    columns: list[str]
    rows: list[tuple[DisplayFragment, ...]]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ChangeLine:
    """One (changed row, column) line of the change table."""

    key: str
    column: str
    left: tuple[DisplayFragment, ...]
    right: tuple[DisplayFragment, ...]
    highlighted: bool


@dataclass(frozen=True)
class ResultView:
    schema: str | None
    table: str
    key_column: str
    summary: DiffSummary
    added: RowTable
    removed: RowTable
    changes: list[ChangeLine]


@dataclass(frozen=True)
class BatchLine:
    """Summary line of one table in a batch comparison."""

    table: str
    key_column: str
    added: int | None
    removed: int | None
    changed_cells: int | None
    status: str
    ok: bool


def _row_table(rows: Iterable[Row]) -> RowTable:
    rows = list(rows)
    columns = columns_of(rows)
    return RowTable(
        columns=columns,
        rows=[tuple(fragment(display_text(cell(row, c))) for c in columns) for row in rows],
    )


def render_result(result: DiffResult) -> ResultView:
    """Build the view of a single table diff."""
    changes = []
    for entry in result.changed:
        rec = reconcile(entry)
        for column in rec.display_columns:
            diff = inline_diff(cell(entry.left_row, column), cell(entry.right_row, column))
            changes.append(
                ChangeLine(
                    key=entry.key,
                    column=column,
                    left=diff.left,
                    right=diff.right,
                    highlighted=rec.changed[column],
                )
            )

    return ResultView(
        schema=result.schema,
        table=result.table,
        key_column=result.key_column,
        summary=summarize(result),
        added=_row_table(result.added),
        removed=_row_table(result.removed),
        changes=changes,
    )


def key_candidates(outcome: TableDiffOutcome, fallback: str | None = None) -> list[str | None]:
    """Key column sources of an outcome, in priority order."""
    return [
        outcome.key_column,
        outcome.result.key_column if outcome.result is not None else None,
        fallback,
    ]


def resolve_key(outcome: TableDiffOutcome, fallback: str | None = None) -> str:
    """Return the first non-empty key candidate for `outcome`.

    Raises:
        NoKeyAvailable: If no candidate is set
    """
    for candidate in key_candidates(outcome, fallback):
        if candidate and candidate.strip():
            return candidate.strip()
    raise NoKeyAvailable(outcome.table)


def render_batch(
    outcomes: Iterable[TableDiffOutcome], fallback_key: str | None = None
) -> list[BatchLine]:
    """Build one summary line per outcome of a batch comparison."""
    lines = []
    for outcome in outcomes:
        try:
            key = resolve_key(outcome, fallback_key)
        except NoKeyAvailable:
            key = ""
        result = outcome.result
        lines.append(
            BatchLine(
                table=outcome.table,
                key_column=key,
                added=len(result.added) if result is not None else None,
                removed=len(result.removed) if result is not None else None,
                changed_cells=count_changed_cells(result) if result is not None else None,
                status=outcome.status_text,
                ok=outcome.status == "ok",
            )
        )
    return lines
