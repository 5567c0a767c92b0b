"""Aggregates over a whole DiffResult."""

from dataclasses import asdict, dataclass
from typing import Any, Iterable

from .models import DiffResult, Row
from .reconcile import reconcile


def columns_of(rows: Iterable[Row]) -> list[str]:
    """Union of the keys of `rows`, in first-seen order."""
    columns: dict[str, None] = {}
    for row in rows or ():
        columns.update(dict.fromkeys(row))
    return list(columns)


def count_changed_cells(result: DiffResult | None) -> int:
    """Count changed cells (not rows) across all changed entries.

    An entry with an explicit changed-column list contributes its length;
    otherwise the reconciled per-column comparison is counted.
    """
    if result is None or not result.changed:
        return 0
    total = 0
    for entry in result.changed:
        if entry.changed_columns is not None:
            total += len(entry.changed_columns)
        else:
            total += reconcile(entry).changed_count
    return total


@dataclass(frozen=True)
class DiffSummary:
    added_rows: int
    removed_rows: int
    changed_rows: int
    changed_cells: int

    @property
    def has_differences(self) -> bool:
        return bool(self.added_rows or self.removed_rows or self.changed_rows)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize(result: DiffResult) -> DiffSummary:
    """Row and cell counts of a single table diff."""
    return DiffSummary(
        added_rows=len(result.added),
        removed_rows=len(result.removed),
        changed_rows=len(result.changed),
        changed_cells=count_changed_cells(result),
    )
