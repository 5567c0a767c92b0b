"""Per-row column reconciliation for changed entries."""

from dataclasses import dataclass
from typing import Any

from .models import ChangedEntry, cell


def values_equal(left: Any, right: Any) -> bool:
    """Value equality as the backend's JSON means it.

    ABSENT only equals ABSENT, and booleans never equal numbers
    (True == 1 in Python, not in JSON).
    """
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


@dataclass(frozen=True)
class Reconciliation:
    """Columns to display for a changed row and which of them differ."""

    display_columns: tuple[str, ...]
    changed: dict[str, bool]

    @property
    def changed_count(self) -> int:
        return sum(1 for flag in self.changed.values() if flag)


def reconcile(entry: ChangedEntry) -> Reconciliation:
    """Work out the display columns of a changed row.

    Columns are the union of both rows' keys (left row first). When both rows
    are empty the explicit changed-column list is used instead. A column is
    changed when the entry lists it, or, without such a list, when the two
    sides differ.
    """
    columns = dict.fromkeys(entry.left_row or {})
    columns.update(dict.fromkeys(entry.right_row or {}))
    if not columns and entry.changed_columns:
        columns = dict.fromkeys(entry.changed_columns)

    explicit = None if entry.changed_columns is None else set(entry.changed_columns)
    changed = {}
    for column in columns:
        if explicit is not None:
            changed[column] = column in explicit
        else:
            changed[column] = not values_equal(
                cell(entry.left_row, column), cell(entry.right_row, column)
            )

    return Reconciliation(display_columns=tuple(columns), changed=changed)
