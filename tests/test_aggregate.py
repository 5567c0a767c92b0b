"""Tests for result-level aggregates."""

from rowdiff_view.aggregate import columns_of, count_changed_cells, summarize
from rowdiff_view.models import ChangedEntry, DiffResult
from rowdiff_view.reconcile import reconcile


def test_columns_of_empty():
    """Test no rows means no columns."""
    assert columns_of([]) == []
    assert columns_of(None) == []


def test_columns_of_first_seen_order():
    """Test heterogeneous rows keep first-seen column order."""
    rows = [{"ID": 1, "NAME": "a"}, {"CITY": "x", "ID": 2}, {"ZIP": 1, "NAME": "b"}]

    assert columns_of(rows) == ["ID", "NAME", "CITY", "ZIP"]


def test_count_changed_cells_uses_explicit_lists():
    """Test explicit changed-column lists count one per column."""
    result = DiffResult(
        table="T",
        changed=(
            ChangedEntry(key="1", changed_columns=("X", "Y")),
            ChangedEntry(key="2", changed_columns=("Z",)),
        ),
    )

    assert count_changed_cells(result) == 3


def test_count_changed_cells_matches_reconcile():
    """Test derived counts equal the reconciled per-column flags."""
    entries = (
        ChangedEntry(
            key="1", left_row={"A": 1, "B": 2, "C": 3}, right_row={"A": 0, "B": 0, "C": 3}
        ),
        ChangedEntry(key="2", left_row={"A": 1}, right_row={"A": 1, "D": None}),
    )
    result = DiffResult(table="T", changed=entries)

    expected = sum(flag for e in entries for flag in reconcile(e).changed.values())
    assert count_changed_cells(result) == expected == 3


def test_count_changed_cells_empty():
    """Test results without changes count zero."""
    assert count_changed_cells(DiffResult(table="T")) == 0
    assert count_changed_cells(None) == 0


def test_summarize(customer_payload):
    """Test row and cell counts of a whole result."""
    summary = summarize(DiffResult.from_dict(customer_payload))

    assert summary.added_rows == 1
    assert summary.removed_rows == 2
    assert summary.changed_rows == 2
    # NAME on row 1 (explicit) + NAME and CITY on row 2 (derived)
    assert summary.changed_cells == 3
    assert summary.has_differences


def test_summarize_no_differences():
    """Test an empty result reports no differences."""
    assert not summarize(DiffResult(table="T")).has_differences
