"""Tests for exporting changed cells."""

import json

import openpyxl
import pandas as pd
import pytest

from rowdiff_view.commands.export import EXPORT_COLUMNS, changed_cells_frame, export_changes
from rowdiff_view.models import DiffResult


@pytest.fixture
def saved_result(tmp_path, customer_payload):
    path = tmp_path / "diff.json"
    path.write_text(json.dumps(customer_payload), encoding="utf-8")
    return path


def test_changed_cells_frame(customer_payload):
    """Test one row per changed cell with display text values."""
    df = changed_cells_frame([DiffResult.from_dict(customer_payload)])

    assert list(df.columns) == EXPORT_COLUMNS
    assert df.values.tolist() == [
        ["CUSTOMER", "1", "NAME", "hello world", "hello earth"],
        ["CUSTOMER", "2", "NAME", "Bob", "Bobby"],
        ["CUSTOMER", "2", "CITY", "(null)", "Zug"],
    ]


def test_changed_cells_frame_empty():
    """Test no results gives an empty frame with the export columns."""
    df = changed_cells_frame([])

    assert df.empty
    assert list(df.columns) == EXPORT_COLUMNS


def test_export_csv(saved_result, tmp_path):
    """Test CSV export with LF line endings."""
    output = tmp_path / "changes.csv"

    assert export_changes(str(saved_result), str(output)) == 0

    content = output.read_bytes()
    assert b"\r\n" not in content
    df = pd.read_csv(output, dtype=str, keep_default_na=False)
    assert len(df) == 3
    assert df["db1"].tolist() == ["hello world", "Bob", "(null)"]


def test_export_xlsx(saved_result, tmp_path):
    """Test Excel export has a header and filled DB1/DB2 cells."""
    output = tmp_path / "changes.xlsx"

    assert export_changes(str(saved_result), str(output)) == 0

    sheet = openpyxl.load_workbook(output).active
    rows = list(sheet.iter_rows(values_only=True))
    assert rows[0] == tuple(EXPORT_COLUMNS)
    assert rows[1] == ("CUSTOMER", "1", "NAME", "hello world", "hello earth")
    assert sheet["D2"].fill.start_color.rgb.endswith("F8D7DA")
    assert sheet["E2"].fill.start_color.rgb.endswith("D4EDDA")


def test_export_batch_skips_failed_tables(tmp_path, batch_payload):
    """Test batch exports include only tables with a result."""
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(batch_payload), encoding="utf-8")
    output = tmp_path / "changes.csv"

    assert export_changes(str(path), str(output)) == 0
    df = pd.read_csv(output, dtype=str, keep_default_na=False)
    assert set(df["table"]) == {"CUSTOMER"}


def test_export_invalid_input(tmp_path, capsys):
    """Test unreadable input returns exit code 1."""
    path = tmp_path / "bad.json"
    path.write_text("not json", encoding="utf-8")

    assert export_changes(str(path), str(tmp_path / "out.csv")) == 1
    assert "Failed to read" in capsys.readouterr().err
