"""Export command - writes cell-level changes to CSV or Excel."""

import csv
import sys
from pathlib import Path

import openpyxl
import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from ..escape import display_text
from ..models import DiffResult, cell
from ..reconcile import reconcile
from .report import load_saved

EXPORT_COLUMNS = ["table", "key", "column", "db1", "db2"]

HEADER_FONT = Font(bold=True)
DB1_FILL = PatternFill(start_color="F8D7DA", end_color="F8D7DA", fill_type="solid")
DB2_FILL = PatternFill(start_color="D4EDDA", end_color="D4EDDA", fill_type="solid")


def changed_cells_frame(results: list[DiffResult]) -> pd.DataFrame:
    """One row per changed cell across `results`, in backend order."""
    records = []
    for result in results:
        for entry in result.changed:
            rec = reconcile(entry)
            for column in rec.display_columns:
                if not rec.changed[column]:
                    continue
                records.append(
                    {
                        "table": result.table,
                        "key": entry.key,
                        "column": column,
                        "db1": display_text(cell(entry.left_row, column)),
                        "db2": display_text(cell(entry.right_row, column)),
                    }
                )
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def write_csv(df: pd.DataFrame, path: str) -> None:
    """Write with UTF-8, LF newlines and minimal quoting."""
    df.to_csv(
        path,
        index=False,
        encoding="utf-8",
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        na_rep="",
    )


def write_xlsx(df: pd.DataFrame, path: str) -> None:
    """Write an Excel sheet with the DB1/DB2 cells filled."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Changes"

    sheet.append(EXPORT_COLUMNS)
    for header in sheet[1]:
        header.font = HEADER_FONT

    db1_col = EXPORT_COLUMNS.index("db1") + 1
    db2_col = EXPORT_COLUMNS.index("db2") + 1
    for r_idx, record in enumerate(df.itertuples(index=False), start=2):
        sheet.append(list(record))
        sheet.cell(row=r_idx, column=db1_col).fill = DB1_FILL
        sheet.cell(row=r_idx, column=db2_col).fill = DB2_FILL

    for c_idx, name in enumerate(EXPORT_COLUMNS, start=1):
        width = max([len(name)] + [len(str(v)) for v in df[name]])
        sheet.column_dimensions[get_column_letter(c_idx)].width = min(width + 2, 60)

    sheet.freeze_panes = "A2"
    workbook.save(path)


def export_changes(input_path: str, output: str) -> int:
    """Export the changed cells of a saved result (or batch) to a file.

    Args:
        input_path: JSON file holding a backend response
        output: Output path; .xlsx writes Excel, anything else CSV

    Returns:
        0 on success, 1 on error
    """
    try:
        saved = load_saved(input_path)
    except Exception as e:
        print(f"❌ Failed to read {input_path}: {e}", file=sys.stderr)
        return 1

    if isinstance(saved, DiffResult):
        results = [saved]
    else:
        results = [o.result for o in saved if o.result is not None]

    df = changed_cells_frame(results)

    try:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.suffix.lower() == ".xlsx":
            write_xlsx(df, str(output_path))
        else:
            write_csv(df, str(output_path))
    except Exception as e:
        print(f"❌ Failed to write output: {e}", file=sys.stderr)
        return 1

    print(f"✓ Exported {len(df)} changed cell(s) to {output}")
    return 0
