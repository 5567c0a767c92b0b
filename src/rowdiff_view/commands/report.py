"""Generate self-contained HTML reports from diff results."""

import json
import logging
import sys
from pathlib import Path

from ..escape import escape_html
from ..inline import fragments_to_html
from ..models import DiffResult, MalformedPayload, TableDiffOutcome, outcomes_from_list
from ..render import BatchLine, ResultView, RowTable, render_batch, render_result

logger = logging.getLogger(__name__)

STYLE = """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background: #f5f5f5;
        }
        .container {
            max-width: 1400px;
            margin: 0 auto;
            background: white;
            padding: 30px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        h1 {
            color: #333;
            border-bottom: 2px solid #007bff;
            padding-bottom: 10px;
        }
        h2 { color: #555; margin-top: 30px; }
        .summary {
            background: #f8f9fa;
            padding: 20px;
            border-radius: 5px;
            margin: 20px 0;
        }
        .summary ul { list-style: none; padding: 0; }
        .summary li { padding: 8px 0; border-bottom: 1px solid #dee2e6; }
        .stat { font-weight: bold; margin-right: 10px; }
        .added { color: #28a745; }
        .removed { color: #dc3545; }
        .modified { color: #b8860b; }
        .error { color: #dc3545; }

        .data-table {
            border-collapse: collapse;
            width: 100%;
            font-family: monospace;
            font-size: 0.85em;
        }
        .data-table th, .data-table td {
            border: 1px solid #ddd;
            padding: 4px;
            text-align: left;
        }
        .data-table th { background: #f1f1f1; font-weight: bold; }
        .data-table tr.changed td { background: #fff3cd; }

        .diff-add { background-color: #d4edda; }
        .diff-del { background-color: #f8d7da; text-decoration: line-through; }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{escape_html(title)}</title>
    <style>{STYLE}    </style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>
"""


def _row_table_html(table: RowTable) -> str:
    head = "".join(f"<th>{escape_html(c)}</th>" for c in table.columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{frag.text}</td>" for frag in row) + "</tr>" for row in table.rows
    )
    return f'<table class="data-table"><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


def generate_result_html(view: ResultView) -> str:
    """Render the HTML page of a single table diff."""
    summary = view.summary
    html_parts = [f"        <h1>Table Comparison: {escape_html(view.table)}</h1>"]
    schema = escape_html(view.schema) if view.schema else "(default)"
    html_parts.append(f"""
        <div class="summary">
            <h2>Summary</h2>
            <p>Schema: {schema} | Table: {escape_html(view.table)} |
Key column: {escape_html(view.key_column)}</p>
            <ul>
                <li><span class="stat added">Added:</span> {summary.added_rows} row(s)</li>
                <li><span class="stat removed">Removed:</span> {summary.removed_rows} row(s)</li>
                <li><span class="stat modified">Changed:</span> {summary.changed_cells} cell(s)
in {summary.changed_rows} row(s)</li>
            </ul>
        </div>
""")

    if view.added:
        html_parts.append('        <h2 class="added">Added Rows (only in DB2)</h2>')
        html_parts.append(_row_table_html(view.added))
    if view.removed:
        html_parts.append('        <h2 class="removed">Removed Rows (only in DB1)</h2>')
        html_parts.append(_row_table_html(view.removed))
    if view.changes:
        html_parts.append('        <h2 class="modified">Changed Rows</h2>')
        html_parts.append(
            '<table class="data-table"><thead><tr>'
            "<th>Key</th><th>Column</th><th>DB1</th><th>DB2</th>"
            "</tr></thead><tbody>"
        )
        for line in view.changes:
            row_class = ' class="changed"' if line.highlighted else ""
            html_parts.append(
                f"<tr{row_class}><td>{escape_html(line.key)}</td>"
                f"<td>{escape_html(line.column)}</td>"
                f"<td>{fragments_to_html(line.left)}</td>"
                f"<td>{fragments_to_html(line.right)}</td></tr>"
            )
        html_parts.append("</tbody></table>")

    if not summary.has_differences:
        html_parts.append(
            '<p class="no-changes">No differences found between the two databases.</p>'
        )

    return _page(f"Diff: {view.table}", "\n".join(html_parts))


def generate_batch_html(lines: list[BatchLine], schema: str | None = None) -> str:
    """Render the HTML page of a batch comparison."""
    html_parts = ["        <h1>Listed Tables Comparison</h1>"]
    if schema:
        html_parts.append(f"        <p>Schema: {escape_html(schema)}</p>")
    html_parts.append(
        '<table class="data-table"><thead><tr>'
        "<th>Table</th><th>Key</th><th>Added</th><th>Removed</th><th>Changed</th><th>Status</th>"
        "</tr></thead><tbody>"
    )
    for line in lines:
        status_class = "" if line.ok else ' class="error"'
        cells = [
            escape_html(line.table),
            escape_html(line.key_column),
            "" if line.added is None else str(line.added),
            "" if line.removed is None else str(line.removed),
            "" if line.changed_cells is None else str(line.changed_cells),
        ]
        html_parts.append(
            "<tr>"
            + "".join(f"<td>{c}</td>" for c in cells)
            + f"<td{status_class}>{escape_html(line.status)}</td></tr>"
        )
    html_parts.append("</tbody></table>")
    return _page("Listed Tables Comparison", "\n".join(html_parts))


def write_html(html: str, output: str) -> None:
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html)


def load_saved(path: str) -> DiffResult | list[TableDiffOutcome]:
    """Load a saved backend response: an object (one table) or an array (batch).

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        MalformedPayload: If the JSON has the wrong shape
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return outcomes_from_list(data)
    if isinstance(data, dict):
        return DiffResult.from_dict(data)
    raise MalformedPayload(f"{path}: expected a JSON object or array")


def generate_report(input_path: str, output: str, fallback_key: str | None = None) -> int:
    """Render a saved diff result (or batch) to an HTML file.

    Args:
        input_path: JSON file holding a backend response
        output: Output HTML file path
        fallback_key: Key column shown for batch tables without one

    Returns:
        0 on success, 1 on error
    """
    try:
        saved = load_saved(input_path)
        if isinstance(saved, DiffResult):
            html = generate_result_html(render_result(saved))
        else:
            html = generate_batch_html(render_batch(saved, fallback_key))
        write_html(html, output)
        print(f"✓ Generated report: {output}")
        return 0
    except Exception as e:
        logger.debug("Report generation failed", exc_info=True)
        print(f"Error generating report: {e}", file=sys.stderr)
        return 1
