from .diff import diff_table
from .export import export_changes
from .report import generate_report
from .tables import diff_listed_tables

__all__ = ["diff_table", "diff_listed_tables", "export_changes", "generate_report"]
