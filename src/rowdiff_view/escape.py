"""Markup-safe text for cell values."""

import json
from typing import Any

from .models import is_missing

NULL_TEXT = "(null)"


def display_text(value: Any) -> str:
    """Convert a cell value to the text shown for it.

    Missing values (None or ABSENT) show as "(null)"; booleans use their
    JSON spelling, and objects and arrays are written back as JSON text.
    """
    if is_missing(value):
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def escape_html(value: Any) -> str:
    """Escape HTML special characters in the display text of `value`."""
    return (
        display_text(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )
