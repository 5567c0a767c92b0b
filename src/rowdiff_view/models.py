"""Data models for rowdiff-view.

This module defines the value objects received from the diff backend
(DiffResult, TableDiffOutcome) and the display fragments derived from them.
All of them are immutable and live for a single rendered view.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class _Absent:
    """Marker for a column a row does not carry at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

Row = dict[str, Any]


class MalformedPayload(ValueError):
    """Raised when a backend payload does not have the expected shape."""


def cell(row: Row | None, column: str) -> Any:
    """Return the value of `column` in `row`, or ABSENT when it is not there.

    A JSON null is returned as None; a missing key (or a missing row) is
    returned as ABSENT so the two can be told apart.
    """
    if not row:
        return ABSENT
    return row.get(column, ABSENT)


def is_missing(value: Any) -> bool:
    """True for both None and ABSENT."""
    return value is None or value is ABSENT


class HighlightKind(Enum):
    NONE = "none"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DisplayFragment:
    """One rendered segment of a cell.

    Attributes:
        text: HTML-escaped text of the segment
        kind: Highlight classification of the segment
        raw: Unescaped display text, used for terminal output
    """

    text: str
    kind: HighlightKind = HighlightKind.NONE
    raw: str = ""

    @property
    def is_highlighted(self) -> bool:
        return self.kind is not HighlightKind.NONE


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedPayload(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _optional_row(data: Any, what: str) -> Row:
    if data is None:
        return {}
    return dict(_require_mapping(data, what))


def _optional_str(data: dict[str, Any], name: str, what: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise MalformedPayload(f"{what}: '{name}' must be a string or null")
    return value


def _rows(data: Any, what: str) -> tuple[Row, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        raise MalformedPayload(f"{what}: expected a list of rows")
    return tuple(_require_mapping(r, what) for r in data)


@dataclass(frozen=True)
class ChangedEntry:
    """A row present on both sides whose values differ.

    Attributes:
        key: Key column value identifying the matched row
        left_row: Row as seen on the left side (first database)
        right_row: Row as seen on the right side (second database)
        changed_columns: Columns known to differ; None when not supplied
    """

    key: str
    left_row: Row = field(default_factory=dict)
    right_row: Row = field(default_factory=dict)
    changed_columns: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the backend's JSON shape."""
        data: dict[str, Any] = {
            "key": self.key,
            "leftRow": dict(self.left_row),
            "rightRow": dict(self.right_row),
        }
        if self.changed_columns is not None:
            data["changedColumns"] = list(self.changed_columns)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "ChangedEntry":
        """Create from the backend's JSON shape."""
        data = _require_mapping(data, "changed entry")
        changed = data.get("changedColumns")
        if changed is not None and not isinstance(changed, list):
            raise MalformedPayload("changed entry: changedColumns must be a list")
        key = data.get("key")
        # numeric keys come through as their string form
        if isinstance(key, bool) or not isinstance(key, (str, int, float, type(None))):
            raise MalformedPayload("changed entry: 'key' must be a string, number or null")
        return cls(
            key="" if key is None else str(key),
            left_row=_optional_row(data.get("leftRow"), "changed entry leftRow"),
            right_row=_optional_row(data.get("rightRow"), "changed entry rightRow"),
            changed_columns=None if changed is None else tuple(str(c) for c in changed),
        )


@dataclass(frozen=True)
class DiffResult:
    """Row-level diff of one table between the two databases.

    Attributes:
        schema: Schema name, if the comparison was scoped to one
        table: Table name
        key_column: Column used to match rows between the two sides
        added: Rows present only on the right side
        removed: Rows present only on the left side
        changed: Rows present on both sides with differing values
    """

    table: str
    key_column: str = ""
    schema: str | None = None
    added: tuple[Row, ...] = ()
    removed: tuple[Row, ...] = ()
    changed: tuple[ChangedEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the backend's JSON shape."""
        return {
            "schema": self.schema,
            "table": self.table,
            "keyColumn": self.key_column,
            "added": [dict(r) for r in self.added],
            "removed": [dict(r) for r in self.removed],
            "changed": [c.to_dict() for c in self.changed],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DiffResult":
        """Create from the backend's JSON shape."""
        data = _require_mapping(data, "diff result")
        if not data.get("table"):
            raise MalformedPayload("diff result: 'table' is required")
        changed = data.get("changed") or []
        if not isinstance(changed, list):
            raise MalformedPayload("diff result: 'changed' must be a list")
        return cls(
            schema=_optional_str(data, "schema", "diff result"),
            table=str(data["table"]),
            key_column=_optional_str(data, "keyColumn", "diff result") or "",
            added=_rows(data.get("added"), "added"),
            removed=_rows(data.get("removed"), "removed"),
            changed=tuple(ChangedEntry.from_dict(c) for c in changed),
        )


@dataclass(frozen=True)
class TableDiffOutcome:
    """Per-table entry of a batch comparison, carrying a result or an error."""

    table: str
    key_column: str | None = None
    result: DiffResult | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        if self.error:
            return "error"
        if self.result is not None:
            return "ok"
        return "pending"

    @property
    def status_text(self) -> str:
        """Error text if present, else OK once a result exists."""
        if self.error:
            return self.error
        return "OK" if self.result is not None else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "keyColumn": self.key_column,
            "result": None if self.result is None else self.result.to_dict(),
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TableDiffOutcome":
        data = _require_mapping(data, "table outcome")
        if not data.get("table"):
            raise MalformedPayload("table outcome: 'table' is required")
        result = data.get("result")
        return cls(
            table=str(data["table"]),
            key_column=_optional_str(data, "keyColumn", "table outcome") or None,
            result=None if result is None else DiffResult.from_dict(result),
            error=_optional_str(data, "error", "table outcome") or None,
        )


def outcomes_from_list(data: Any) -> list[TableDiffOutcome]:
    """Parse a batch response body."""
    if not isinstance(data, list):
        raise MalformedPayload("batch result: expected a JSON array")
    return [TableDiffOutcome.from_dict(item) for item in data]
