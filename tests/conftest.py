"""Shared fixtures: backend payloads."""

import pytest


@pytest.fixture
def customer_payload():
    """Single-table diff as returned by /api/diff."""
    return {
        "schema": "SALES",
        "table": "CUSTOMER",
        "keyColumn": "ID",
        "added": [{"ID": 4, "NAME": "Dora", "CITY": "Bern"}],
        "removed": [{"ID": 9, "NAME": "Ivan"}, {"ID": 10, "CITY": "Oslo"}],
        "changed": [
            {
                "key": "1",
                "leftRow": {"ID": 1, "NAME": "hello world", "CITY": "Basel"},
                "rightRow": {"ID": 1, "NAME": "hello earth", "CITY": "Basel"},
                "changedColumns": ["NAME"],
            },
            {
                "key": "2",
                "leftRow": {"ID": 2, "NAME": "Bob", "CITY": None},
                "rightRow": {"ID": 2, "NAME": "Bobby", "CITY": "Zug"},
            },
        ],
    }


@pytest.fixture
def batch_payload(customer_payload):
    """Batch diff as returned by /api/diff/tables."""
    return [
        {"table": "CUSTOMER", "keyColumn": "ID", "result": customer_payload, "error": None},
        {
            "table": "ORDERS",
            "keyColumn": None,
            "result": {"table": "ORDERS", "keyColumn": "ORDER_NO", "added": [], "removed": []},
            "error": None,
        },
        {"table": "AUDIT_LOG", "keyColumn": None, "result": None, "error": "No key available"},
    ]
