# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import records, record_sets, values
"""

from tests.strategies.records import field_names, field_texts, lists, record_sets, records, singles, values

__all__ = [
    "field_names",
    "field_texts",
    "lists",
    "record_sets",
    "records",
    "singles",
    "values",
]
