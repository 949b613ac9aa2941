# src/recordfsm/core/__init__.py
"""Core infrastructure: Comparison, Serialization, Streams, Configuration, Logging."""

from recordfsm.core.compare import (
    SetComparison,
    compare_record_sets,
    compare_sets,
    compare_sets_by_key,
)
from recordfsm.core.config import (
    RecordFsmSettings,
    load_settings,
    resolve_config,
)
from recordfsm.core.logging import configure_logging, get_logger
from recordfsm.core.serialization import (
    dump_records,
    load_records,
    records_from_wire,
    records_to_wire,
)
from recordfsm.core.stream import collect_records, iter_converted

__all__ = [
    "RecordFsmSettings",
    "SetComparison",
    "collect_records",
    "compare_record_sets",
    "compare_sets",
    "compare_sets_by_key",
    "configure_logging",
    "dump_records",
    "get_logger",
    "iter_converted",
    "load_records",
    "load_settings",
    "records_from_wire",
    "records_to_wire",
    "resolve_config",
]
