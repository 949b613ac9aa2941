"""Shared contracts for record data crossing the engine and output boundaries.

This package is a LEAF MODULE with no outbound dependencies to core.

Import patterns:
    from recordfsm.contracts import Record, Single, List, ValueShapeError
"""

from recordfsm.contracts.enums import CompareMode, OutputFormat, RecordConversion
from recordfsm.contracts.errors import RecordSourceError, ValueShapeError, WireFormatError
from recordfsm.contracts.record import Record
from recordfsm.contracts.value import (
    List,
    Single,
    Value,
    WireValue,
    value_from_wire,
    value_to_wire,
)

__all__ = [
    "CompareMode",
    "List",
    "OutputFormat",
    "Record",
    "RecordConversion",
    "RecordSourceError",
    "Single",
    "Value",
    "ValueShapeError",
    "WireFormatError",
    "WireValue",
    "value_from_wire",
    "value_to_wire",
]
