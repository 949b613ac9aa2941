# src/recordfsm/contracts/record.py
"""Record container filled in by the template engine.

A Record maps field names to Values. The engine creates it empty when a new
logical row starts, feeds it through the merge operations below while it
visits template states, and pushes it to its output when the record action
fires. A partially built record can be dropped at any point.

Merge policies (kept deliberately distinct, templates depend on both):

    insert(name, str)          absent -> Single
                               Single -> List[old, new]
                               List   -> List + new

    append_value(name, Value)  absent          -> stored as-is
                               Single + Single -> overwritten
                               Single + List   -> ValueShapeError
                               List   + Single -> pushed
                               List   + List   -> concatenated

record_key is an out-of-band attribute the engine assigns from fields it
flags as identifying. It is never part of the wire form and never compared.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, Mapping
from typing import Any

from recordfsm.contracts.enums import RecordConversion
from recordfsm.contracts.errors import ValueShapeError, WireFormatError
from recordfsm.contracts.value import List, Single, Value, WireValue, value_from_wire, value_to_wire


class Record:
    """One extracted row of named fields.

    Uses __slots__; there is no item setter, so field shapes only change
    through insert/append_value/overwrite_from/remove.
    """

    __slots__ = ("_fields", "record_key")

    def __init__(self) -> None:
        self._fields: dict[str, Value] = {}
        self.record_key: str | None = None

    # -------- merge operations --------

    def insert(self, name: str, value: str) -> None:
        """Add one string to a field, promoting a Single to a List on repeat."""
        current = self._fields.get(name)
        if current is None:
            self._fields[name] = Single(value)
        elif isinstance(current, Single):
            self._fields[name] = List((current.text, value))
        else:
            self._fields[name] = current.extended((value,))

    def append_value(self, name: str, value: Value) -> None:
        """Merge a whole Value into a field.

        Raises:
            ValueShapeError: If a List is merged onto an existing Single
        """
        current = self._fields.get(name)
        if current is None:
            self._fields[name] = value
        elif isinstance(current, Single):
            if isinstance(value, List):
                raise ValueShapeError(name, current, value)
            self._fields[name] = value
        elif isinstance(value, Single):
            self._fields[name] = current.extended((value.text,))
        else:
            self._fields[name] = current.extended(value.items)

    def overwrite_from(self, other: Record) -> None:
        """Replace every field that ``other`` carries; leave the rest alone."""
        for name, value in other._fields.items():
            self._fields[name] = value

    def remove(self, name: str) -> None:
        """Delete a field if present."""
        self._fields.pop(name, None)

    # -------- accessors --------

    def get(self, name: str) -> Value | None:
        return self._fields.get(name)

    def keys(self) -> KeysView[str]:
        """Live view of field names, valid until the next mutation."""
        return self._fields.keys()

    def items(self) -> ItemsView[str, Value]:
        """Live view of (name, value) pairs, valid until the next mutation."""
        return self._fields.items()

    def iter(self) -> Iterator[tuple[str, Value]]:
        return iter(self._fields.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!s}" for name, value in sorted(self._fields.items()))
        key = f", record_key={self.record_key!r}" if self.record_key is not None else ""
        return f"Record({fields}{key})"

    # -------- conversions --------

    def convert(self, conversion: RecordConversion) -> Record:
        """Return a copy with field names transformed.

        Names that collide after conversion are merged with append_value
        semantics, visiting source names in sorted order.

        Raises:
            ValueShapeError: If a collision merges a List onto a Single
        """
        converted = Record()
        converted.record_key = self.record_key
        for name in sorted(self._fields):
            if conversion is RecordConversion.LOWERCASE_KEYS:
                target = name.lower()
            else:
                raise ValueError(f"Unsupported record conversion: {conversion!r}")
            converted.append_value(target, self._fields[name])
        return converted

    def to_wire(self) -> dict[str, WireValue]:
        """Flat wire mapping with field names sorted. record_key is omitted."""
        return {name: value_to_wire(self._fields[name]) for name in sorted(self._fields)}

    @classmethod
    def from_wire(cls, data: Any, *, path: str = "") -> Record:
        """Build a record from its flat wire mapping.

        Args:
            data: Mapping of field name to string or list of strings
            path: Location of the mapping, used in error messages

        Raises:
            WireFormatError: If the mapping or any value has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise WireFormatError(f"expected a mapping, got {type(data).__name__}", path=path)
        record = cls()
        for name, raw in data.items():
            if not isinstance(name, str):
                raise WireFormatError(f"field names must be strings, got {name!r}", path=path)
            record._fields[name] = value_from_wire(raw, path=f"{path}.{name}")
        return record
