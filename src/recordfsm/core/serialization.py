# src/recordfsm/core/serialization.py
"""Wire (de)serialization of record sequences.

A record set serializes as a list of flat mappings. Each value's shape is
polymorphic by arity: a bare string is a Single, a list of strings is a
List. The two shapes are told apart at read time by inspecting the literal.
record_key never crosses this boundary in either direction.

Field names are sorted on output so JSON and YAML renderings are
reproducible regardless of the order fields were inserted.
"""

import json
from collections.abc import Iterable
from typing import Any

import yaml

from recordfsm.contracts import OutputFormat, Record, WireFormatError, WireValue


def records_to_wire(records: Iterable[Record]) -> list[dict[str, WireValue]]:
    """Convert records to their abstract wire mapping."""
    return [record.to_wire() for record in records]


def records_from_wire(data: Any) -> list[Record]:
    """Build records from an abstract wire mapping.

    Raises:
        WireFormatError: If data is not a list of flat mappings
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise WireFormatError(f"expected a list of records, got {type(data).__name__}")
    return [Record.from_wire(item, path=f"[{index}]") for index, item in enumerate(data)]


def dump_records(records: Iterable[Record], fmt: OutputFormat) -> str:
    """Render records in the requested encoding."""
    wire = records_to_wire(records)
    if fmt == OutputFormat.JSON:
        return json.dumps(wire, indent=2, sort_keys=True, ensure_ascii=False)
    return yaml.safe_dump(wire, default_flow_style=False, sort_keys=True, allow_unicode=True)


def load_records(text: str, fmt: OutputFormat) -> list[Record]:
    """Parse rendered records back into Record objects.

    An empty YAML document yields an empty list.

    Raises:
        WireFormatError: If the text cannot be parsed or has the wrong shape
    """
    try:
        if fmt == OutputFormat.JSON:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except json.JSONDecodeError as e:
        raise WireFormatError(f"malformed JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except yaml.YAMLError as e:
        raise WireFormatError(f"malformed YAML: {e}") from e
    return records_from_wire(data)
