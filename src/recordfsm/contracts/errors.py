"""Error contracts for record building, streaming and the wire boundary.

Two outcomes exist for every record operation: silent success, or an
exception that halts the enclosing unit of work (the record being built, or
the record stream being consumed). Nothing here retries.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recordfsm.contracts.value import Value


class ValueShapeError(Exception):
    """Raised when a list value is merged onto a single-valued field.

    This is the one merge combination that cannot be resolved in place.
    The engine catches it at its record/run boundary and aborts that unit
    of work.

    Attributes:
        field_name: Field being merged into
        existing: Value currently stored in the record
        incoming: Value that could not be merged
    """

    def __init__(self, field_name: str, existing: "Value", incoming: "Value") -> None:
        self.field_name = field_name
        self.existing = existing
        self.incoming = incoming
        super().__init__(f"can not append list {incoming} to single {existing!s} in field {field_name!r}")


class RecordSourceError(Exception):
    """Raised when a record source fails partway through consumption.

    The original exception is chained as ``__cause__``. Records produced
    before the failure are discarded, never returned as a short result.

    Attributes:
        records_consumed: Records successfully pulled before the failure
    """

    def __init__(self, message: str, *, records_consumed: int) -> None:
        self.records_consumed = records_consumed
        super().__init__(message)


class WireFormatError(ValueError):
    """Raised when serialized record data does not have the wire shape.

    Attributes:
        path: Location of the offending literal (e.g. "[2].interfaces")
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        location = f" at {path}" if path else ""
        super().__init__(f"Invalid record data{location}: {message}")
