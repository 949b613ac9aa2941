# src/recordfsm/core/stream.py
"""Consumption of lazily produced record streams.

The template engine may yield records one at a time from a streaming input.
If the source fails partway, consumption stops immediately and the failure
reaches the caller. A silently truncated record list is never returned.
"""

from collections.abc import Iterable, Iterator

from recordfsm.contracts import Record, RecordConversion, RecordSourceError, ValueShapeError
from recordfsm.core.logging import get_logger

logger = get_logger(__name__)


def iter_converted(source: Iterable[Record], conversion: RecordConversion | None) -> Iterator[Record]:
    """Yield records from ``source``, applying ``conversion`` to each."""
    for record in source:
        yield record if conversion is None else record.convert(conversion)


def collect_records(
    source: Iterable[Record],
    conversion: RecordConversion | None = None,
) -> list[Record]:
    """Drain a record source into a list.

    Args:
        source: Iterable of records, typically a generator driven by the engine
        conversion: Optional key conversion applied to every record

    Returns:
        All records, in source order

    Raises:
        ValueShapeError: Propagated unchanged; it is already the abort signal
            for the record being built
        RecordSourceError: If the source raised anything else
    """
    records: list[Record] = []
    iterator = iter_converted(source, conversion)
    while True:
        try:
            record = next(iterator)
        except StopIteration:
            break
        except ValueShapeError as e:
            logger.error(
                "Record aborted on value shape conflict",
                field=e.field_name,
                existing=str(e.existing),
                incoming=str(e.incoming),
                records_consumed=len(records),
            )
            raise
        except Exception as e:
            logger.error(
                "Record source failed",
                error=str(e),
                error_type=type(e).__name__,
                records_consumed=len(records),
            )
            raise RecordSourceError(
                f"Record source failed after {len(records)} record(s): {e}",
                records_consumed=len(records),
            ) from e
        records.append(record)

    logger.debug("Collected records", count=len(records), conversion=conversion)
    return records
