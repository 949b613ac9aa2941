# src/recordfsm/core/compare.py
"""Field-level comparison of two record sets.

Used to regression-test a template: the records a template produces now are
compared against a stored baseline. Two pairing modes exist:

- Positional (default): record i is compared with record i of the other set.
  Reordering, inserting or deleting a record misaligns every later index,
  which is acceptable for baselines where record order is stable.
- Keyed: records are paired by record_key. Records without a key, or
  without a partner, count as entirely extra.

Each difference is rendered as "name:value" using the value's display form.
Differences within one record are sorted by field name.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from recordfsm.contracts import CompareMode, Record
from recordfsm.core.logging import get_logger

logger = get_logger(__name__)

RecordDiffs = list[list[str]]
Partners = tuple[int | None, ...]


def _diff_record(record: Record, counterpart: Record | None) -> list[str]:
    """Fields of ``record`` that ``counterpart`` lacks or holds differently."""
    diffs: list[str] = []
    for name in sorted(record.keys()):
        value = record.get(name)
        if counterpart is None or counterpart.get(name) != value:
            diffs.append(f"{name}:{value}")
    return diffs


def _diff_against(records: Sequence[Record], other: Sequence[Record], partners: Partners) -> RecordDiffs:
    return [_diff_record(rec, None if j is None else other[j]) for rec, j in zip(records, partners, strict=True)]


def positional_partners(records: Sequence[Record], other: Sequence[Record]) -> Partners:
    """Index of each record's partner in ``other`` by position, None past its end."""
    return tuple(i if i < len(other) else None for i in range(len(records)))


def keyed_partners(records: Sequence[Record], other: Sequence[Record]) -> Partners:
    """Index of each record's partner in ``other`` by record_key.

    The first record in ``other`` carrying the key wins. Records without a
    key, or whose key ``other`` lacks, have no partner.
    """
    index: dict[str, int] = {}
    for i, rec in enumerate(other):
        if rec.record_key is not None and rec.record_key not in index:
            index[rec.record_key] = i
    return tuple(None if rec.record_key is None else index.get(rec.record_key) for rec in records)


def compare_sets(result: Sequence[Record], other: Sequence[Record]) -> tuple[RecordDiffs, RecordDiffs]:
    """Compare two record sets position by position.

    Args:
        result: Records produced by the run under test
        other: Baseline records

    Returns:
        (diffs_for_result, diffs_for_other), each with one entry per
        input record of the corresponding sequence.
    """
    return (
        _diff_against(result, other, positional_partners(result, other)),
        _diff_against(other, result, positional_partners(other, result)),
    )


def compare_sets_by_key(result: Sequence[Record], other: Sequence[Record]) -> tuple[RecordDiffs, RecordDiffs]:
    """Compare two record sets, pairing records by record_key.

    The first record carrying a given key in the other sequence is its
    partner. Output shape matches compare_sets().
    """
    return (
        _diff_against(result, other, keyed_partners(result, other)),
        _diff_against(other, result, keyed_partners(other, result)),
    )


@dataclass(frozen=True)
class SetComparison:
    """Outcome of comparing two record sets.

    Attributes:
        mode: Pairing mode used
        only_in_result: Per-record differences of the run under test
        only_in_other: Per-record differences of the baseline
        result_partners: For each result record, the index of its baseline
            partner, or None when it has none
        other_partners: For each baseline record, the index of its result
            partner, or None when it has none
    """

    mode: CompareMode
    only_in_result: RecordDiffs
    only_in_other: RecordDiffs
    result_partners: Partners
    other_partners: Partners

    @property
    def difference_count(self) -> int:
        return sum(len(d) for d in self.only_in_result) + sum(len(d) for d in self.only_in_other)

    @property
    def is_identical(self) -> bool:
        """True when both sets have the same length and no field differs."""
        return len(self.only_in_result) == len(self.only_in_other) and self.difference_count == 0


def compare_record_sets(
    result: Sequence[Record],
    other: Sequence[Record],
    mode: CompareMode = CompareMode.POSITIONAL,
) -> SetComparison:
    """Compare two record sets in the requested mode."""
    mode = CompareMode(mode)
    find_partners = keyed_partners if mode is CompareMode.KEYED else positional_partners
    result_partners = find_partners(result, other)
    other_partners = find_partners(other, result)

    comparison = SetComparison(
        mode=mode,
        only_in_result=_diff_against(result, other, result_partners),
        only_in_other=_diff_against(other, result, other_partners),
        result_partners=result_partners,
        other_partners=other_partners,
    )
    logger.debug(
        "Compared record sets",
        mode=mode.value,
        result_records=len(result),
        other_records=len(other),
        differences=comparison.difference_count,
    )
    return comparison
