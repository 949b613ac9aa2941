# src/recordfsm/cli_formatters.py
"""CLI formatters for record set comparison reports.

Provides console (human-readable) and JSON (structured) renderings of a
SetComparison. get_comparison_formatter() picks one by report format name.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import StrEnum
from itertools import zip_longest

import typer

from recordfsm.contracts import CompareMode
from recordfsm.core.compare import Partners, SetComparison

ComparisonFormatter = Callable[[SetComparison, str, str], None]


class ReportFormat(StrEnum):
    """Comparison report rendering."""

    CONSOLE = "console"
    JSON = "json"


def _format_positional(comparison: SetComparison, result_name: str, baseline_name: str) -> None:
    for index, (ours, theirs) in enumerate(zip_longest(comparison.only_in_result, comparison.only_in_other)):
        if not ours and not theirs:
            continue
        typer.echo(f"Record {index}:")
        if ours is not None and theirs is None:
            typer.echo(f"  (only in {result_name})")
        elif ours is None:
            typer.echo(f"  (only in {baseline_name})")
        for entry in ours or []:
            typer.echo(f"  - {entry}")
        for entry in theirs or []:
            typer.echo(f"  + {entry}")


def _format_keyed_side(
    diffs: list[list[str]],
    partners: Partners,
    name: str,
    other_name: str,
    marker: str,
) -> None:
    for index, entries in enumerate(diffs):
        if not entries:
            continue
        partner = partners[index]
        if partner is None:
            typer.echo(f"Record {index} of {name} (only in {name}):")
        else:
            typer.echo(f"Record {index} of {name} (paired with {other_name} record {partner}):")
        for entry in entries:
            typer.echo(f"  {marker} {entry}")


def format_comparison_console(comparison: SetComparison, result_name: str, baseline_name: str) -> None:
    """Print differences record by record, then a one-line summary.

    Positional reports group both sides under one record index. Keyed
    reports list each side on its own, naming the partner record if any.
    """
    typer.echo(f"Comparing {result_name} against {baseline_name} ({comparison.mode.value})")

    if comparison.mode is CompareMode.KEYED:
        _format_keyed_side(comparison.only_in_result, comparison.result_partners, result_name, baseline_name, "-")
        _format_keyed_side(comparison.only_in_other, comparison.other_partners, baseline_name, result_name, "+")
    else:
        _format_positional(comparison, result_name, baseline_name)

    if comparison.is_identical:
        typer.echo(f"✓ Identical: {len(comparison.only_in_result):,} records")
    else:
        typer.echo(
            f"✗ Different: {comparison.difference_count:,} field difference(s) | "
            f"{len(comparison.only_in_result):,} vs {len(comparison.only_in_other):,} records"
        )


def format_comparison_json(comparison: SetComparison, result_name: str, baseline_name: str) -> None:
    """Print the comparison as one JSON document."""
    typer.echo(
        json.dumps(
            {
                "result": result_name,
                "baseline": baseline_name,
                "mode": comparison.mode.value,
                "identical": comparison.is_identical,
                "differences": comparison.difference_count,
                "only_in_result": comparison.only_in_result,
                "only_in_baseline": comparison.only_in_other,
                "result_partners": list(comparison.result_partners),
                "baseline_partners": list(comparison.other_partners),
            },
            ensure_ascii=False,
        )
    )


def get_comparison_formatter(report_format: ReportFormat) -> ComparisonFormatter:
    """Return the formatter for a report format."""
    formatters: dict[ReportFormat, ComparisonFormatter] = {
        ReportFormat.CONSOLE: format_comparison_console,
        ReportFormat.JSON: format_comparison_json,
    }
    return formatters[report_format]
