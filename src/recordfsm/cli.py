# src/recordfsm/cli.py
"""recordfsm Command Line Interface.

Works on record files that a template engine has already rendered:
re-encoding them and regression-comparing them against a baseline.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from recordfsm import __version__
from recordfsm.contracts import (
    CompareMode,
    OutputFormat,
    Record,
    RecordConversion,
    RecordSourceError,
    ValueShapeError,
    WireFormatError,
    value_to_wire,
)
from recordfsm.cli_formatters import ReportFormat
from recordfsm.core.config import RecordFsmSettings, load_settings, resolve_config

__all__ = [
    "app",
]

# Exit code for records that could not be loaded; 1 is reserved for "differences found"
EXIT_LOAD_ERROR = 2

app = typer.Typer(
    name="recordfsm",
    help="recordfsm: render and regression-compare extracted records.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"recordfsm version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    console.print(Panel(content, title=f"[red bold]{title}[/]", border_style="red"))


def _load_settings_or_exit(settings_path: Path | None) -> RecordFsmSettings:
    if settings_path is None:
        return RecordFsmSettings()
    try:
        return load_settings(settings_path.expanduser())
    except FileNotFoundError:
        _format_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings_path}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        # Must be before any ValueError handler - ValidationError inherits from it
        details = [f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()]
        _format_error(
            title="Configuration Validation Failed",
            message=f"Invalid settings in {settings_path.name}",
            details=details,
            hint="Check field names, types, and allowed values.",
        )
        raise typer.Exit(1) from None


def _read_records(path: Path, fmt: OutputFormat | None, conversion: RecordConversion | None) -> list[Record]:
    """Read a rendered record file, exiting with EXIT_LOAD_ERROR on failure."""
    from recordfsm.core.serialization import load_records
    from recordfsm.core.stream import collect_records

    try:
        resolved_format = fmt if fmt is not None else OutputFormat.from_path(path)
    except ValueError as e:
        _format_error(
            title="Unknown Record Format",
            message=str(e),
            hint="Pass the format explicitly, e.g. --from json.",
        )
        raise typer.Exit(EXIT_LOAD_ERROR) from None

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _format_error(title="Cannot Read Records", message=f"{path}: {e.strerror or e}")
        raise typer.Exit(EXIT_LOAD_ERROR) from None

    try:
        return collect_records(load_records(text, resolved_format), conversion)
    except WireFormatError as e:
        _format_error(
            title="Invalid Record File",
            message=f"{path.name}: {e}",
            hint="Each record must map field names to a string or a list of strings.",
        )
        raise typer.Exit(EXIT_LOAD_ERROR) from None
    except ValueShapeError as e:
        _format_error(
            title="Record Field Conflict",
            message=str(e),
            details=[f"field: {e.field_name}", f"existing: {e.existing}", f"incoming: {e.incoming}"],
            hint="Field names collide after key conversion; drop --lowercase or rename the fields.",
        )
        raise typer.Exit(EXIT_LOAD_ERROR) from None
    except RecordSourceError as e:
        _format_error(title="Record Source Failed", message=str(e))
        raise typer.Exit(EXIT_LOAD_ERROR) from None


def _assign_record_keys(records: list[Record], key_fields: tuple[str, ...]) -> None:
    """Set record_key from identifying fields, the way the engine does.

    The key is the JSON array of the fields' wire forms, so values
    containing separator characters, or a Single spelling out a List,
    still give distinct keys. Records missing any key field keep
    record_key=None and stay unpaired.
    """
    for record in records:
        parts = [value for value in map(record.get, key_fields) if value is not None]
        if len(parts) == len(key_fields):
            record.record_key = json.dumps([value_to_wire(part) for part in parts], ensure_ascii=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """recordfsm: render and regression-compare extracted records."""
    from recordfsm.core.logging import configure_logging

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    loaded = _load_settings_or_exit(settings)
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else loaded.log_level)
    ctx.obj = loaded


@app.command()
def convert(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Rendered record file (JSON or YAML)."),
    from_format: OutputFormat | None = typer.Option(
        None,
        "--from",
        help="Input encoding (default: inferred from the file extension).",
    ),
    to_format: OutputFormat | None = typer.Option(
        None,
        "--to",
        "-t",
        help="Output encoding (default: output_format setting).",
    ),
    lowercase: bool = typer.Option(
        False,
        "--lowercase",
        "-l",
        help="Convert field names to lowercase.",
    ),
) -> None:
    """Re-render a record file in another encoding."""
    from recordfsm.core.logging import get_logger
    from recordfsm.core.serialization import dump_records

    config: RecordFsmSettings = ctx.obj
    conversion = RecordConversion.LOWERCASE_KEYS if lowercase else config.conversion
    records = _read_records(input_path, from_format, conversion)

    output_format = to_format if to_format is not None else config.output_format
    get_logger(__name__).debug("Rendering records", count=len(records), output_format=output_format.value)
    typer.echo(dump_records(records, output_format).rstrip("\n"))


@app.command()
def compare(
    ctx: typer.Context,
    result_path: Path = typer.Argument(..., help="Records produced by the run under test."),
    baseline_path: Path = typer.Argument(..., help="Baseline records to compare against."),
    mode: CompareMode | None = typer.Option(
        None,
        "--mode",
        "-m",
        help="Pair records by position or by record key (default: compare_mode setting).",
    ),
    key: list[str] | None = typer.Option(
        None,
        "--key",
        "-k",
        help="Identifying field for keyed mode; repeat for composite keys (default: key_fields setting).",
    ),
    report_format: ReportFormat = typer.Option(
        ReportFormat.CONSOLE,
        "--format",
        "-f",
        help="Report format: 'console' (human-readable) or 'json' (structured JSON).",
    ),
) -> None:
    """Compare two record files field by field.

    Exits 0 when the sets are identical, 1 when they differ.
    """
    from recordfsm.cli_formatters import get_comparison_formatter
    from recordfsm.core.compare import compare_record_sets

    config: RecordFsmSettings = ctx.obj
    result_records = _read_records(result_path, None, config.conversion)
    baseline_records = _read_records(baseline_path, None, config.conversion)

    compare_mode = mode if mode is not None else config.compare_mode
    if compare_mode is CompareMode.KEYED:
        key_fields = tuple(key) if key else config.key_fields
        if not key_fields:
            _format_error(
                title="No Key Fields",
                message="Keyed comparison needs at least one identifying field.",
                hint="Pass --key FIELD, or set key_fields in the settings file.",
            )
            raise typer.Exit(EXIT_LOAD_ERROR)
        _assign_record_keys(result_records, key_fields)
        _assign_record_keys(baseline_records, key_fields)

    comparison = compare_record_sets(result_records, baseline_records, mode=compare_mode)
    get_comparison_formatter(report_format)(comparison, result_path.name, baseline_path.name)

    if not comparison.is_identical:
        raise typer.Exit(1)


@app.command("show-config")
def show_config(ctx: typer.Context) -> None:
    """Print the resolved settings, defaults included."""
    config: RecordFsmSettings = ctx.obj
    typer.echo(yaml.safe_dump(resolve_config(config), sort_keys=True).rstrip("\n"))
