"""Modes and kinds shared across the record, comparison and output layers."""

from enum import StrEnum
from pathlib import Path


class RecordConversion(StrEnum):
    """Key transformation applied to records as they leave the engine."""

    LOWERCASE_KEYS = "lowercase_keys"


class OutputFormat(StrEnum):
    """Text encoding used for the record wire mapping."""

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_path(cls, path: Path) -> "OutputFormat":
        """Infer the format from a file extension.

        Raises:
            ValueError: If the extension is not .json, .yaml or .yml
        """
        suffix = path.suffix.lower()
        if suffix == ".json":
            return cls.JSON
        if suffix in (".yaml", ".yml"):
            return cls.YAML
        raise ValueError(f"Cannot infer record format from extension {suffix!r} of {path.name}")


class CompareMode(StrEnum):
    """How two record sets are paired for comparison.

    POSITIONAL pairs records by index and is the regression baseline mode.
    KEYED pairs records by their record_key.
    """

    POSITIONAL = "positional"
    KEYED = "keyed"
