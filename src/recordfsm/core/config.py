# src/recordfsm/core/config.py
"""
Configuration schema and loading for recordfsm.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from recordfsm.contracts import CompareMode, OutputFormat, RecordConversion


class RecordFsmSettings(BaseModel):
    """Top-level settings.

    Example YAML:
        output_format: json
        compare_mode: keyed
        key_fields: [INTERFACE]
        lowercase_keys: true
        log_level: DEBUG
    """

    model_config = {"frozen": True, "extra": "forbid"}

    output_format: OutputFormat = Field(
        default=OutputFormat.YAML,
        description="Encoding used when rendering records",
    )
    compare_mode: CompareMode = Field(
        default=CompareMode.POSITIONAL,
        description="How record sets are paired when compared",
    )
    key_fields: tuple[str, ...] = Field(
        default=(),
        description="Identifying fields used to pair records in keyed comparisons",
    )
    lowercase_keys: bool = Field(
        default=False,
        description="Lower-case field names of every collected record",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def conversion(self) -> RecordConversion | None:
        """Record conversion implied by these settings."""
        return RecordConversion.LOWERCASE_KEYS if self.lowercase_keys else None


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Unset variables without a default are left as-is so validation reports them.
    """

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        default = match.group(2)
        if default is not None:
            return default
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> RecordFsmSettings:
    """Load settings from YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (RECORDFSM_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="RECORDFSM",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return RecordFsmSettings(**_expand_env_vars(raw_config))


def resolve_config(settings: RecordFsmSettings) -> dict[str, Any]:
    """Settings as a plain dict, including defaults, for display."""
    return settings.model_dump(mode="json")
