"""Tests for configuration schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from recordfsm.contracts import CompareMode, OutputFormat, RecordConversion


class TestRecordFsmSettings:
    """Settings schema validation."""

    def test_defaults(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        settings = RecordFsmSettings()
        assert settings.output_format is OutputFormat.YAML
        assert settings.compare_mode is CompareMode.POSITIONAL
        assert settings.key_fields == ()
        assert settings.lowercase_keys is False
        assert settings.log_level == "INFO"
        assert settings.conversion is None

    def test_lowercase_keys_implies_conversion(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        settings = RecordFsmSettings(lowercase_keys=True)
        assert settings.conversion is RecordConversion.LOWERCASE_KEYS

    def test_log_level_case_insensitive(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        assert RecordFsmSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        with pytest.raises(ValidationError):
            RecordFsmSettings(log_level="LOUD")

    def test_invalid_output_format(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        with pytest.raises(ValidationError):
            RecordFsmSettings(output_format="xml")

    def test_unknown_field_rejected(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        with pytest.raises(ValidationError):
            RecordFsmSettings(templates_dir="/tmp")

    def test_settings_are_frozen(self) -> None:
        from recordfsm.core.config import RecordFsmSettings

        settings = RecordFsmSettings()
        with pytest.raises(ValidationError):
            settings.lowercase_keys = True  # type: ignore[misc]


class TestLoadSettings:
    """Loading from YAML with environment overrides."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        from recordfsm.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            "output_format: json\ncompare_mode: keyed\nkey_fields: [INTERFACE]\nlowercase_keys: true\n"
        )

        settings = load_settings(config_file)

        assert settings.output_format is OutputFormat.JSON
        assert settings.compare_mode is CompareMode.KEYED
        assert settings.key_fields == ("INTERFACE",)
        assert settings.lowercase_keys is True

    def test_missing_file(self, tmp_path: Path) -> None:
        from recordfsm.core.config import load_settings

        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from recordfsm.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("output_format: yaml\n")
        monkeypatch.setenv("RECORDFSM_OUTPUT_FORMAT", "json")

        assert load_settings(config_file).output_format is OutputFormat.JSON

    def test_env_var_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from recordfsm.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text('log_level: "${TEST_LOG_LEVEL:-warning}"\n')
        monkeypatch.delenv("TEST_LOG_LEVEL", raising=False)

        assert load_settings(config_file).log_level == "WARNING"

    def test_invalid_value_raises_validation_error(self, tmp_path: Path) -> None:
        from recordfsm.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("compare_mode: fuzzy\n")

        with pytest.raises(ValidationError):
            load_settings(config_file)


class TestResolveConfig:
    def test_includes_defaults(self) -> None:
        from recordfsm.core.config import RecordFsmSettings, resolve_config

        resolved = resolve_config(RecordFsmSettings(output_format="json"))

        assert resolved == {
            "output_format": "json",
            "compare_mode": "positional",
            "key_fields": [],
            "lowercase_keys": False,
            "log_level": "INFO",
        }
