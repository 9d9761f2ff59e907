"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from customs_delegation.config import (
    DEFAULT_DELEGATION_CONTENT,
    Config,
    DelegationDefaults,
    ExtractionConfig,
    create_default_config,
    load_config,
)
from customs_delegation.schemas import DelegationType

ENV_VARS = (
    "DELEGATION_OUTPUT_DIR",
    "DELEGATION_VALIDITY_MONTHS",
    "DELEGATION_WARN_ON_CONFLICTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")

        assert config.extraction.header_search_rows == 20
        assert config.merge.detect_conflicts is True
        assert config.mapping.warn_on_conflicts is False
        assert config.delegation.validity_months == 12
        assert config.delegation.delegation_content == DEFAULT_DELEGATION_CONTENT
        assert config.output_dir == Path("output")

    def test_default_template_round_trips(self, tmp_path):
        path = tmp_path / "conf" / "config.yaml"

        create_default_config(path)
        config = load_config(path)

        assert path.exists()
        assert config.validate() == []
        assert config.delegation == DelegationDefaults()
        assert config.extraction.summary_markers == ("合计", "总计", "小计")
        assert config.extraction.alias_overrides == {}

    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            """
extraction:
  header_search_rows: 30
  alias_overrides:
    hs_code: ["税号"]
merge:
  detect_conflicts: false
mapping:
  warn_on_conflicts: true
delegation:
  delegation_type: "single"
  validity_months: 6
  default_currency: "CNY"
output_dir: "out"
""",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.extraction.header_search_rows == 30
        assert config.extraction.alias_overrides == {"hs_code": ("税号",)}
        assert config.merge.detect_conflicts is False
        assert config.mapping.warn_on_conflicts is True
        assert config.delegation.delegation_type == DelegationType.SINGLE
        assert config.delegation.validity_months == 6
        assert config.delegation.default_currency == "CNY"
        assert config.delegation.default_origin == "未知"
        assert config.output_dir == Path("out")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path).delegation.validity_months == 12

    def test_unknown_delegation_type_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("delegation:\n  delegation_type: forever\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)


class TestEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_output_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DELEGATION_OUTPUT_DIR", "/tmp/delegation")

        config = load_config(tmp_path / "missing.yaml")

        assert config.output_dir == Path("/tmp/delegation")

    def test_validity_months(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DELEGATION_VALIDITY_MONTHS", "9")

        assert load_config(tmp_path / "missing.yaml").delegation.validity_months == 9

    def test_invalid_validity_months_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DELEGATION_VALIDITY_MONTHS", "soon")

        assert load_config(tmp_path / "missing.yaml").delegation.validity_months == 12

    @pytest.mark.parametrize("value,expected", [("true", True), ("FALSE", False), ("", False)])
    def test_warn_on_conflicts(self, tmp_path, monkeypatch, value, expected):
        monkeypatch.setenv("DELEGATION_WARN_ON_CONFLICTS", value)

        assert load_config(tmp_path / "missing.yaml").mapping.warn_on_conflicts is expected


class TestValidate:
    """Tests for configuration validation."""

    def test_defaults_are_valid(self):
        assert Config().validate() == []

    def test_validity_months_must_be_quarterly(self):
        config = Config(delegation=DelegationDefaults(validity_months=7))

        errors = config.validate()

        assert len(errors) == 1
        assert "validity_months" in errors[0]

    def test_multiple_errors(self):
        config = Config(
            extraction=ExtractionConfig(header_search_rows=0),
            delegation=DelegationDefaults(delegation_content=(), default_trade_mode=""),
        )

        assert len(config.validate()) == 3
