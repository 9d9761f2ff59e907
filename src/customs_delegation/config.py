"""
Configuration management (SSOT).

This module defines ALL configuration for the delegation pipeline.
All config keys are defined here; no other module should invent config keys.

Key invariants:
- Business defaults for the delegation letter/agreements live in
  DelegationDefaults and are injected into the mapper, never hard-coded there
- Column alias overrides extend the built-in alias tables, they never
  remove the built-in aliases
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .schemas.delegation import AgreementStatus, DelegationType, LetterStatus

VALID_VALIDITY_MONTHS = (3, 6, 9, 12)

DEFAULT_DELEGATION_CONTENT = (
    "办理进出口货物的报关、报检手续",
    "代缴相关税费",
    "办理海关查验",
    "提交或修改报关单证",
    "签收海关法律文书",
)

DEFAULT_SUMMARY_MARKERS = ("合计", "总计", "小计")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class ExtractionConfig:
    """Header detection and column resolution settings."""

    # Rows scanned for the header row (and by the content classifier)
    header_search_rows: int = 20
    # Goods rows containing any of these are subtotal/total lines
    summary_markers: tuple[str, ...] = DEFAULT_SUMMARY_MARKERS
    # Extra column aliases per logical field, e.g. {"hs_code": ["税号"]}
    alias_overrides: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass
class MergeConfig:
    """Merge settings."""

    # Record goods fields that two files populate with different values
    detect_conflicts: bool = True


@dataclass
class MappingConfig:
    """Mapping settings."""

    # Turn recorded goods conflicts into user-facing warnings
    warn_on_conflicts: bool = False


@dataclass
class DelegationDefaults:
    """Business defaults for generated delegation documents.

    These are not derived from the uploaded files.
    """

    delegation_type: DelegationType = DelegationType.LONG_TERM
    validity_months: int = 12
    delegation_content: tuple[str, ...] = DEFAULT_DELEGATION_CONTENT
    letter_status: LetterStatus = LetterStatus.INITIATED
    agreement_status: AgreementStatus = AgreementStatus.PENDING_CONFIRMATION
    # Used when no manifest supplies a supervision mode
    default_trade_mode: str = "一般贸易"
    default_currency: str = "USD"
    default_origin: str = "未知"


@dataclass
class Config:
    """Application configuration (SSOT).

    All configuration is centralized here. No other module should define
    configuration keys or defaults.
    """

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)
    mapping: MappingConfig = field(default_factory=MappingConfig)
    delegation: DelegationDefaults = field(default_factory=DelegationDefaults)
    output_dir: Path = field(default_factory=lambda: Path("output"))

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if self.delegation.validity_months not in VALID_VALIDITY_MONTHS:
            errors.append(
                f"delegation.validity_months must be one of {VALID_VALIDITY_MONTHS}, "
                f"got {self.delegation.validity_months}"
            )
        if not self.delegation.delegation_content:
            errors.append("delegation.delegation_content must not be empty")
        if self.extraction.header_search_rows < 1:
            errors.append("extraction.header_search_rows must be >= 1")
        if not self.delegation.default_trade_mode:
            errors.append("delegation.default_trade_mode is required")

        return errors


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name, "").lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return default


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    A missing file yields the defaults. Environment variables can override
    config values:
    - DELEGATION_OUTPUT_DIR
    - DELEGATION_VALIDITY_MONTHS
    - DELEGATION_WARN_ON_CONFLICTS (true/false)
    """
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    # Extraction
    extraction_data = data.get("extraction", {})
    alias_overrides = {
        field_name: tuple(aliases)
        for field_name, aliases in (extraction_data.get("alias_overrides") or {}).items()
    }
    extraction = ExtractionConfig(
        header_search_rows=extraction_data.get("header_search_rows", 20),
        summary_markers=tuple(
            extraction_data.get("summary_markers", DEFAULT_SUMMARY_MARKERS)
        ),
        alias_overrides=alias_overrides,
    )

    # Merge
    merge_data = data.get("merge", {})
    merge = MergeConfig(
        detect_conflicts=merge_data.get("detect_conflicts", True),
    )

    # Mapping
    mapping_data = data.get("mapping", {})
    mapping = MappingConfig(
        warn_on_conflicts=_env_bool(
            "DELEGATION_WARN_ON_CONFLICTS", mapping_data.get("warn_on_conflicts", False)
        ),
    )

    # Delegation defaults
    delegation_data = data.get("delegation", {})
    validity_months = delegation_data.get("validity_months", 12)
    validity_env = os.environ.get("DELEGATION_VALIDITY_MONTHS", "")
    if validity_env:
        try:
            validity_months = int(validity_env)
        except ValueError:
            pass  # Keep configured value

    delegation = DelegationDefaults(
        delegation_type=DelegationType(delegation_data.get("delegation_type", "long-term")),
        validity_months=int(validity_months),
        delegation_content=tuple(
            delegation_data.get("delegation_content", DEFAULT_DELEGATION_CONTENT)
        ),
        default_trade_mode=delegation_data.get("default_trade_mode", "一般贸易"),
        default_currency=delegation_data.get("default_currency", "USD"),
        default_origin=delegation_data.get("default_origin", "未知"),
    )

    output_dir = os.environ.get("DELEGATION_OUTPUT_DIR", data.get("output_dir", "output"))

    return Config(
        extraction=extraction,
        merge=merge,
        mapping=mapping,
        delegation=delegation,
        output_dir=Path(output_dir),
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Customs delegation pipeline configuration

# Header detection and column resolution
extraction:
  header_search_rows: 20                  # Rows scanned for the header row
  summary_markers: ["合计", "总计", "小计"]  # Goods rows with these are skipped
  alias_overrides: {}                     # e.g. {hs_code: ["税号"], goods_name: ["货名"]}

# Merge settings
merge:
  detect_conflicts: true                  # Record goods fields two files disagree on

# Mapping settings
mapping:
  warn_on_conflicts: false                # Surface recorded conflicts as warnings

# Business defaults for generated documents
delegation:
  delegation_type: "long-term"            # single | long-term
  validity_months: 12                     # 3 | 6 | 9 | 12
  delegation_content:
    - "办理进出口货物的报关、报检手续"
    - "代缴相关税费"
    - "办理海关查验"
    - "提交或修改报关单证"
    - "签收海关法律文书"
  default_trade_mode: "一般贸易"           # Used when no manifest is uploaded
  default_currency: "USD"
  default_origin: "未知"

# Where generated workbooks are written
output_dir: "output"
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(default_config)
