"""
Merge result schemas.

MergedData has the shape of ExtractedData plus the provenance of the merge:
the merge log (why every value was chosen), the list of source files, and
the goods-field disagreements that were resolved by priority.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .extraction import (
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    ExtractedData,
    GoodsItem,
)


@dataclass(frozen=True)
class ScoredFile:
    """A file's extraction together with its priority score."""

    file_name: str
    data: ExtractedData
    priority: float


@dataclass(frozen=True)
class MergeLogEntry:
    """Audit trail entry. Never used for control flow."""

    field: str
    source_file: str
    priority_score: float
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "source_file": self.source_file,
            "priority_score": self.priority_score,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class GoodsConflict:
    """Two files populated the same goods field with different values."""

    match_key: str
    field: str
    kept_value: Any
    discarded_value: Any
    kept_source: str
    discarded_source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "match_key": self.match_key,
            "field": self.field,
            "kept_value": str(self.kept_value),
            "discarded_value": str(self.discarded_value),
            "kept_source": self.kept_source,
            "discarded_source": self.discarded_source,
        }


@dataclass(frozen=True)
class MergedData:
    """The authoritative record set for a batch of files."""

    enterprise: Optional[EnterpriseInfo] = None
    customers: Optional[tuple[CustomerInfo, ...]] = None
    declaration: Optional[DeclarationInfo] = None
    goods: Optional[tuple[GoodsItem, ...]] = None
    total_row_count: int = 0
    merge_log: tuple[MergeLogEntry, ...] = ()
    source_file_names: tuple[str, ...] = ()
    conflicts: tuple[GoodsConflict, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "enterprise": self.enterprise.to_dict() if self.enterprise else None,
            "customers": (
                [c.to_dict() for c in self.customers] if self.customers is not None else None
            ),
            "declaration": self.declaration.to_dict() if self.declaration else None,
            "goods": [g.to_dict() for g in self.goods] if self.goods is not None else None,
            "total_row_count": self.total_row_count,
            "merge_log": [entry.to_dict() for entry in self.merge_log],
            "source_file_names": list(self.source_file_names),
            "conflicts": [c.to_dict() for c in self.conflicts],
        }
