"""
SSOT (Single Source of Truth) schemas for the delegation pipeline.

These value types are the ONLY models passed between stages.
"""

from .delegation import (
    AgreementStatus,
    DelegationAgreement,
    DelegationLetter,
    DelegationType,
    LetterStatus,
    MappingResult,
)
from .extraction import (
    GOODS_MERGE_FIELDS,
    UNKNOWN_MATCH_KEY,
    Cell,
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    ExtractedData,
    GoodsItem,
    Row,
    SheetClassification,
    SheetData,
    SheetType,
    SourceFile,
    TypedSheet,
)
from .merge import GoodsConflict, MergedData, MergeLogEntry, ScoredFile

__all__ = [
    # Extraction (per-sheet / per-file)
    "Cell",
    "Row",
    "SheetType",
    "SheetData",
    "TypedSheet",
    "SheetClassification",
    "EnterpriseInfo",
    "CustomerInfo",
    "DeclarationInfo",
    "GoodsItem",
    "ExtractedData",
    "SourceFile",
    "GOODS_MERGE_FIELDS",
    "UNKNOWN_MATCH_KEY",
    # Merge (per-batch)
    "ScoredFile",
    "MergeLogEntry",
    "GoodsConflict",
    "MergedData",
    # Delegation output
    "DelegationType",
    "LetterStatus",
    "AgreementStatus",
    "DelegationLetter",
    "DelegationAgreement",
    "MappingResult",
]
