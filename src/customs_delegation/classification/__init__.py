"""
Sheet classification module.

Assigns each sheet a semantic type and an advisory confidence.
"""

from .classifier import (
    CONTENT_RULES,
    NAME_RULES,
    ContentRule,
    NameRule,
    SheetClassifier,
    classify_sheet,
    classify_sheets,
)

__all__ = [
    "SheetClassifier",
    "NameRule",
    "ContentRule",
    "NAME_RULES",
    "CONTENT_RULES",
    "classify_sheet",
    "classify_sheets",
]
