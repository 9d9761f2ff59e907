"""
Sheet classifier implementation.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..extractors.base import HEADER_SEARCH_ROWS, count_data_rows, row_text
from ..schemas.extraction import (
    Row,
    SheetClassification,
    SheetData,
    SheetType,
    TypedSheet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NameRule:
    """Matches on the sheet name, exactly or as a substring."""

    pattern: str
    sheet_type: SheetType
    confidence: float
    exact: bool = False

    def matches(self, sheet_name: str) -> bool:
        if self.exact:
            return sheet_name == self.pattern
        return self.pattern in sheet_name


@dataclass(frozen=True)
class ContentRule:
    """Matches when every keyword occurs in the sheet's leading rows."""

    keywords: tuple[str, ...]
    sheet_type: SheetType
    confidence: float

    def matches(self, content: str) -> bool:
        return all(keyword.lower() in content for keyword in self.keywords)


# Exact names first, then substrings. Order is significant.
NAME_RULES: tuple[NameRule, ...] = (
    NameRule("企业", SheetType.ENTERPRISE, 1.0, exact=True),
    NameRule("客户供应商", SheetType.CUSTOMER, 1.0, exact=True),
    NameRule("核注清单", SheetType.DECLARATION, 1.0, exact=True),
    NameRule("发票", SheetType.INVOICE, 0.9),
    NameRule("装箱", SheetType.PACKING, 0.9),
)

CONTENT_RULES: tuple[ContentRule, ...] = (
    ContentRule(("加工单位编码", "加工单位名称"), SheetType.ENTERPRISE, 0.8),
    ContentRule(("单位代码", "单位名称"), SheetType.CUSTOMER, 0.8),
    ContentRule(("监管方式", "备案编号"), SheetType.DECLARATION, 0.8),
    ContentRule(("hs编码", "总价"), SheetType.INVOICE, 0.7),
    ContentRule(("净重", "毛重"), SheetType.PACKING, 0.7),
)


class SheetClassifier:
    """
    Assigns a semantic type to a sheet.

    Rule sources (in order of trust):
    1. Exact sheet name: 1.0
    2. Sheet name substring: 0.9
    3. Header keyword co-occurrence in the first rows: 0.7-0.8

    Confidence is advisory; nothing gates extraction on it.
    """

    def __init__(
        self,
        name_rules: Sequence[NameRule] = NAME_RULES,
        content_rules: Sequence[ContentRule] = CONTENT_RULES,
        search_rows: int = HEADER_SEARCH_ROWS,
    ):
        self.name_rules = tuple(name_rules)
        self.content_rules = tuple(content_rules)
        self.search_rows = search_rows

    def classify(self, sheet_name: str, rows: Sequence[Row]) -> SheetClassification:
        """Classify one sheet from its name and rows."""
        data_rows = count_data_rows(rows)

        rule = self._match_name(sheet_name)
        if rule is None:
            rule = self._match_content(rows)

        if rule is None:
            logger.debug(f"Sheet '{sheet_name}' not recognized")
            return SheetClassification(SheetType.UNKNOWN, 0.0, sheet_name, data_rows)

        logger.debug(
            f"Sheet '{sheet_name}' classified as {rule.sheet_type.value} "
            f"({rule.confidence:.0%})"
        )
        return SheetClassification(rule.sheet_type, rule.confidence, sheet_name, data_rows)

    def classify_sheets(self, sheets: Sequence[SheetData]) -> tuple[TypedSheet, ...]:
        """Classify every sheet of a file and attach the assigned type."""
        return tuple(
            TypedSheet(
                name=sheet.name,
                sheet_type=self.classify(sheet.name, sheet.rows).sheet_type,
                rows=sheet.rows,
            )
            for sheet in sheets
        )

    def _match_name(self, sheet_name: str) -> Optional[NameRule]:
        for rule in self.name_rules:
            if rule.matches(sheet_name):
                return rule
        return None

    def _match_content(self, rows: Sequence[Row]) -> Optional[ContentRule]:
        content = "|".join(row_text(row) for row in rows[: self.search_rows] if row)
        for rule in self.content_rules:
            if rule.matches(content):
                return rule
        return None


_default_classifier = SheetClassifier()


def classify_sheet(sheet_name: str, rows: Sequence[Row]) -> SheetClassification:
    """Classify one sheet with the default rule tables."""
    return _default_classifier.classify(sheet_name, rows)


def classify_sheets(sheets: Sequence[SheetData]) -> tuple[TypedSheet, ...]:
    """Classify every sheet of a file with the default rule tables."""
    return _default_classifier.classify_sheets(sheets)
