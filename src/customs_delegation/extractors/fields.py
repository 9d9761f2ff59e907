"""
Per-sheet-type record extractors.

Each extractor locates the header row, resolves columns through an alias
table and reads records below it. Degenerate input (empty sheets, missing
header, missing identity fields) yields None or an empty tuple, never an
exception.
"""

import logging
from typing import Optional, Sequence

from ..config import DEFAULT_SUMMARY_MARKERS
from ..schemas.extraction import (
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    GoodsItem,
    Row,
)
from .aliases import (
    CUSTOMER_FIELD_ALIASES,
    CUSTOMER_HEADER_KEYWORDS,
    DECLARATION_FIELD_ALIASES,
    DECLARATION_HEADER_KEYWORDS,
    ENTERPRISE_FIELD_ALIASES,
    ENTERPRISE_HEADER_KEYWORDS,
    GOODS_FIELD_ALIASES,
    GOODS_HEADER_KEYWORDS,
    AliasTable,
)
from .base import (
    HEADER_SEARCH_ROWS,
    ColumnMap,
    find_header_row,
    generate_match_key,
    row_has_content,
    row_text,
)

logger = logging.getLogger(__name__)

SUMMARY_MARKERS = DEFAULT_SUMMARY_MARKERS


def _single_record_row(
    rows: Sequence[Row],
    keywords: Sequence[str],
    aliases: AliasTable,
    search_limit: int,
) -> Optional[tuple[ColumnMap, Row]]:
    """Header columns plus the one row right below the header."""
    if len(rows) < 2:
        return None

    header_index = find_header_row(rows, keywords, search_limit)
    if header_index >= len(rows) - 1:
        return None

    data_row = rows[header_index + 1]
    if not data_row:
        return None

    return ColumnMap(rows[header_index], aliases), data_row


def extract_enterprise_info(
    rows: Sequence[Row],
    aliases: AliasTable = ENTERPRISE_FIELD_ALIASES,
    search_limit: int = HEADER_SEARCH_ROWS,
) -> Optional[EnterpriseInfo]:
    """Extract the processing enterprise from the row below the header."""
    found = _single_record_row(rows, ENTERPRISE_HEADER_KEYWORDS, aliases, search_limit)
    if not found:
        return None
    columns, row = found

    name = columns.text(row, "name")
    customs_code = columns.text(row, "customs_code")
    if not name and not customs_code:
        logger.debug("Enterprise sheet has no name or customs code below its header")
        return None

    return EnterpriseInfo(
        name=name,
        customs_code=customs_code,
        social_credit_code=columns.text(row, "social_credit_code"),
        legal_person=columns.optional_text(row, "legal_person"),
        phone=columns.optional_text(row, "phone"),
    )


def extract_customer_info(
    rows: Sequence[Row],
    aliases: AliasTable = CUSTOMER_FIELD_ALIASES,
    search_limit: int = HEADER_SEARCH_ROWS,
) -> tuple[CustomerInfo, ...]:
    """Extract every customer/supplier row below the header."""
    if len(rows) < 2:
        return ()

    header_index = find_header_row(rows, CUSTOMER_HEADER_KEYWORDS, search_limit)
    if header_index >= len(rows) - 1:
        return ()

    columns = ColumnMap(rows[header_index], aliases)
    customers = []

    for row in rows[header_index + 1 :]:
        if not row:
            continue

        name = columns.text(row, "name")
        customs_code = columns.text(row, "customs_code")
        if not name and not customs_code:
            continue

        customers.append(
            CustomerInfo(
                name=name,
                customs_code=customs_code,
                social_credit_code=columns.optional_text(row, "social_credit_code"),
                english_name=columns.optional_text(row, "english_name"),
            )
        )

    return tuple(customers)


def extract_declaration_info(
    rows: Sequence[Row],
    aliases: AliasTable = DECLARATION_FIELD_ALIASES,
    search_limit: int = HEADER_SEARCH_ROWS,
) -> Optional[DeclarationInfo]:
    """Extract the customs manifest record from the row below the header."""
    found = _single_record_row(rows, DECLARATION_HEADER_KEYWORDS, aliases, search_limit)
    if not found:
        return None
    columns, row = found

    supervision_mode = columns.text(row, "supervision_mode")
    record_number = columns.text(row, "record_number")
    if not supervision_mode and not record_number:
        logger.debug("Manifest sheet has no supervision mode or record number")
        return None

    return DeclarationInfo(
        supervision_mode=supervision_mode,
        record_number=record_number,
        import_export_flag=columns.text(row, "import_export_flag"),
        entry_date=columns.optional_text(row, "entry_date"),
        operating_unit_name=columns.optional_text(row, "operating_unit_name"),
        operating_unit_code=columns.optional_text(row, "operating_unit_code"),
    )


def _is_summary_row(row: Row, markers: Sequence[str]) -> bool:
    text = row_text(row, separator="")
    return any(marker in text for marker in markers)


def extract_goods_items(
    rows: Sequence[Row],
    aliases: AliasTable = GOODS_FIELD_ALIASES,
    search_limit: int = HEADER_SEARCH_ROWS,
    summary_markers: Sequence[str] = SUMMARY_MARKERS,
) -> tuple[GoodsItem, ...]:
    """
    Extract goods lines from an invoice or packing list.

    Skips blank rows, subtotal/total rows and rows with neither HS code nor
    goods name. Numeric cells that are empty or not numbers stay None.
    """
    if len(rows) < 2:
        return ()

    header_index = find_header_row(rows, GOODS_HEADER_KEYWORDS, search_limit)
    if header_index >= len(rows) - 1:
        return ()

    columns = ColumnMap(rows[header_index], aliases)
    items = []
    skipped = 0

    for row in rows[header_index + 1 :]:
        if not row or not row_has_content(row):
            continue

        if _is_summary_row(row, summary_markers):
            skipped += 1
            continue

        hs_code = columns.text(row, "hs_code")
        goods_name = columns.text(row, "goods_name")
        if not hs_code and not goods_name:
            skipped += 1
            continue

        item_code = columns.optional_text(row, "item_code")
        items.append(
            GoodsItem(
                goods_name=goods_name,
                hs_code=hs_code,
                quantity=columns.number(row, "quantity"),
                unit=columns.optional_text(row, "unit"),
                unit_price=columns.number(row, "unit_price"),
                total_price=columns.number(row, "total_price"),
                currency=columns.optional_text(row, "currency") or None,
                origin=columns.optional_text(row, "origin"),
                net_weight=columns.number(row, "net_weight"),
                gross_weight=columns.number(row, "gross_weight"),
                item_code=item_code,
                match_key=generate_match_key(hs_code, item_code, goods_name),
            )
        )

    logger.debug(f"Extracted {len(items)} goods line(s), skipped {skipped} row(s)")
    return tuple(items)
