"""
Field extractors.

Provides:
- Header-row location and alias-based column resolution
- Per-sheet-type extractors (enterprise, customers, manifest, goods lines)
- Match-key generation for goods lines
- ExtractorRouter: aggregates one file's sheets into ExtractedData
"""

from .aliases import (
    CUSTOMER_FIELD_ALIASES,
    DECLARATION_FIELD_ALIASES,
    ENTERPRISE_FIELD_ALIASES,
    GOODS_FIELD_ALIASES,
    with_overrides,
)
from .base import (
    ColumnMap,
    cell_to_text,
    count_data_rows,
    find_column_index,
    find_header_row,
    generate_match_key,
    parse_number,
)
from .fields import (
    extract_customer_info,
    extract_declaration_info,
    extract_enterprise_info,
    extract_goods_items,
)
from .router import ExtractorRouter, extract_data_from_file

__all__ = [
    "ExtractorRouter",
    "extract_data_from_file",
    "extract_enterprise_info",
    "extract_customer_info",
    "extract_declaration_info",
    "extract_goods_items",
    "find_header_row",
    "find_column_index",
    "generate_match_key",
    "parse_number",
    "cell_to_text",
    "count_data_rows",
    "ColumnMap",
    "GOODS_FIELD_ALIASES",
    "ENTERPRISE_FIELD_ALIASES",
    "CUSTOMER_FIELD_ALIASES",
    "DECLARATION_FIELD_ALIASES",
    "with_overrides",
]
