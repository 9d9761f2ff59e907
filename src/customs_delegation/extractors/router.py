"""
Extractor router - dispatches each classified sheet to its extractor and
aggregates the results of one file into a single ExtractedData.
"""

import logging
from typing import Optional, Sequence

from ..config import ExtractionConfig
from ..schemas.extraction import (
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    ExtractedData,
    GoodsItem,
    SheetType,
    TypedSheet,
)
from .aliases import (
    CUSTOMER_FIELD_ALIASES,
    DECLARATION_FIELD_ALIASES,
    ENTERPRISE_FIELD_ALIASES,
    GOODS_FIELD_ALIASES,
    with_overrides,
)
from .base import count_data_rows
from .fields import (
    extract_customer_info,
    extract_declaration_info,
    extract_enterprise_info,
    extract_goods_items,
)

logger = logging.getLogger(__name__)


class ExtractorRouter:
    """
    Routes sheets to the extractor for their type.

    Within one file:
    - the first sheet that yields an enterprise / customer list / manifest wins
    - goods lines from every invoice and packing sheet are concatenated
    - the raw row count covers every sheet, including unknown ones
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        overrides = self.config.alias_overrides
        self.enterprise_aliases = with_overrides(ENTERPRISE_FIELD_ALIASES, overrides)
        self.customer_aliases = with_overrides(CUSTOMER_FIELD_ALIASES, overrides)
        self.declaration_aliases = with_overrides(DECLARATION_FIELD_ALIASES, overrides)
        self.goods_aliases = with_overrides(GOODS_FIELD_ALIASES, overrides)

    def extract(self, sheets: Sequence[TypedSheet]) -> ExtractedData:
        """
        Extract all records from one file's classified sheets.

        Args:
            sheets: The file's sheets with their classifier-assigned types

        Returns:
            ExtractedData for the file
        """
        limit = self.config.header_search_rows

        enterprise: Optional[EnterpriseInfo] = None
        customers: Optional[tuple[CustomerInfo, ...]] = None
        declaration: Optional[DeclarationInfo] = None
        goods: Optional[list[GoodsItem]] = None
        total_rows = 0

        for sheet in sheets:
            rows = sheet.rows

            if sheet.sheet_type == SheetType.ENTERPRISE:
                if enterprise is None:
                    enterprise = extract_enterprise_info(rows, self.enterprise_aliases, limit)

            elif sheet.sheet_type == SheetType.CUSTOMER:
                if customers is None:
                    customers = extract_customer_info(rows, self.customer_aliases, limit)

            elif sheet.sheet_type == SheetType.DECLARATION:
                if declaration is None:
                    declaration = extract_declaration_info(
                        rows, self.declaration_aliases, limit
                    )

            elif sheet.sheet_type.carries_goods:
                items = extract_goods_items(
                    rows, self.goods_aliases, limit, self.config.summary_markers
                )
                goods = (goods or []) + list(items)

            total_rows += count_data_rows(rows)

        logger.debug(
            f"Extracted enterprise={enterprise is not None}, "
            f"customers={len(customers or ())}, declaration={declaration is not None}, "
            f"goods={len(goods or ())}, rows={total_rows}"
        )

        return ExtractedData(
            enterprise=enterprise,
            customers=customers,
            declaration=declaration,
            goods=tuple(goods) if goods is not None else None,
            total_row_count=total_rows,
        )


def extract_data_from_file(
    sheets: Sequence[TypedSheet],
    config: Optional[ExtractionConfig] = None,
) -> ExtractedData:
    """Extract one file's records with the default (or given) settings."""
    return ExtractorRouter(config).extract(sheets)
