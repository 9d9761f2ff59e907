"""
Merge module.

Reconciles overlapping records from several files into one MergedData.
"""

from .merger import (
    DataMerger,
    GoodsMergeResult,
    merge_customer_info,
    merge_declaration_info,
    merge_enterprise_info,
    merge_excel_data,
    merge_goods_items,
    score_files,
)

__all__ = [
    "DataMerger",
    "GoodsMergeResult",
    "merge_excel_data",
    "merge_enterprise_info",
    "merge_customer_info",
    "merge_declaration_info",
    "merge_goods_items",
    "score_files",
]
