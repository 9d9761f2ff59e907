"""
Column alias tables.

Each logical field maps to the header spellings seen across trading
partners' documents. Matching is case-insensitive and substring in either
direction, so order matters only between fields whose aliases overlap.

These tables are plain data; callers can pass their own (or extend these
through ExtractionConfig.alias_overrides) without touching extraction code.
"""

from typing import Mapping, Optional, Sequence

AliasTable = Mapping[str, Sequence[str]]

GOODS_FIELD_ALIASES: AliasTable = {
    "hs_code": ("HS编码", "商品HS编码", "商品编码", "HS CODE"),
    "goods_name": ("商品名称", "品名", "货物名称", "DESCRIPTION", "Description&Specification"),
    "total_price": ("总价", "总金额", "AMOUNT", "金额", "Amount"),
    "origin": ("原产国", "原产地", "产地", "ORIGIN", "原产国/地区"),
    "quantity": ("数量", "数  量", "QTY", "Qty"),
    "unit": ("单位", "UNIT", "Unit"),
    "unit_price": ("单价", "UNIT PRICE", "Unit Price"),
    "currency": ("币制", "币种", "CURRENCY"),
    "net_weight": ("净重", "净重（千克）", "N/W", "N/W(KG)"),
    "gross_weight": ("毛重", "毛重（千克）", "G/W", "G/W(KG)"),
    "item_code": ("货号", "料号", "企业料号", "金二料号", "合捷货号"),
}

ENTERPRISE_FIELD_ALIASES: AliasTable = {
    "name": ("加工单位名称", "单位名称", "企业名称"),
    "customs_code": ("加工单位编码", "单位编码", "海关编码"),
    "social_credit_code": ("加工单位三证合一代码", "三证合一代码", "统一社会信用代码"),
    "legal_person": ("加工单位法人代表", "法人代表", "法人"),
    "phone": ("加工单位联系电话", "联系电话", "电话"),
}

CUSTOMER_FIELD_ALIASES: AliasTable = {
    "name": ("单位名称", "客户名称", "供应商名称"),
    "customs_code": ("单位代码", "客户代码", "海关编码"),
    "social_credit_code": ("三证合一代码", "统一社会信用代码"),
    "english_name": ("单位英文名", "英文名称", "English Name"),
}

DECLARATION_FIELD_ALIASES: AliasTable = {
    "supervision_mode": ("监管方式", "贸易方式"),
    "record_number": ("备案编号", "账册编号"),
    "import_export_flag": ("进出口标志", "进出口"),
    "entry_date": ("录入日期", "日期", "申报日期"),
    "operating_unit_name": ("经营单位名称", "经营单位"),
    "operating_unit_code": ("经营单位代码",),
}

# Keywords that identify the header row of each sheet type
ENTERPRISE_HEADER_KEYWORDS = ("加工单位名称", "加工单位编码")
CUSTOMER_HEADER_KEYWORDS = ("单位名称", "单位代码")
DECLARATION_HEADER_KEYWORDS = ("监管方式", "备案编号")
GOODS_HEADER_KEYWORDS = ("HS编码", "商品名称")


def with_overrides(
    table: AliasTable, overrides: Optional[Mapping[str, Sequence[str]]] = None
) -> dict[str, tuple[str, ...]]:
    """Return a copy of table with override aliases appended per field.

    Fields not present in table are ignored.
    """
    merged = {name: tuple(aliases) for name, aliases in table.items()}
    for name, extra in (overrides or {}).items():
        if name in merged:
            merged[name] = merged[name] + tuple(a for a in extra if a not in merged[name])
    return merged
