"""Test fixtures and utilities."""

from decimal import Decimal

import pytest

from customs_delegation.schemas import (
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    ExtractedData,
    GoodsItem,
    SheetData,
)

# Sample sheets as a file-reading collaborator would hand them in
ENTERPRISE_ROWS = [
    ["加工单位名称", "加工单位编码", "加工单位三证合一代码", "加工单位法人代表", "加工单位联系电话"],
    ["苏州精密制造有限公司", 3205940123.0, "91320594MA1XXXXX0Y", "张伟", "0512-66668888"],
]

CUSTOMER_ROWS = [
    ["客户供应商信息"],
    ["单位名称", "单位代码", "三证合一代码", "单位英文名"],
    ["上海环球贸易有限公司", "3122260001", "91310115MA1H000001", "Shanghai Global Trading"],
    ["深圳远航进出口有限公司", "4403960002", None, "Shenzhen Voyage Trading"],
    [None, None, None, None],
]

DECLARATION_ROWS = [
    ["监管方式", "备案编号", "进出口标志", "录入日期", "经营单位名称", "经营单位代码"],
    ["进料对口", "E23056000123", "I", "2024-03-15", "苏州精密制造有限公司", "3205940123"],
]

INVOICE_ROWS = [
    ["COMMERCIAL INVOICE"],
    ["发票号: INV-2024-001"],
    ["序号", "HS编码", "商品名称", "数量", "单位", "单价", "总价", "币制", "原产国", "货号"],
    [1, "8471300000", "笔记本电脑", 100, "台", 450.5, 45050, "USD", "中国", "NB-001"],
    [2, "8517120000", "手机", 200, "部", 120, 24000, "USD", "越南", "PH-002"],
    [None, None, None, None, None, None, None, None, None, None],
    [None, None, "合计", 300, None, None, 69050, None, None, None],
]

PACKING_ROWS = [
    ["HS编码", "商品名称", "数量", "净重", "毛重"],
    ["8471300000", "笔记本电脑", 100, 250.0, 280.5],
]


@pytest.fixture
def enterprise_rows():
    return ENTERPRISE_ROWS


@pytest.fixture
def customer_rows():
    return CUSTOMER_ROWS


@pytest.fixture
def declaration_rows():
    return DECLARATION_ROWS


@pytest.fixture
def invoice_rows():
    return INVOICE_ROWS


@pytest.fixture
def packing_rows():
    return PACKING_ROWS


@pytest.fixture
def complete_workbook():
    """All five sheet types under their canonical names."""
    return (
        SheetData.from_rows("企业", ENTERPRISE_ROWS),
        SheetData.from_rows("客户供应商", CUSTOMER_ROWS),
        SheetData.from_rows("核注清单", DECLARATION_ROWS),
        SheetData.from_rows("发票", INVOICE_ROWS),
        SheetData.from_rows("装箱单", PACKING_ROWS),
    )


@pytest.fixture
def sample_enterprise():
    return EnterpriseInfo(
        name="苏州精密制造有限公司",
        customs_code="3205940123",
        social_credit_code="91320594MA1XXXXX0Y",
        legal_person="张伟",
        phone="0512-66668888",
    )


@pytest.fixture
def sample_customer():
    return CustomerInfo(
        name="上海环球贸易有限公司",
        customs_code="3122260001",
        social_credit_code="91310115MA1H000001",
    )


@pytest.fixture
def sample_declaration():
    return DeclarationInfo(
        supervision_mode="区内物流货物",
        record_number="T111",
        import_export_flag="进口",
        entry_date="2025-01-25",
    )


@pytest.fixture
def sample_goods():
    return (
        GoodsItem(
            goods_name="白炽灯",
            hs_code="8512201000",
            match_key="HS:8512201000",
            quantity=Decimal("1000"),
            total_price=Decimal("5000"),
            currency="CNY",
            origin="泰国",
        ),
        GoodsItem(
            goods_name="线束",
            hs_code="8544302000",
            match_key="HS:8544302000",
            quantity=Decimal("50"),
        ),
    )


@pytest.fixture
def sample_extraction(sample_enterprise, sample_customer, sample_declaration, sample_goods):
    return ExtractedData(
        enterprise=sample_enterprise,
        customers=(sample_customer,),
        declaration=sample_declaration,
        goods=sample_goods,
        total_row_count=12,
    )
