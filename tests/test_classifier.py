"""Tests for sheet classification."""

import pytest

from customs_delegation.classification import (
    ContentRule,
    NameRule,
    SheetClassifier,
    classify_sheet,
    classify_sheets,
)
from customs_delegation.schemas import SheetData, SheetType


class TestNameRules:
    """Tests for classification by sheet name."""

    @pytest.mark.parametrize(
        "sheet_name,expected",
        [
            ("企业", SheetType.ENTERPRISE),
            ("客户供应商", SheetType.CUSTOMER),
            ("核注清单", SheetType.DECLARATION),
        ],
    )
    def test_exact_names(self, sheet_name, expected):
        """Canonical sheet names classify with full confidence."""
        result = classify_sheet(sheet_name, [])

        assert result.sheet_type == expected
        assert result.confidence == 1.0

    def test_invoice_substring(self):
        """Any name containing 发票 is an invoice."""
        result = classify_sheet("出口发票(2024)", [])

        assert result.sheet_type == SheetType.INVOICE
        assert result.confidence == 0.9

    def test_packing_substring(self):
        result = classify_sheet("装箱单", [])

        assert result.sheet_type == SheetType.PACKING
        assert result.confidence == 0.9

    def test_enterprise_name_must_be_exact(self, invoice_rows):
        """企业信息 is not the enterprise sheet by name; content decides."""
        result = classify_sheet("企业信息", invoice_rows)

        assert result.sheet_type == SheetType.INVOICE
        assert result.confidence == 0.7

    def test_name_beats_content(self, packing_rows):
        """A name match wins even if the content looks like another type."""
        result = classify_sheet("发票", packing_rows)

        assert result.sheet_type == SheetType.INVOICE


class TestContentRules:
    """Tests for classification by header keywords."""

    def test_enterprise_content(self, enterprise_rows):
        result = classify_sheet("Sheet1", enterprise_rows)

        assert result.sheet_type == SheetType.ENTERPRISE
        assert result.confidence == 0.8

    def test_customer_content(self, customer_rows):
        result = classify_sheet("Sheet2", customer_rows)

        assert result.sheet_type == SheetType.CUSTOMER
        assert result.confidence == 0.8

    def test_declaration_content(self):
        rows = [["监管方式", "备案编号"], ["一般贸易", "E1"]]

        result = classify_sheet("Sheet3", rows)

        assert result.sheet_type == SheetType.DECLARATION
        assert result.confidence == 0.8

    def test_invoice_content(self, invoice_rows):
        """HS编码 + 总价 anywhere in the first rows means invoice."""
        result = classify_sheet("Sheet4", invoice_rows)

        assert result.sheet_type == SheetType.INVOICE
        assert result.confidence == 0.7

    def test_packing_content(self, packing_rows):
        result = classify_sheet("Sheet5", packing_rows)

        assert result.sheet_type == SheetType.PACKING
        assert result.confidence == 0.7

    def test_keyword_match_is_case_insensitive(self):
        rows = [["hs编码", "品名", "总价"]]

        result = classify_sheet("data", rows)

        assert result.sheet_type == SheetType.INVOICE

    def test_keywords_beyond_search_window_ignored(self):
        """Only the first 20 rows are scanned."""
        rows = [["备注"]] * 20 + [["HS编码", "总价"]]

        result = classify_sheet("data", rows)

        assert result.sheet_type == SheetType.UNKNOWN


class TestUnknownSheets:
    """Tests for unrecognized sheets."""

    def test_unknown_has_zero_confidence(self):
        result = classify_sheet("Sheet1", [["备注", "说明"], ["无", "无"]])

        assert result.sheet_type == SheetType.UNKNOWN
        assert result.confidence == 0.0

    def test_empty_sheet(self):
        result = classify_sheet("Sheet1", [])

        assert result.sheet_type == SheetType.UNKNOWN
        assert result.data_row_count == 0

    def test_numeric_cells_do_not_break_classification(self):
        rows = [[1, 2.5, None], [None, 3, "x"]]

        result = classify_sheet("Sheet1", rows)

        assert result.sheet_type == SheetType.UNKNOWN


class TestDataRowCount:
    """Tests for the data row count."""

    def test_counts_only_non_empty_rows(self, invoice_rows):
        """The all-empty row is excluded."""
        result = classify_sheet("发票", invoice_rows)

        assert result.data_row_count == 6

    def test_whitespace_cell_counts_as_content(self):
        result = classify_sheet("Sheet1", [[" "], [None, ""], []])

        assert result.data_row_count == 1


class TestSheetClassifier:
    """Tests for custom rule tables and batch classification."""

    def test_custom_rules(self):
        classifier = SheetClassifier(
            name_rules=(NameRule("Invoice", SheetType.INVOICE, 0.95),),
            content_rules=(ContentRule(("gross", "net"), SheetType.PACKING, 0.6),),
        )

        assert classifier.classify("Invoice 01", []).sheet_type == SheetType.INVOICE
        packing = classifier.classify("data", [["Net", "Gross"]])
        assert packing.sheet_type == SheetType.PACKING
        assert packing.confidence == 0.6

    def test_classify_sheets_keeps_order_and_rows(self, complete_workbook):
        typed = classify_sheets(complete_workbook)

        assert [t.sheet_type for t in typed] == [
            SheetType.ENTERPRISE,
            SheetType.CUSTOMER,
            SheetType.DECLARATION,
            SheetType.INVOICE,
            SheetType.PACKING,
        ]
        assert typed[3].rows == complete_workbook[3].rows

    def test_to_dict(self):
        result = classify_sheet("发票", [["HS编码"]])

        assert result.to_dict() == {
            "sheet_type": "invoice",
            "confidence": 0.9,
            "sheet_name": "发票",
            "data_row_count": 1,
        }

    def test_sheet_data_from_rows_materializes_tuples(self):
        sheet = SheetData.from_rows("x", [["a", 1], ["b"]])

        assert sheet.rows == (("a", 1), ("b",))
