"""
Excel exporter for the delegation letter and the delegation agreements.

Both documents are rendered as standalone .xlsx workbooks and returned as
bytes, ready to be written to disk or sent as a download.
"""

import logging
from io import BytesIO
from typing import Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..schemas.delegation import DelegationAgreement, DelegationLetter

logger = logging.getLogger(__name__)

LETTER_TITLE = "电子代理报关委托书"
LETTER_SHEET = "委托书"
LETTER_COLUMN_WIDTHS = [20, 50]

AGREEMENTS_TITLE = "电子代理报关委托协议"
AGREEMENTS_SHEET = "委托协议"
AGREEMENT_HEADERS = [
    "序号",
    "主要货物名称",
    "HS编码",
    "数量",
    "单位",
    "总值",
    "币种",
    "贸易方式",
    "原产地",
    "进出口日期",
    "状态",
]
AGREEMENT_COLUMN_WIDTHS = [8, 30, 15, 10, 8, 12, 8, 20, 12, 12, 12]

_TITLE_FONT = Font(bold=True, size=14)
_SECTION_FONT = Font(bold=True, size=11)
_HEADER_FILL = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")
_THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def _set_widths(ws, widths: Sequence[int]) -> None:
    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width


def _write_title(ws, title: str, span: int) -> None:
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=span)
    cell = ws.cell(row=1, column=1, value=title)
    cell.font = _TITLE_FONT
    cell.alignment = Alignment(horizontal="center")


def _to_bytes(wb: openpyxl.Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _letter_sections(letter: DelegationLetter) -> list[tuple[str, list[tuple[str, str]]]]:
    return [
        (
            "一、委托方信息",
            [
                ("企业名称", letter.client_company_name or ""),
                ("海关编码", letter.client_customs_code or ""),
                ("统一社会信用代码", letter.client_social_credit_code or ""),
                ("授权签字人", letter.client_authorized_signer or ""),
                ("联系电话", letter.client_contact_phone or ""),
            ],
        ),
        (
            "二、被委托方信息",
            [
                ("企业名称", letter.agent_company_name or ""),
                ("海关编码", letter.agent_customs_code or ""),
                ("统一社会信用代码", letter.agent_social_credit_code or ""),
                ("授权签字人", letter.agent_authorized_signer or ""),
                ("联系电话", letter.agent_contact_phone or ""),
            ],
        ),
        (
            "三、委托关系",
            [
                ("委托类型", letter.delegation_type.label),
                ("委托有效期", f"{letter.validity_months}个月"),
                ("委托内容", "；".join(letter.delegation_content)),
                ("签署日期", letter.sign_date or ""),
                ("到期日期", letter.expiry_date or ""),
                ("状态", letter.status.label),
            ],
        ),
    ]


def export_delegation_letter(letter: DelegationLetter) -> bytes:
    """Render the delegation letter as a two-column form workbook."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = LETTER_SHEET

    _write_title(ws, LETTER_TITLE, span=2)
    _set_widths(ws, LETTER_COLUMN_WIDTHS)

    row = 3
    for heading, fields in _letter_sections(letter):
        ws.cell(row=row, column=1, value=heading).font = _SECTION_FONT
        row += 1
        for label, value in fields:
            ws.cell(row=row, column=1, value=label).border = _THIN_BORDER
            value_cell = ws.cell(row=row, column=2, value=value)
            value_cell.border = _THIN_BORDER
            value_cell.alignment = Alignment(wrap_text=True)
            row += 1
        row += 1

    logger.debug(f"Exported delegation letter for {letter.client_company_name or '(no client)'}")
    return _to_bytes(wb)


def _agreement_row(agreement: DelegationAgreement) -> list:
    return [
        agreement.serial_number,
        agreement.main_goods_name,
        agreement.hs_code,
        agreement.quantity if agreement.quantity is not None else "",
        agreement.unit or "",
        agreement.total_value,
        agreement.currency,
        agreement.trade_mode,
        agreement.origin_place,
        agreement.import_export_date,
        agreement.agreement_status.label,
    ]


def export_delegation_agreements(agreements: Sequence[DelegationAgreement]) -> bytes:
    """Render the agreements as a table: title, header row, one row each."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = AGREEMENTS_SHEET

    _write_title(ws, AGREEMENTS_TITLE, span=len(AGREEMENT_HEADERS))
    _set_widths(ws, AGREEMENT_COLUMN_WIDTHS)

    header_row = 3
    for col, header in enumerate(AGREEMENT_HEADERS, 1):
        cell = ws.cell(row=header_row, column=col, value=header)
        cell.font = _SECTION_FONT
        cell.fill = _HEADER_FILL
        cell.border = _THIN_BORDER
        cell.alignment = Alignment(horizontal="center", wrap_text=True)

    for offset, agreement in enumerate(agreements, 1):
        for col, value in enumerate(_agreement_row(agreement), 1):
            ws.cell(row=header_row + offset, column=col, value=value).border = _THIN_BORDER

    logger.debug(f"Exported {len(agreements)} delegation agreement(s)")
    return _to_bytes(wb)
