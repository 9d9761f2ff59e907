"""
Workbook reader.

Materializes every worksheet of a spreadsheet file as SheetData:
- .xlsx / .xlsm via openpyxl (read-only, cached formula values)
- legacy .xls via xlrd

Cells are passed through as read; empty cells become None.
"""

import logging
import zipfile
from pathlib import Path
from typing import Union

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..schemas.extraction import SheetData

logger = logging.getLogger(__name__)

OPENPYXL_SUFFIXES = (".xlsx", ".xlsm")
XLRD_SUFFIXES = (".xls",)
SUPPORTED_SUFFIXES = OPENPYXL_SUFFIXES + XLRD_SUFFIXES


class WorkbookReadError(Exception):
    """Raised when a spreadsheet file cannot be read."""

    pass


def read_workbook(path: Union[str, Path]) -> tuple[SheetData, ...]:
    """
    Read all worksheets of a workbook in sheet order.

    Raises:
        WorkbookReadError: Unsupported suffix, missing or corrupt file
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise WorkbookReadError(
            f"Unsupported file type '{suffix or path.name}', "
            f"expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if not path.is_file():
        raise WorkbookReadError(f"File not found: {path}")

    try:
        if suffix in XLRD_SUFFIXES:
            sheets = _read_xls(path)
        else:
            sheets = _read_xlsx(path)
    except (InvalidFileException, zipfile.BadZipFile, xlrd.XLRDError, OSError) as e:
        raise WorkbookReadError(f"Cannot read {path.name}: {e}") from e

    logger.debug(f"Read {len(sheets)} sheet(s) from {path.name}")
    return sheets


def _read_xlsx(path: Path) -> tuple[SheetData, ...]:
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        return tuple(
            SheetData.from_rows(ws.title, list(ws.iter_rows(values_only=True)))
            for ws in wb.worksheets
        )
    finally:
        wb.close()


def _xls_cell_value(cell: xlrd.sheet.Cell, datemode: int):
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return int(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return None
    return cell.value


def _read_xls(path: Path) -> tuple[SheetData, ...]:
    wb = xlrd.open_workbook(str(path))
    try:
        sheets = []
        for ws in wb.sheets():
            rows = [
                [_xls_cell_value(cell, wb.datemode) for cell in ws.row(row_idx)]
                for row_idx in range(ws.nrows)
            ]
            sheets.append(SheetData.from_rows(ws.name, rows))
        return tuple(sheets)
    finally:
        wb.release_resources()
