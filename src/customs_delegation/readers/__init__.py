"""
Spreadsheet readers.

Turns workbook files into the in-memory SheetData the pipeline consumes.
"""

from .workbook import SUPPORTED_SUFFIXES, WorkbookReadError, read_workbook

__all__ = [
    "read_workbook",
    "WorkbookReadError",
    "SUPPORTED_SUFFIXES",
]
