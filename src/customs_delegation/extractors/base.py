"""
Row and cell primitives shared by all extractors.

Cells arrive as str | int | float | Decimal | None. Everything here is
total: no function raises on odd cell values.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from ..schemas.extraction import UNKNOWN_MATCH_KEY, Row
from .aliases import AliasTable

HEADER_SEARCH_ROWS = 20


def is_empty_cell(value: Any) -> bool:
    """None and empty strings are empty; whitespace-only strings are not."""
    return value is None or value == ""


def row_has_content(row: Row) -> bool:
    return any(not is_empty_cell(cell) for cell in row)


def count_data_rows(rows: Sequence[Row]) -> int:
    """Count rows with at least one non-empty cell."""
    return sum(1 for row in rows if row and row_has_content(row))


def cell_to_text(value: Any) -> str:
    """Render a cell as stripped text.

    Integral floats lose their ".0" because spreadsheets store codes
    (HS codes, customs codes) as numbers.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return str(value.quantize(Decimal(1)))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def row_text(row: Row, separator: str = "|") -> str:
    """Join a row's cells into one lower-cased string."""
    return separator.join(cell_to_text(cell) for cell in row).lower()


def parse_number(value: Any) -> Optional[Decimal]:
    """
    Parse a numeric cell permissively.

    Returns None (unknown) for empty, non-numeric, NaN or infinite values,
    never zero and never an exception.
    """
    if is_empty_cell(value) or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def find_header_row(
    rows: Sequence[Row],
    keywords: Sequence[str],
    search_limit: int = HEADER_SEARCH_ROWS,
) -> int:
    """
    Locate the header row among the first search_limit rows.

    A row qualifies when its text contains at least half (rounded up) of the
    keywords, case-insensitively. Title rows, notes and blank rows before
    the real header are skipped this way.

    Returns:
        Index of the first qualifying row, or 0 when none qualifies.
    """
    needed = math.ceil(len(keywords) / 2)
    lowered = [k.lower() for k in keywords]

    for index, row in enumerate(rows[:search_limit]):
        if not row:
            continue
        text = row_text(row)
        matches = sum(1 for keyword in lowered if keyword in text)
        if matches >= needed:
            return index

    return 0


def find_column_index(headers: Row, aliases: Sequence[str]) -> int:
    """
    Resolve a logical field to a column index.

    A header cell matches when it contains an alias or an alias contains it
    (case-insensitive). First matching column wins. Empty header cells never
    match.

    Returns:
        Column index, or -1 when the field is unavailable.
    """
    normalized_aliases = [a.lower().strip() for a in aliases]

    for index, header in enumerate(headers):
        text = cell_to_text(header).lower()
        if not text:
            continue
        if any(alias in text or text in alias for alias in normalized_aliases):
            return index

    return -1


class ColumnMap:
    """Column indices for one header row, resolved through an alias table."""

    def __init__(self, headers: Row, aliases: AliasTable):
        self.indices = {
            name: find_column_index(headers, field_aliases)
            for name, field_aliases in aliases.items()
        }

    def has(self, name: str) -> bool:
        return self.indices.get(name, -1) >= 0

    def _cell(self, row: Row, name: str) -> Any:
        index = self.indices.get(name, -1)
        if index < 0 or index >= len(row):
            return None
        return row[index]

    def text(self, row: Row, name: str) -> str:
        """Cell text for a field; empty when the column is missing."""
        return cell_to_text(self._cell(row, name))

    def optional_text(self, row: Row, name: str) -> Optional[str]:
        """Cell text for a field; None when the column is missing."""
        if not self.has(name):
            return None
        return self.text(row, name)

    def number(self, row: Row, name: str) -> Optional[Decimal]:
        if not self.has(name):
            return None
        return parse_number(self._cell(row, name))


def generate_match_key(
    hs_code: Optional[str] = None,
    item_code: Optional[str] = None,
    goods_name: Optional[str] = None,
) -> str:
    """
    Derive the key that identifies "the same commodity" across files.

    Priority: HS code > item code > goods name > "UNKNOWN".
    """
    if hs_code and hs_code.strip():
        return f"HS:{hs_code.strip()}"
    if item_code and item_code.strip():
        return f"CODE:{item_code.strip()}"
    if goods_name and goods_name.strip():
        return f"NAME:{goods_name.strip()}"
    return UNKNOWN_MATCH_KEY
