"""
Canonical extraction schemas (SSOT).

These are the value types produced by the classifier and the field
extractors. Every later stage (priority, merge, mapping) reads these types
and nothing else.

All types are frozen: a run builds them once and never mutates them.
Collections are tuples for the same reason.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence, Union

# A single spreadsheet cell as handed in by the file-reading collaborator.
Cell = Union[str, int, float, Decimal, None]
Row = Sequence[Cell]

UNKNOWN_MATCH_KEY = "UNKNOWN"


class SheetType(str, Enum):
    """Semantic role of a spreadsheet sheet."""

    ENTERPRISE = "enterprise"
    CUSTOMER = "customer"
    INVOICE = "invoice"
    PACKING = "packing"
    DECLARATION = "declaration"
    UNKNOWN = "unknown"

    @property
    def carries_goods(self) -> bool:
        """Invoices and packing lists both carry goods lines."""
        return self in (SheetType.INVOICE, SheetType.PACKING)


@dataclass(frozen=True)
class SheetData:
    """One sheet's materialized rows."""

    name: str
    rows: tuple[tuple[Cell, ...], ...] = ()

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[Cell]]) -> "SheetData":
        return cls(name=name, rows=tuple(tuple(row) for row in rows))


@dataclass(frozen=True)
class TypedSheet:
    """A sheet together with the type assigned by the classifier."""

    name: str
    sheet_type: SheetType
    rows: tuple[tuple[Cell, ...], ...] = ()


@dataclass(frozen=True)
class SheetClassification:
    """Classifier verdict for one sheet.

    confidence is advisory: 1.0 for exact sheet-name matches, 0.9 for
    sheet-name substrings, 0.7-0.8 for header keyword matches, 0 for unknown.
    """

    sheet_type: SheetType
    confidence: float
    sheet_name: str
    data_row_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_type": self.sheet_type.value,
            "confidence": self.confidence,
            "sheet_name": self.sheet_name,
            "data_row_count": self.data_row_count,
        }


@dataclass(frozen=True)
class EnterpriseInfo:
    """The filing / processing company (被委托方)."""

    name: str
    customs_code: str
    social_credit_code: str = ""
    legal_person: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "customs_code": self.customs_code,
            "social_credit_code": self.social_credit_code,
            "legal_person": self.legal_person,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EnterpriseInfo":
        return cls(
            name=data.get("name", ""),
            customs_code=data.get("customs_code", ""),
            social_credit_code=data.get("social_credit_code", ""),
            legal_person=data.get("legal_person"),
            phone=data.get("phone"),
        )


@dataclass(frozen=True)
class CustomerInfo:
    """A trading counterpart (buyer or supplier)."""

    name: str
    customs_code: str
    social_credit_code: Optional[str] = None
    english_name: Optional[str] = None

    @property
    def merge_key(self) -> str:
        """Customers are identified by customs code, falling back to name."""
        return self.customs_code or self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "customs_code": self.customs_code,
            "social_credit_code": self.social_credit_code,
            "english_name": self.english_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CustomerInfo":
        return cls(
            name=data.get("name", ""),
            customs_code=data.get("customs_code", ""),
            social_credit_code=data.get("social_credit_code"),
            english_name=data.get("english_name"),
        )


@dataclass(frozen=True)
class DeclarationInfo:
    """Customs manifest (核注清单) record."""

    supervision_mode: str
    record_number: str
    import_export_flag: str = ""
    entry_date: Optional[str] = None
    operating_unit_name: Optional[str] = None
    operating_unit_code: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "supervision_mode": self.supervision_mode,
            "record_number": self.record_number,
            "import_export_flag": self.import_export_flag,
            "entry_date": self.entry_date,
            "operating_unit_name": self.operating_unit_name,
            "operating_unit_code": self.operating_unit_code,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DeclarationInfo":
        return cls(
            supervision_mode=data.get("supervision_mode", ""),
            record_number=data.get("record_number", ""),
            import_export_flag=data.get("import_export_flag", ""),
            entry_date=data.get("entry_date"),
            operating_unit_name=data.get("operating_unit_name"),
            operating_unit_code=data.get("operating_unit_code"),
        )


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _str_or_none(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


# Fields of GoodsItem that participate in field-wise merging, in display order.
GOODS_MERGE_FIELDS = (
    "hs_code",
    "goods_name",
    "quantity",
    "unit",
    "unit_price",
    "total_price",
    "currency",
    "origin",
    "net_weight",
    "gross_weight",
    "item_code",
)


@dataclass(frozen=True)
class GoodsItem:
    """
    One commodity line from an invoice or packing list.

    Numeric fields are None when the source cell was empty or not a number;
    None means "unknown" and is never the same as a known zero.
    match_key is derived by generate_match_key() and is never empty.
    """

    goods_name: str
    hs_code: str
    match_key: str = UNKNOWN_MATCH_KEY
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = None
    total_price: Optional[Decimal] = None
    currency: Optional[str] = None
    origin: Optional[str] = None
    net_weight: Optional[Decimal] = None
    gross_weight: Optional[Decimal] = None
    item_code: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "goods_name": self.goods_name,
            "hs_code": self.hs_code,
            "quantity": _str_or_none(self.quantity),
            "unit": self.unit,
            "unit_price": _str_or_none(self.unit_price),
            "total_price": _str_or_none(self.total_price),
            "currency": self.currency,
            "origin": self.origin,
            "net_weight": _str_or_none(self.net_weight),
            "gross_weight": _str_or_none(self.gross_weight),
            "item_code": self.item_code,
            "match_key": self.match_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GoodsItem":
        return cls(
            goods_name=data.get("goods_name", ""),
            hs_code=data.get("hs_code", ""),
            match_key=data.get("match_key") or UNKNOWN_MATCH_KEY,
            quantity=_decimal_or_none(data.get("quantity")),
            unit=data.get("unit"),
            unit_price=_decimal_or_none(data.get("unit_price")),
            total_price=_decimal_or_none(data.get("total_price")),
            currency=data.get("currency"),
            origin=data.get("origin"),
            net_weight=_decimal_or_none(data.get("net_weight")),
            gross_weight=_decimal_or_none(data.get("gross_weight")),
            item_code=data.get("item_code"),
        )


@dataclass(frozen=True)
class ExtractedData:
    """Everything extracted from one source file."""

    enterprise: Optional[EnterpriseInfo] = None
    customers: Optional[tuple[CustomerInfo, ...]] = None
    declaration: Optional[DeclarationInfo] = None
    goods: Optional[tuple[GoodsItem, ...]] = None
    total_row_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "enterprise": self.enterprise.to_dict() if self.enterprise else None,
            "customers": (
                [c.to_dict() for c in self.customers] if self.customers is not None else None
            ),
            "declaration": self.declaration.to_dict() if self.declaration else None,
            "goods": [g.to_dict() for g in self.goods] if self.goods is not None else None,
            "total_row_count": self.total_row_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExtractedData":
        customers = data.get("customers")
        goods = data.get("goods")
        return cls(
            enterprise=(
                EnterpriseInfo.from_dict(data["enterprise"]) if data.get("enterprise") else None
            ),
            customers=(
                tuple(CustomerInfo.from_dict(c) for c in customers)
                if customers is not None
                else None
            ),
            declaration=(
                DeclarationInfo.from_dict(data["declaration"]) if data.get("declaration") else None
            ),
            goods=tuple(GoodsItem.from_dict(g) for g in goods) if goods is not None else None,
            total_row_count=data.get("total_row_count", 0),
        )


@dataclass(frozen=True)
class SourceFile:
    """A named file's extraction, as handed to the merger."""

    file_name: str
    data: ExtractedData = field(default_factory=ExtractedData)
