"""
Output schemas: the delegation letter (代理报关委托书) and the delegation
agreements (委托协议), plus the status vocabularies used by the customs
agency platform.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class DelegationType(str, Enum):
    """Per-shipment or long-term delegation."""

    SINGLE = "single"
    LONG_TERM = "long-term"

    @property
    def label(self) -> str:
        return {
            DelegationType.SINGLE: "单次委托",
            DelegationType.LONG_TERM: "长期委托",
        }[self]


class LetterStatus(str, Enum):
    """Delegation relationship status."""

    INITIATED = "initiated"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    EXPIRED = "expired"
    TERMINATED = "terminated"

    @property
    def label(self) -> str:
        return _LETTER_STATUS_LABELS[self]


_LETTER_STATUS_LABELS = {
    LetterStatus.INITIATED: "已发起",
    LetterStatus.CONFIRMED: "已确认",
    LetterStatus.REJECTED: "已拒绝",
    LetterStatus.EXPIRED: "已过期",
    LetterStatus.TERMINATED: "已终止",
}


class AgreementStatus(str, Enum):
    """
    Delegation agreement status, in the platform's numeric order:

    0 pending confirmation, 1 sent to customs, 2 ready for declaration,
    3 rejected, 4 in use, 5 used by customs, 6 expired,
    7 cancellation pending, 8 cancellation confirmed, 9 cancelled,
    10 creation failed, 11 cancellation failed.
    """

    PENDING_CONFIRMATION = "pending_confirmation"
    SENT_TO_CUSTOMS = "sent_to_customs"
    READY_FOR_DECLARATION = "ready_for_declaration"
    REJECTED = "rejected"
    IN_USE = "in_use"
    USED_BY_CUSTOMS = "used_by_customs"
    EXPIRED = "expired"
    CANCELLATION_PENDING = "cancellation_pending"
    CANCELLATION_CONFIRMED = "cancellation_confirmed"
    CANCELLED = "cancelled"
    CREATION_FAILED = "creation_failed"
    CANCELLATION_FAILED = "cancellation_failed"

    @property
    def label(self) -> str:
        return _AGREEMENT_STATUS_LABELS[self]


_AGREEMENT_STATUS_LABELS = {
    AgreementStatus.PENDING_CONFIRMATION: "待确认",
    AgreementStatus.SENT_TO_CUSTOMS: "已发海关",
    AgreementStatus.READY_FOR_DECLARATION: "待申报",
    AgreementStatus.REJECTED: "已拒绝",
    AgreementStatus.IN_USE: "正使用",
    AgreementStatus.USED_BY_CUSTOMS: "海关已用",
    AgreementStatus.EXPIRED: "已过期",
    AgreementStatus.CANCELLATION_PENDING: "撤销待确认",
    AgreementStatus.CANCELLATION_CONFIRMED: "撤销已确认",
    AgreementStatus.CANCELLED: "撤销成功",
    AgreementStatus.CREATION_FAILED: "新增失败",
    AgreementStatus.CANCELLATION_FAILED: "撤销失败",
}


@dataclass(frozen=True)
class DelegationLetter:
    """
    Customs agency authorization naming the client (委托方) and the
    agent (被委托方).

    Client fields come from the first customer record, agent fields from the
    enterprise record. Everything under "terms" is a business default.
    """

    # Client (委托方)
    client_company_name: Optional[str] = None
    client_customs_code: str = ""
    client_social_credit_code: Optional[str] = None
    client_authorized_signer: Optional[str] = None
    client_contact_phone: Optional[str] = None

    # Agent (被委托方)
    agent_company_name: Optional[str] = None
    agent_customs_code: Optional[str] = None
    agent_social_credit_code: Optional[str] = None
    agent_authorized_signer: Optional[str] = None
    agent_contact_phone: Optional[str] = None

    # Terms
    delegation_type: DelegationType = DelegationType.LONG_TERM
    validity_months: int = 12
    delegation_content: tuple[str, ...] = ()
    sign_date: Optional[str] = None
    expiry_date: Optional[str] = None
    status: LetterStatus = LetterStatus.INITIATED

    def to_dict(self) -> dict[str, Any]:
        return {
            "client_company_name": self.client_company_name,
            "client_customs_code": self.client_customs_code,
            "client_social_credit_code": self.client_social_credit_code,
            "client_authorized_signer": self.client_authorized_signer,
            "client_contact_phone": self.client_contact_phone,
            "agent_company_name": self.agent_company_name,
            "agent_customs_code": self.agent_customs_code,
            "agent_social_credit_code": self.agent_social_credit_code,
            "agent_authorized_signer": self.agent_authorized_signer,
            "agent_contact_phone": self.agent_contact_phone,
            "delegation_type": self.delegation_type.value,
            "validity_months": self.validity_months,
            "delegation_content": list(self.delegation_content),
            "sign_date": self.sign_date,
            "expiry_date": self.expiry_date,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DelegationAgreement:
    """One per-commodity-line customs agency engagement."""

    serial_number: int
    main_goods_name: str
    hs_code: str
    total_value: Decimal
    currency: str
    trade_mode: str
    origin_place: str
    import_export_date: str
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    agreement_status: AgreementStatus = AgreementStatus.PENDING_CONFIRMATION

    def to_dict(self) -> dict[str, Any]:
        return {
            "serial_number": self.serial_number,
            "main_goods_name": self.main_goods_name,
            "hs_code": self.hs_code,
            "total_value": str(self.total_value),
            "currency": self.currency,
            "quantity": str(self.quantity) if self.quantity is not None else None,
            "unit": self.unit,
            "trade_mode": self.trade_mode,
            "origin_place": self.origin_place,
            "import_export_date": self.import_export_date,
            "agreement_status": self.agreement_status.value,
        }


@dataclass(frozen=True)
class MappingResult:
    """Letter, agreements and every warning raised while mapping."""

    delegation_letter: DelegationLetter
    delegation_agreements: tuple[DelegationAgreement, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "delegation_letter": self.delegation_letter.to_dict(),
            "delegation_agreements": [a.to_dict() for a in self.delegation_agreements],
            "warnings": list(self.warnings),
        }
