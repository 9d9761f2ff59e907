"""
Delegation document mapper (SSOT).

This is THE single mapper from MergedData to the delegation letter and the
delegation agreements.

Rules:
- Client (委托方) comes from the first customer record
- Agent (被委托方) comes from the enterprise record
- One agreement per goods line, numbered 1..N in goods order
- Trade mode and import/export date come from the manifest when present
- Missing or ambiguous input produces a warning, never an exception
"""

import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ..config import DelegationDefaults, MappingConfig
from ..schemas.delegation import DelegationAgreement, DelegationLetter, MappingResult
from ..schemas.merge import MergedData

logger = logging.getLogger(__name__)

WARNING_MISSING_CLIENT = "缺少客户信息，委托方字段将为空"
WARNING_MISSING_AGENT = "缺少企业信息，被委托方字段将为空"
WARNING_MISSING_GOODS = "缺少商品明细，无法生成委托协议"
WARNING_MISSING_DECLARATION = "缺少核注清单信息，贸易方式和进出口日期使用默认值"


def multiple_customers_warning(count: int) -> str:
    return f"发现多个客户（{count}个），将使用第一个客户作为委托方"


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def map_to_delegation_letter(
    data: MergedData,
    defaults: Optional[DelegationDefaults] = None,
    today: Optional[date] = None,
) -> tuple[DelegationLetter, tuple[str, ...]]:
    """
    Build the delegation letter.

    Args:
        data: Merged batch data
        defaults: Business defaults for the delegation terms
        today: Sign date (defaults to the current date)

    Returns:
        (letter, warnings)
    """
    defaults = defaults or DelegationDefaults()
    today = today or date.today()
    warnings: list[str] = []

    client = None
    if not data.customers:
        warnings.append(WARNING_MISSING_CLIENT)
    else:
        if len(data.customers) > 1:
            warnings.append(multiple_customers_warning(len(data.customers)))
        client = data.customers[0]

    agent = data.enterprise
    if agent is None:
        warnings.append(WARNING_MISSING_AGENT)

    letter = DelegationLetter(
        client_company_name=client.name if client else None,
        client_customs_code=client.customs_code if client else "",
        client_social_credit_code=client.social_credit_code if client else None,
        agent_company_name=agent.name if agent else None,
        agent_customs_code=agent.customs_code if agent else None,
        agent_social_credit_code=agent.social_credit_code if agent else None,
        agent_authorized_signer=agent.legal_person if agent else None,
        agent_contact_phone=agent.phone if agent else None,
        delegation_type=defaults.delegation_type,
        validity_months=defaults.validity_months,
        delegation_content=tuple(defaults.delegation_content),
        sign_date=today.isoformat(),
        expiry_date=add_months(today, defaults.validity_months).isoformat(),
        status=defaults.letter_status,
    )

    return letter, tuple(warnings)


def map_to_delegation_agreements(
    data: MergedData,
    defaults: Optional[DelegationDefaults] = None,
    today: Optional[date] = None,
) -> tuple[tuple[DelegationAgreement, ...], tuple[str, ...]]:
    """
    Build one delegation agreement per goods line.

    Returns:
        (agreements, warnings)
    """
    defaults = defaults or DelegationDefaults()
    today = today or date.today()

    if not data.goods:
        return (), (WARNING_MISSING_GOODS,)

    declaration = data.declaration
    trade_mode = (declaration.supervision_mode if declaration else "") or (
        defaults.default_trade_mode
    )
    import_export_date = (declaration.entry_date if declaration else None) or (
        today.isoformat()
    )

    agreements = tuple(
        DelegationAgreement(
            serial_number=index,
            main_goods_name=item.goods_name,
            hs_code=item.hs_code,
            total_value=item.total_price if item.total_price is not None else Decimal("0"),
            currency=item.currency or defaults.default_currency,
            quantity=item.quantity,
            unit=item.unit or None,
            trade_mode=trade_mode,
            origin_place=item.origin or defaults.default_origin,
            import_export_date=import_export_date,
            agreement_status=defaults.agreement_status,
        )
        for index, item in enumerate(data.goods, start=1)
    )

    warnings = () if declaration else (WARNING_MISSING_DECLARATION,)
    return agreements, warnings


def conflict_warnings(data: MergedData) -> tuple[str, ...]:
    """Describe every goods field that two files disagreed on."""
    return tuple(
        f"商品 {c.match_key} 的 {c.field} 存在冲突："
        f"采用 {c.kept_source} 的 {c.kept_value}，"
        f"舍弃 {c.discarded_source} 的 {c.discarded_value}"
        for c in data.conflicts
    )


class DelegationMapper:
    """Maps merged data to the delegation documents with injected defaults."""

    def __init__(
        self,
        defaults: Optional[DelegationDefaults] = None,
        config: Optional[MappingConfig] = None,
    ):
        self.defaults = defaults or DelegationDefaults()
        self.config = config or MappingConfig()

    def map(self, data: MergedData, today: Optional[date] = None) -> MappingResult:
        letter, letter_warnings = map_to_delegation_letter(data, self.defaults, today)
        agreements, agreement_warnings = map_to_delegation_agreements(
            data, self.defaults, today
        )

        warnings = letter_warnings + agreement_warnings
        if self.config.warn_on_conflicts:
            warnings = warnings + conflict_warnings(data)

        for warning in warnings:
            logger.info(f"Mapping warning: {warning}")

        return MappingResult(
            delegation_letter=letter,
            delegation_agreements=agreements,
            warnings=warnings,
        )


def map_delegation_data(
    data: MergedData,
    defaults: Optional[DelegationDefaults] = None,
    today: Optional[date] = None,
    config: Optional[MappingConfig] = None,
) -> MappingResult:
    """Map merged data to the letter and agreements; warnings concatenated."""
    return DelegationMapper(defaults, config).map(data, today)
