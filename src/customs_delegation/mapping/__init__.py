"""
Delegation mapping module.

Projects merged data into the delegation letter and delegation agreements.
"""

from .mapper import (
    WARNING_MISSING_AGENT,
    WARNING_MISSING_CLIENT,
    WARNING_MISSING_DECLARATION,
    WARNING_MISSING_GOODS,
    DelegationMapper,
    add_months,
    conflict_warnings,
    map_delegation_data,
    map_to_delegation_agreements,
    map_to_delegation_letter,
    multiple_customers_warning,
)

__all__ = [
    "DelegationMapper",
    "map_delegation_data",
    "map_to_delegation_letter",
    "map_to_delegation_agreements",
    "conflict_warnings",
    "multiple_customers_warning",
    "add_months",
    "WARNING_MISSING_CLIENT",
    "WARNING_MISSING_AGENT",
    "WARNING_MISSING_GOODS",
    "WARNING_MISSING_DECLARATION",
]
