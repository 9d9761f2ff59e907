"""
Document exporters.

Renders the delegation letter and agreements as Excel workbooks.
"""

from .excel import (
    AGREEMENT_HEADERS,
    AGREEMENTS_SHEET,
    AGREEMENTS_TITLE,
    LETTER_SHEET,
    LETTER_TITLE,
    export_delegation_agreements,
    export_delegation_letter,
)

__all__ = [
    "export_delegation_letter",
    "export_delegation_agreements",
    "LETTER_TITLE",
    "LETTER_SHEET",
    "AGREEMENTS_TITLE",
    "AGREEMENTS_SHEET",
    "AGREEMENT_HEADERS",
]
