"""
Excel files → Classification → Extraction → Merge → Delegation documents

A deterministic pipeline that turns a batch of customs spreadsheets
(enterprise register, customer/supplier list, invoices, packing lists,
bonded-goods manifest) into a customs agency delegation letter and one
delegation agreement per goods line.
"""

__version__ = "0.1.0"
