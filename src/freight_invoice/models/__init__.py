"""
Data models and serialization helpers for the invoice editor.

This package provides:
- The invoice record (InvoiceRecord, CompanyDetails, CustomerDetails, LineItem)
- Editor status models (SaveStatus, EditorStatus)
- Serialization to and from the stored JSON shape

All models use Python dataclasses.
"""

from freight_invoice.models.common import EditorStatus, SaveStatus
from freight_invoice.models.invoice import (
    CompanyDetails,
    Currency,
    CustomerDetails,
    InvoiceRecord,
    LineItem,
    deserialize_record,
    new_item_id,
    serialize_record,
)

__all__ = [
    "CompanyDetails",
    "Currency",
    "CustomerDetails",
    "EditorStatus",
    "InvoiceRecord",
    "LineItem",
    "SaveStatus",
    "deserialize_record",
    "new_item_id",
    "serialize_record",
]
