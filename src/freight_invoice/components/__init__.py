"""
Reusable Dash UI components for the invoice editor.

This package provides:
- invoice_editor: The editing form (details, parties, line items, notes)
- invoice_preview: The print-ready invoice document

All components are pure functions that return Dash html/dcc elements,
making them easy to test and compose.
"""

from freight_invoice.components.invoice_editor import (
    amount_mode_label,
    build_invoice_editor,
    build_item_rows,
    build_logo_thumb,
    build_save_indicator,
)
from freight_invoice.components.invoice_preview import build_invoice_preview

__all__ = [
    "amount_mode_label",
    "build_invoice_editor",
    "build_invoice_preview",
    "build_item_rows",
    "build_logo_thumb",
    "build_save_indicator",
]
