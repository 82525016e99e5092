"""Pricing and formatting helpers shared across the invoice editor."""

from freight_invoice.utils.formatting import (
    currency_symbol,
    format_cbm,
    format_money,
    format_quantity,
    format_total_cbm,
    format_weight,
)
from freight_invoice.utils.pricing import (
    NUMERIC_FIELDS,
    PRICING_FIELDS,
    Totals,
    compute_amount,
    compute_totals,
    effective_cbm,
    to_number,
)

__all__ = [
    "NUMERIC_FIELDS",
    "PRICING_FIELDS",
    "Totals",
    "compute_amount",
    "compute_totals",
    "currency_symbol",
    "effective_cbm",
    "format_cbm",
    "format_money",
    "format_quantity",
    "format_total_cbm",
    "format_weight",
    "to_number",
]
