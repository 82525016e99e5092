"""Display formatting for amounts, volumes and weights."""

from typing import Any

from freight_invoice.utils.pricing import to_number

_CURRENCY_SYMBOLS = {"GHS": "₵", "USD": "$"}
_DEFAULT_SYMBOL = "$"


def currency_symbol(currency: Any) -> str:
    """Return the display symbol for a currency code, defaulting to "$"."""
    code = getattr(currency, "value", currency)
    return _CURRENCY_SYMBOLS.get(code, _DEFAULT_SYMBOL)


def format_money(value: Any, currency: Any) -> str:
    """Format an amount as symbol plus two decimals, e.g. '$83000.00'."""
    return f"{currency_symbol(currency)}{to_number(value):.2f}"


def format_cbm(value: Any) -> str:
    """Format a single item's volume with two decimals."""
    return f"{to_number(value):.2f}"


def format_total_cbm(value: Any) -> str:
    """Format the aggregate volume with four decimals."""
    return f"{to_number(value):.4f}"


def format_weight(value: Any) -> str:
    """Return '<weight> kg' for positive weights, '-' otherwise."""
    weight = to_number(value)
    if weight <= 0:
        return "-"
    return f"{weight:.10g} kg"


def format_quantity(value: Any) -> str:
    """Format a quantity without a trailing '.0' for whole numbers."""
    return f"{to_number(value):.10g}"
