"""
Line item pricing rules.

A line amount is ``effective_cbm * qty * rate`` where the effective volume
falls back to 1 when the stored CBM is zero, so flat fees (documentation,
B/L fees) still price as ``qty * rate``. Every input is coerced to a finite
number first; anything that is not a number counts as zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from freight_invoice.models.invoice import LineItem

# Fields whose edits trigger an amount recomputation
PRICING_FIELDS = frozenset({"cbm", "qty", "rate"})
NUMERIC_FIELDS = ("weight", "cbm", "qty", "rate", "amount")


def to_number(value: Any) -> float:
    """
    Coerce a raw field value to a finite float.

    Accepts ints, floats and numeric strings (surrounding whitespace is
    ignored). Booleans, None, empty or non-numeric strings, NaN and
    infinities all become 0.0.

    Args:
        value: Raw value from the editor or from storage.

    Returns:
        The numeric value, or 0.0 when it cannot be used in arithmetic.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def effective_cbm(cbm: Any) -> float:
    """Return the volume factor used for pricing (1 when CBM is zero)."""
    volume = to_number(cbm)
    return 1.0 if volume == 0 else volume


def compute_amount(cbm: Any, qty: Any, rate: Any) -> float:
    """
    Compute a line amount from its volume, quantity and rate.

    Args:
        cbm: Cubic meters (0 means a non-volumetric item).
        qty: Quantity.
        rate: Price per effective unit.

    Returns:
        ``effective_cbm(cbm) * qty * rate``.
    """
    return effective_cbm(cbm) * to_number(qty) * to_number(rate)


@dataclass(slots=True, frozen=True)
class Totals:
    """Aggregate figures for an invoice.

    ``total`` currently always equals ``subtotal``; the two stay separate so
    a fee or discount layer can sit between them.
    """

    subtotal: float = 0.0
    total_cbm: float = 0.0
    total: float = 0.0

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "subtotal": self.subtotal,
            "totalCbm": self.total_cbm,
            "total": self.total,
        }


def compute_totals(items: Iterable[LineItem]) -> Totals:
    """
    Sum amounts and volumes across line items.

    Args:
        items: Line items in display order (order does not affect the result).

    Returns:
        Totals with subtotal, total CBM and total.
    """
    items = list(items)
    # fsum is exact, so the result does not depend on item order
    subtotal = math.fsum(to_number(item.amount) for item in items)
    total_cbm = math.fsum(to_number(item.cbm) for item in items)
    return Totals(subtotal=subtotal, total_cbm=total_cbm, total=subtotal)
