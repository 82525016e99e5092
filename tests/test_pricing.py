import math

import pytest

from freight_invoice.models.invoice import LineItem
from freight_invoice.utils.pricing import (
    compute_amount,
    compute_totals,
    effective_cbm,
    to_number,
)


@pytest.mark.parametrize(
    "value",
    [None, True, False, "", "abc", "nan", float("nan"), float("inf"), "-inf", [], {}],
)
def test_to_number_unusable_values_are_zero(value):
    assert to_number(value) == 0.0


def test_to_number_accepts_numbers_and_numeric_strings():
    assert to_number(3) == 3.0
    assert to_number(2.5) == 2.5
    assert to_number(" 12.5 ") == 12.5
    assert to_number("-4") == -4.0


def test_effective_cbm_falls_back_to_one_for_zero_volume():
    assert effective_cbm(0) == 1.0
    assert effective_cbm("") == 1.0
    assert effective_cbm("junk") == 1.0
    assert effective_cbm(2.5) == 2.5


def test_flat_fee_prices_as_qty_times_rate():
    assert compute_amount(0, 2, 50) == 100.0


def test_volumetric_item_prices_by_cbm():
    assert compute_amount(33.2, 1, 2500) == pytest.approx(83000.0)


def test_zero_quantity_or_rate_gives_zero():
    assert compute_amount(10, 0, 300) == 0.0
    assert compute_amount(10, 3, 0) == 0.0


def test_amount_is_always_finite():
    amount = compute_amount("x", float("inf"), None)
    assert math.isfinite(amount)
    assert amount == 0.0


def test_totals_for_two_containers_and_a_flat_fee():
    items = [
        LineItem(id="a", cbm=33.2, qty=1, rate=2500, amount=compute_amount(33.2, 1, 2500)),
        LineItem(id="b", cbm=33.2, qty=1, rate=2500, amount=compute_amount(33.2, 1, 2500)),
        LineItem(id="c", cbm=0, qty=1, rate=150, amount=compute_amount(0, 1, 150)),
    ]
    totals = compute_totals(items)
    assert items[2].amount == 150.0
    assert totals.subtotal == pytest.approx(166150.0)
    assert totals.total_cbm == pytest.approx(66.4)
    assert totals.total == totals.subtotal


def test_totals_use_stored_amounts_not_recomputed_ones():
    items = [LineItem(id="a", cbm=1, qty=1, rate=100, amount=42)]
    assert compute_totals(items).subtotal == 42.0


def test_totals_ignore_item_order():
    items = [
        LineItem(id="a", cbm=0.1, amount=0.1),
        LineItem(id="b", cbm=0.2, amount=0.2),
        LineItem(id="c", cbm=0.3, amount=0.3),
    ]
    forward = compute_totals(items)
    backward = compute_totals(list(reversed(items)))
    assert forward == backward
    assert forward.subtotal == pytest.approx(0.6)
    assert forward.total_cbm == pytest.approx(0.6)


def test_totals_accept_a_one_shot_iterable():
    items = [LineItem(id="a", cbm=2, amount=5), LineItem(id="b", cbm=3, amount=7)]
    totals = compute_totals(item for item in items)
    assert totals.subtotal == 12.0
    assert totals.total_cbm == 5.0


def test_empty_invoice_totals_are_zero():
    totals = compute_totals([])
    assert totals.to_dict() == {"subtotal": 0.0, "totalCbm": 0.0, "total": 0.0}


def test_corrupt_item_values_count_as_zero():
    items = [LineItem(id="a", cbm="bad", amount=None)]
    totals = compute_totals(items)
    assert totals.subtotal == 0.0
    assert totals.total_cbm == 0.0
