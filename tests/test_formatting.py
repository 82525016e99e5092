from freight_invoice.models.invoice import Currency
from freight_invoice.utils.formatting import (
    currency_symbol,
    format_cbm,
    format_money,
    format_quantity,
    format_total_cbm,
    format_weight,
)


def test_currency_symbols():
    assert currency_symbol("GHS") == "₵"
    assert currency_symbol("USD") == "$"
    assert currency_symbol(Currency.GHS) == "₵"
    assert currency_symbol("EUR") == "$"


def test_money_has_two_decimals():
    assert format_money(83000, Currency.USD) == "$83000.00"
    assert format_money("12.5", "GHS") == "₵12.50"
    assert format_money("oops", "USD") == "$0.00"


def test_volume_precision():
    assert format_cbm(33.2) == "33.20"
    assert format_total_cbm(66.4) == "66.4000"


def test_weight_display():
    assert format_weight(2200) == "2200 kg"
    assert format_weight(0) == "-"
    assert format_weight("") == "-"


def test_quantity_drops_trailing_zero():
    assert format_quantity(1.0) == "1"
    assert format_quantity(2.5) == "2.5"
