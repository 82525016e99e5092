from freight_invoice.data.template import blank_item, default_record
from freight_invoice.models.invoice import (
    Currency,
    CustomerDetails,
    LineItem,
    deserialize_record,
    new_item_id,
    serialize_record,
)


def test_serialized_record_uses_stored_field_names():
    payload = serialize_record(default_record())
    assert payload["invoiceNumber"] == "INV-2023-001"
    assert payload["currency"] == "USD"
    assert "dueDate" in payload
    assert payload["company"]["logoUrl"] is None
    assert set(payload["customer"]) == {
        "name",
        "companyName",
        "address",
        "email",
        "referenceId",
    }
    item = payload["items"][0]
    assert item["id"] == "1"
    assert item["amount"] == 2500
    assert item["amountOverridden"] is False


def test_unknown_keys_survive_a_round_trip():
    payload = serialize_record(default_record())
    payload["taxId"] = "GH-0042"
    payload["items"][0]["hsCode"] = "8609.00"

    record = deserialize_record(payload)
    assert record.extra == {"taxId": "GH-0042"}
    assert record.items[0].extra == {"hsCode": "8609.00"}

    again = serialize_record(record)
    assert again["taxId"] == "GH-0042"
    assert again["items"][0]["hsCode"] == "8609.00"


def test_unknown_currency_falls_back_to_usd():
    payload = serialize_record(default_record())
    payload["currency"] = "EUR"
    assert deserialize_record(payload).currency is Currency.USD


def test_currency_parse_accepts_members_and_codes():
    assert Currency.parse("GHS", Currency.USD) is Currency.GHS
    assert Currency.parse(Currency.GHS, Currency.USD) is Currency.GHS
    assert Currency.parse(None, Currency.GHS) is Currency.GHS


def test_line_item_without_id_gets_one():
    item = LineItem.from_dict({"description": "Documentation Fee"})
    assert len(item.id) == 9
    assert item.description == "Documentation Fee"


def test_new_item_id_avoids_existing_ids():
    existing = {new_item_id() for _ in range(20)}
    assert new_item_id(existing) not in existing


def test_customer_display_name_fallbacks():
    assert CustomerDetails(name="Ama", company_name="Volta Imports").display_name == (
        "Volta Imports"
    )
    assert CustomerDetails(name="Ama").display_name == "Ama"
    assert CustomerDetails().display_name == "Customer Name"


def test_blank_item_defaults():
    item = blank_item("abc")
    assert item.id == "abc"
    assert item.unit == "pcs"
    assert item.qty == 1
    assert item.amount == 0
    assert not item.amount_overridden


def test_default_record_due_date_is_a_week_out():
    from datetime import date

    record = default_record(date(2024, 2, 26))
    assert record.date == "2024-02-26"
    assert record.due_date == "2024-03-04"
    assert record.totals.subtotal == 2500.0


def test_override_flag_only_loads_from_a_real_boolean():
    assert LineItem.from_dict({"id": "a", "amountOverridden": True}).amount_overridden
    for stored in ("false", "true", 1, None):
        item = LineItem.from_dict({"id": "a", "amountOverridden": stored})
        assert item.amount_overridden is False
