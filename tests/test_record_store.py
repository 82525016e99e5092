import json

import pytest

from freight_invoice.data.template import default_record
from freight_invoice.errors import StorageError
from freight_invoice.models.invoice import serialize_record
from freight_invoice.services.record_store import STORAGE_KEY, reconcile_payload
from freight_invoice.services.record_store_disk import DiskRecordStore
from freight_invoice.services.record_store_memory import MemoryRecordStore


def _blob(**overrides):
    payload = serialize_record(default_record())
    payload.update(overrides)
    return json.dumps(payload)


def test_empty_slot_loads_nothing():
    assert MemoryRecordStore().load() is None


@pytest.mark.parametrize(
    "blob",
    ["{not json", "", "null", "[]", '"text"', '{"items": "none"}', '{"notes": "x"}'],
)
def test_unusable_blobs_load_nothing(blob):
    assert MemoryRecordStore(blob).load() is None


def test_saved_record_loads_back_equal():
    record = default_record()
    record.customer.name = "Kofi Mensah"
    store = MemoryRecordStore()
    store.save(record)

    assert store.writes == 1
    assert store.load() == record


def test_non_numeric_values_are_coerced_on_load():
    item = {
        "id": "1",
        "description": "LCL",
        "weight": None,
        "cbm": "2.5",
        "qty": "three",
        "rate": "abc",
        "amount": "NaN",
    }
    record = MemoryRecordStore(_blob(items=[item])).load()

    loaded = record.items[0]
    assert loaded.weight == 0
    assert loaded.cbm == 2.5
    assert loaded.qty == 0
    assert loaded.rate == 0
    assert loaded.amount == 0
    assert record.totals.subtotal == 0.0


def test_missing_fields_are_backfilled_from_template():
    blob = json.dumps({"items": [], "company": {"name": "Harbour Line"}})
    record = MemoryRecordStore(blob).load()

    template = default_record()
    assert record.company.name == "Harbour Line"
    assert record.company.email == template.company.email
    assert record.invoice_number == template.invoice_number
    assert record.notes == template.notes
    assert record.items == []


def test_non_object_sections_keep_template_values():
    blob = json.dumps({"items": [], "company": "broken", "customer": None})
    record = MemoryRecordStore(blob).load()
    assert record.company.name == default_record().company.name
    assert record.customer.name == ""


def test_non_object_items_are_dropped_and_ids_made_unique():
    blob = _blob(items=[{"id": "x"}, {"id": "x"}, 5, {"description": "no id"}])
    record = MemoryRecordStore(blob).load()

    ids = [item.id for item in record.items]
    assert len(ids) == 3
    assert ids[0] == "x"
    assert len(set(ids)) == 3


def test_unknown_keys_are_kept_through_load_and_save():
    blob = _blob(taxId="GH-1", items=[{"id": "a", "hsCode": "8609"}])
    store = MemoryRecordStore(blob)
    record = store.load()
    store.save(record)

    saved = json.loads(store.blob)
    assert saved["taxId"] == "GH-1"
    assert saved["items"][0]["hsCode"] == "8609"


def test_reconcile_keeps_dotted_keys_intact():
    merged = reconcile_payload({"items": [], "a.b": 1}, default_record())
    assert merged["a.b"] == 1


def test_cedi_sign_is_stored_as_text():
    record = default_record()
    record.notes = "Pay ₵ only"
    store = MemoryRecordStore()
    store.save(record)
    assert "₵" in store.blob


class _FailingStore(MemoryRecordStore):
    def read(self):
        raise OSError("disk unavailable")

    def write(self, blob):
        raise OSError("disk full")


def test_read_failure_loads_nothing():
    assert _FailingStore().load() is None


def test_write_failure_raises_storage_error():
    with pytest.raises(StorageError):
        _FailingStore().save(default_record())


def test_disk_store_survives_reopen(tmp_path):
    record = default_record()
    record.invoice_number = "INV-2024-010"

    first = DiskRecordStore(tmp_path / "slot")
    first.save(record)
    first.close()

    second = DiskRecordStore(tmp_path / "slot")
    try:
        assert second.load() == record
        second.clear()
        assert second.load() is None
    finally:
        second.close()


def test_disk_store_defaults_to_configured_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("FREIGHT_INVOICE_DATA_DIR", str(tmp_path / "configured"))
    store = DiskRecordStore()
    try:
        assert store.cache_dir == tmp_path / "configured"
        assert store.read() is None
    finally:
        store.close()


def test_storage_key_name():
    assert STORAGE_KEY == "seafreight_invoice_data"


@pytest.mark.parametrize("key", ["zz[2]", "company[0]", "notes[3]", "invoiceNumber[0]"])
def test_bracketed_unknown_keys_are_kept_verbatim(key):
    store = MemoryRecordStore(json.dumps({"items": [], key: 1}))
    record = store.load()

    assert record.extra == {key: 1}
    assert record.notes == default_record().notes
    store.save(record)
    assert json.loads(store.blob)[key] == 1


def test_sections_merge_field_by_field_without_touching_other_keys():
    blob = json.dumps(
        {"items": [], "customer": {"referenceId": "BL-77"}, "notes": "Net 30"}
    )
    record = MemoryRecordStore(blob).load()
    assert record.customer.reference_id == "BL-77"
    assert record.customer.name == ""
    assert record.notes == "Net 30"
    assert record.company == default_record().company
