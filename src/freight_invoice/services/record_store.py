"""
Abstract base class for the saved-invoice slot, plus load reconciliation.

A RecordStore holds exactly one JSON blob. Implementations only provide raw
``read``/``write``; this base class owns the serialization and the defensive
rebuild applied on load:

1. A blob that is not valid JSON is treated as absent.
2. A value that is not an object, or whose ``items`` is not a list, is
   treated as absent.
3. Otherwise the blob is merged over the default template (top-level
   keys override, ``company``/``customer`` merge key by key), ``items`` is
   taken wholesale and each item's numeric fields are coerced to numbers.

Keys the template does not know about survive the merge and are written
back on the next save.

Implementations:
- DiskRecordStore: diskcache-backed slot used by the application
- MemoryRecordStore: in-process slot for tests and throwaway sessions
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping

from freight_invoice.data.template import default_record
from freight_invoice.errors import StorageError
from freight_invoice.lib import logs
from freight_invoice.models.invoice import (
    InvoiceRecord,
    deserialize_record,
    new_item_id,
    serialize_record,
)
from freight_invoice.utils.pricing import NUMERIC_FIELDS, to_number

LOG = logs.logger(__file__)

STORAGE_KEY = "seafreight_invoice_data"

_MERGED_SECTIONS = ("company", "customer")


class RecordStore(ABC):
    """
    One named storage slot holding the serialized invoice.

    Subclasses implement read() and write(); load() and save() are shared.
    """

    @abstractmethod
    def read(self) -> str | None:
        """Return the raw stored blob, or None when nothing is stored."""

    @abstractmethod
    def write(self, blob: str) -> None:
        """Replace the stored blob."""

    def load(
        self, template: Callable[[], InvoiceRecord] = default_record
    ) -> InvoiceRecord | None:
        """
        Return the saved invoice rebuilt against the template.

        Never raises for bad data: unreadable, unparsable or structurally
        invalid blobs are logged and reported as absent so the caller can
        start from the default template.

        Args:
            template: Factory for the record whose fields backfill the blob.

        Returns:
            The reconciled InvoiceRecord, or None.
        """
        try:
            blob = self.read()
        except Exception:
            LOG.warning("Failed to read saved invoice data", exc_info=True)
            return None
        if blob is None:
            return None

        try:
            payload = json.loads(blob)
        except (TypeError, ValueError) as e:
            LOG.warning("Failed to parse saved invoice data: %s", e)
            return None

        merged = reconcile_payload(payload, template())
        if merged is None:
            LOG.warning("Saved invoice data has an unexpected shape, ignoring it")
            return None
        return deserialize_record(merged)

    def save(self, record: InvoiceRecord) -> None:
        """
        Serialize and write the record.

        Raises:
            StorageError: If the backend write fails.
        """
        blob = json.dumps(serialize_record(record), ensure_ascii=False)
        try:
            self.write(blob)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"Failed to write invoice data: {exc}") from exc


def reconcile_payload(payload: Any, template: InvoiceRecord) -> dict | None:
    """
    Merge a parsed blob over the template's serialized form.

    Args:
        payload: Value parsed from the stored JSON.
        template: Record supplying defaults for missing fields.

    Returns:
        A dictionary in the stored JSON shape, or None when the payload is
        not an object with an ``items`` list.
    """
    if not isinstance(payload, Mapping):
        return None
    items = payload.get("items")
    if not isinstance(items, list):
        return None

    # Non-object sections are dropped so the template's section survives
    overrides = {
        key: value
        for key, value in payload.items()
        if key != "items"
        and not (key in _MERGED_SECTIONS and not isinstance(value, Mapping))
    }

    # Stored keys are copied verbatim, never interpreted as key paths
    result = serialize_record(template)
    for key, value in overrides.items():
        if key in _MERGED_SECTIONS:
            result[key] = {**result[key], **value}
        else:
            result[key] = value
    result["items"] = _coerce_items(items)
    return result


def _coerce_items(items: list) -> list[dict]:
    """Return stored items with numeric fields coerced and ids made unique."""
    coerced: list[dict] = []
    seen: set[str] = set()
    for index, raw in enumerate(items):
        if not isinstance(raw, Mapping):
            LOG.warning("Dropping saved item %d: not an object", index)
            continue
        item = dict(raw)
        for name in NUMERIC_FIELDS:
            item[name] = to_number(item.get(name))
        item_id = item.get("id")
        item_id = str(item_id) if item_id not in (None, "") else ""
        if not item_id or item_id in seen:
            item_id = new_item_id(seen)
        item["id"] = item_id
        seen.add(item_id)
        coerced.append(item)
    return coerced
