"""
Editor state for the SeaFreight invoice editor.

EditorState owns the invoice being edited and applies every interaction the
page sends: header, company and customer edits, line item changes, logo
upload, text assist and manual save. The record store and the text-assist
service are injected, so the whole editing flow can be driven without a
browser, a disk or a network.

Line item pricing: editing ``cbm``, ``qty`` or ``rate`` recomputes the
item's amount; editing ``amount`` directly keeps the typed value until the
next pricing edit. Writing a value a field already holds changes nothing.
"""

import copy
import os
import threading
from typing import Any

from freight_invoice.data.template import blank_item, default_record
from freight_invoice.lib import logs
from freight_invoice.models.common import EditorStatus, SaveStatus
from freight_invoice.models.invoice import Currency, InvoiceRecord, LineItem, new_item_id
from freight_invoice.services import get_record_store, get_text_assist
from freight_invoice.services.autosave import DEFAULT_DELAY, AutoSaver, TimerFactory
from freight_invoice.services.record_store import RecordStore
from freight_invoice.services.text_assist import TextAssistService
from freight_invoice.utils.pricing import PRICING_FIELDS, Totals, compute_amount

LOG = logs.logger(__file__)

SAVE_DELAY = float(os.getenv("FREIGHT_INVOICE_SAVE_DELAY", str(DEFAULT_DELAY)))

# Editable attributes per section
RECORD_FIELDS = frozenset({"invoice_number", "date", "due_date", "currency", "notes"})
COMPANY_FIELDS = frozenset({"name", "address", "email", "phone"})
CUSTOMER_FIELDS = frozenset(
    {"name", "company_name", "address", "email", "reference_id"}
)
ITEM_FIELDS = frozenset(
    {"description", "dimensions", "unit", "weight", "cbm", "qty", "rate", "amount"}
)


class EditorState:
    """
    The single editing session: record, save status and in-flight assists.

    Attributes:
        record: The invoice being edited. Mutate it only through this class.
        store: Where the record is loaded from and saved to.
        assist: Text-assist collaborator.
        autosaver: Debounced writer for the record.
    """

    def __init__(
        self,
        store: RecordStore,
        assist: TextAssistService,
        record: InvoiceRecord | None = None,
        save_delay: float = SAVE_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        """
        Initialize the session, loading the saved invoice when there is one.

        Args:
            store: RecordStore used for load and save.
            assist: TextAssistService used by the assist actions.
            record: Starting record; when None the store is consulted and the
                default template is used if nothing usable is saved.
            save_delay: Debounce window for automatic saves, in seconds.
            timer_factory: Countdown factory passed to the AutoSaver.
        """
        self.store = store
        self.assist = assist
        self._lock = threading.RLock()
        self._pending_items: set[str] = set()
        self._numbering_pending = False

        if record is None:
            record = store.load()
            if record is None:
                LOG.info("No saved invoice found, starting from the template")
                record = default_record()
        self.record = record

        self.autosaver = AutoSaver(
            store, self.snapshot, delay=save_delay, timer_factory=timer_factory
        )

    @classmethod
    def from_config(cls) -> "EditorState":
        """Build a session from the configured store and text-assist service."""
        return cls(store=get_record_store(), assist=get_text_assist())

    # Read side

    def snapshot(self) -> InvoiceRecord:
        """Return a deep copy of the record, safe to read from other threads."""
        with self._lock:
            return copy.deepcopy(self.record)

    @property
    def totals(self) -> Totals:
        """Current subtotal, total CBM and total."""
        with self._lock:
            return self.record.totals

    @property
    def save_status(self) -> SaveStatus:
        """Current save status."""
        return self.autosaver.status

    def status(self) -> EditorStatus:
        """Return the save status and outstanding assist requests."""
        with self._lock:
            return EditorStatus(
                save_status=self.autosaver.status,
                pending_items=sorted(self._pending_items),
                numbering_pending=self._numbering_pending,
            )

    def is_refining(self, item_id: str) -> bool:
        """True while a description refinement is in flight for the item."""
        with self._lock:
            return item_id in self._pending_items

    # Record-level edits

    def update_field(self, field: str, value: Any) -> bool:
        """
        Set a top-level field (invoice number, dates, currency, notes).

        Returns:
            True if the record changed.
        """
        if field not in RECORD_FIELDS:
            raise ValueError(f"Unknown invoice field: {field}")
        with self._lock:
            if field == "currency":
                value = Currency.parse(value, self.record.currency)
            elif value is None:
                value = ""
            return self._assign(self.record, field, value)

    def update_company(self, field: str, value: Any) -> bool:
        """Set a company field; returns True if the record changed."""
        if field not in COMPANY_FIELDS:
            raise ValueError(f"Unknown company field: {field}")
        with self._lock:
            return self._assign(self.record.company, field, value or "")

    def update_customer(self, field: str, value: Any) -> bool:
        """Set a customer field; returns True if the record changed."""
        if field not in CUSTOMER_FIELDS:
            raise ValueError(f"Unknown customer field: {field}")
        with self._lock:
            return self._assign(self.record.customer, field, value or "")

    def set_logo(self, data_uri: str | None) -> bool:
        """Replace the company logo with a data URI, or clear it with None."""
        with self._lock:
            return self._assign(self.record.company, "logo_url", data_uri or None)

    # Line items

    def add_item(self) -> LineItem:
        """Append a blank line item with a fresh id and return it."""
        with self._lock:
            item = blank_item(new_item_id(self.record.item_ids()))
            self.record.items.append(item)
            self._touch()
            return item

    def remove_item(self, item_id: str) -> bool:
        """Remove the item with the given id; returns True if one was removed."""
        with self._lock:
            remaining = [item for item in self.record.items if item.id != item_id]
            if len(remaining) == len(self.record.items):
                return False
            self.record.items = remaining
            self._touch()
            return True

    def update_item(self, item_id: str, field: str, value: Any) -> LineItem | None:
        """
        Set one field of a line item and apply the pricing rules.

        Args:
            item_id: Id of the item to edit.
            field: One of ITEM_FIELDS.
            value: New raw value as entered.

        Returns:
            The edited item, or None if no item has that id.
        """
        if field not in ITEM_FIELDS:
            raise ValueError(f"Unknown line item field: {field}")
        with self._lock:
            item = self.record.find_item(item_id)
            if item is None:
                LOG.warning("Edit for unknown item %s ignored", item_id)
                return None
            if getattr(item, field) == value:
                return item

            setattr(item, field, value)
            if field in PRICING_FIELDS:
                item.amount = compute_amount(item.cbm, item.qty, item.rate)
                item.amount_overridden = False
            elif field == "amount":
                item.amount_overridden = True
            self._touch()
            return item

    # Text assist

    def refine_description(self, item_id: str) -> str | None:
        """
        Replace an item's description with the text-assist rewrite.

        Only one refinement per item runs at a time. The result is applied
        when it arrives even if the description changed meanwhile; it is
        dropped if the item was removed.

        Returns:
            The applied description, or None when nothing was requested or
            the item disappeared.
        """
        with self._lock:
            item = self.record.find_item(item_id)
            if item is None or not item.description:
                return None
            if item_id in self._pending_items:
                LOG.info("Refinement already running for item %s", item_id)
                return None
            self._pending_items.add(item_id)
            text = item.description

        try:
            refined = self.assist.refine_description(text)
        except Exception:
            LOG.error("Text assist failed for item %s", item_id, exc_info=True)
            refined = text
        finally:
            with self._lock:
                self._pending_items.discard(item_id)

        with self._lock:
            if self.update_item(item_id, "description", refined) is None:
                return None
            return refined

    def generate_next_invoice_number(self) -> str | None:
        """
        Replace the invoice number with its successor.

        Returns:
            The new invoice number, or None when the current number is empty
            or a request is already running.
        """
        with self._lock:
            current = self.record.invoice_number
            if not current or self._numbering_pending:
                return None
            self._numbering_pending = True

        try:
            following = self.assist.next_invoice_number(current)
        except Exception:
            LOG.error("Invoice number generation failed", exc_info=True)
            following = current
        finally:
            with self._lock:
                self._numbering_pending = False

        self.update_field("invoice_number", following)
        return following

    # Persistence

    def save_now(self) -> bool:
        """Write the record immediately; returns True on success."""
        return self.autosaver.save_now()

    def close(self) -> None:
        """Flush a pending automatic save and stop the countdown."""
        if self.autosaver.pending:
            self.autosaver.save_now()
        self.autosaver.cancel()

    def _assign(self, target: object, field: str, value: Any) -> bool:
        # Caller holds the lock
        if getattr(target, field) == value:
            return False
        setattr(target, field, value)
        self._touch()
        return True

    def _touch(self) -> None:
        self.autosaver.mark_modified()
