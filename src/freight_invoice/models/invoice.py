"""
Invoice record models and serialization helpers.

The record is the single document the editor works on:

    InvoiceRecord
    ├── CompanyDetails (the issuing freight company, optional logo)
    ├── CustomerDetails (bill-to party and booking reference)
    └── LineItem[] (freight and service charges, in display order)

Serialization uses the camelCase field names of the stored JSON blob
(``invoiceNumber``, ``dueDate``, ``referenceId`` ...). Keys the models do not
know about are carried in ``extra`` and written back unchanged.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from freight_invoice.utils.pricing import Totals, compute_totals

RawNumber = float | int | str | None


class Currency(str, Enum):
    """Currencies an invoice can be issued in."""

    GHS = "GHS"
    USD = "USD"

    @classmethod
    def parse(cls, value: Any, default: "Currency") -> "Currency":
        """Return the matching member, or ``default`` for unknown values."""
        try:
            return cls(getattr(value, "value", value))
        except ValueError:
            return default


@dataclass(slots=True)
class CompanyDetails:
    """The company issuing the invoice."""

    name: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""
    logo_url: str | None = None

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape."""
        return {
            "name": self.name,
            "address": self.address,
            "email": self.email,
            "phone": self.phone,
            "logoUrl": self.logo_url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompanyDetails":
        """Deserialize from the stored JSON shape."""
        return cls(
            name=_text(data.get("name")),
            address=_text(data.get("address")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            logo_url=data.get("logoUrl") or None,
        )


@dataclass(slots=True)
class CustomerDetails:
    """The bill-to party and its shipment reference."""

    name: str = ""
    company_name: str = ""
    address: str = ""
    email: str = ""
    reference_id: str = ""

    @property
    def display_name(self) -> str:
        """Return the headline name shown in the Bill To block."""
        return self.company_name or self.name or "Customer Name"

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape."""
        return {
            "name": self.name,
            "companyName": self.company_name,
            "address": self.address,
            "email": self.email,
            "referenceId": self.reference_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomerDetails":
        """Deserialize from the stored JSON shape."""
        return cls(
            name=_text(data.get("name")),
            company_name=_text(data.get("companyName")),
            address=_text(data.get("address")),
            email=_text(data.get("email")),
            reference_id=_text(data.get("referenceId")),
        )


@dataclass(slots=True)
class LineItem:
    """
    One billable row of the invoice.

    Numeric fields hold whatever the editor last wrote; the pricing helpers
    coerce them at computation time. ``amount`` is stored rather than derived
    so it can be overridden by hand, and ``amount_overridden`` records that
    the current value came from a direct edit.
    """

    id: str
    description: str = ""
    dimensions: str = ""
    unit: str = ""
    weight: RawNumber = 0
    cbm: RawNumber = 0
    qty: RawNumber = 0
    rate: RawNumber = 0
    amount: RawNumber = 0
    amount_overridden: bool = False
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape, including unknown keys."""
        return {
            **self.extra,
            "id": self.id,
            "description": self.description,
            "dimensions": self.dimensions,
            "unit": self.unit,
            "weight": self.weight,
            "cbm": self.cbm,
            "qty": self.qty,
            "rate": self.rate,
            "amount": self.amount,
            "amountOverridden": self.amount_overridden,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        """Deserialize from the stored JSON shape."""
        return cls(
            id=_text(data.get("id")) or new_item_id(),
            description=_text(data.get("description")),
            dimensions=_text(data.get("dimensions")),
            unit=_text(data.get("unit")),
            weight=data.get("weight", 0),
            cbm=data.get("cbm", 0),
            qty=data.get("qty", 0),
            rate=data.get("rate", 0),
            amount=data.get("amount", 0),
            amount_overridden=data.get("amountOverridden") is True,
            extra={k: v for k, v in data.items() if k not in _ITEM_KEYS},
        )


@dataclass(slots=True)
class InvoiceRecord:
    """The invoice being edited."""

    invoice_number: str
    date: str
    due_date: str
    currency: Currency
    company: CompanyDetails
    customer: CustomerDetails
    items: list[LineItem] = field(default_factory=list)
    notes: str = ""
    extra: dict = field(default_factory=dict)

    @property
    def totals(self) -> Totals:
        """Return subtotal, total CBM and total over the current items."""
        return compute_totals(self.items)

    def find_item(self, item_id: str) -> LineItem | None:
        """Return the item with the given id, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def item_ids(self) -> set[str]:
        """Return the ids of the current items."""
        return {item.id for item in self.items}


_RECORD_KEYS = frozenset(
    {
        "invoiceNumber",
        "date",
        "dueDate",
        "currency",
        "company",
        "customer",
        "items",
        "notes",
    }
)
_ITEM_KEYS = frozenset(
    {
        "id",
        "description",
        "dimensions",
        "unit",
        "weight",
        "cbm",
        "qty",
        "rate",
        "amount",
        "amountOverridden",
    }
)


def new_item_id(existing: Iterable[str] = ()) -> str:
    """Return a short random id not present in ``existing``."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:9]
        if candidate not in taken:
            return candidate


def serialize_record(record: InvoiceRecord) -> dict:
    """Convert an InvoiceRecord into a JSON serializable dictionary."""
    return {
        **record.extra,
        "invoiceNumber": record.invoice_number,
        "date": record.date,
        "dueDate": record.due_date,
        "currency": record.currency.value,
        "company": record.company.to_dict(),
        "customer": record.customer.to_dict(),
        "items": [item.to_dict() for item in record.items],
        "notes": record.notes,
    }


def deserialize_record(payload: Mapping[str, Any]) -> InvoiceRecord:
    """
    Convert a dictionary in the stored JSON shape back into an InvoiceRecord.

    The payload is expected to be complete (see the record store's
    reconciliation step); missing text fields become empty strings and an
    unknown currency falls back to USD.
    """
    return InvoiceRecord(
        invoice_number=_text(payload.get("invoiceNumber")),
        date=_text(payload.get("date")),
        due_date=_text(payload.get("dueDate")),
        currency=Currency.parse(payload.get("currency"), Currency.USD),
        company=CompanyDetails.from_dict(payload.get("company") or {}),
        customer=CustomerDetails.from_dict(payload.get("customer") or {}),
        items=[LineItem.from_dict(item) for item in payload.get("items") or []],
        notes=_text(payload.get("notes")),
        extra={k: v for k, v in payload.items() if k not in _RECORD_KEYS},
    )


def _text(value: Any) -> str:
    """Return ``value`` as a string, mapping None to ''."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
