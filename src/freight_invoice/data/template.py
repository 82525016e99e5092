"""Default invoice used when nothing usable has been saved yet."""

from datetime import date, timedelta

from freight_invoice.models.invoice import (
    CompanyDetails,
    Currency,
    CustomerDetails,
    InvoiceRecord,
    LineItem,
)

DEFAULT_DUE_DAYS = 7


def default_record(today: date | None = None) -> InvoiceRecord:
    """
    Return a fresh copy of the starter invoice.

    Args:
        today: Issue date; defaults to the current date. The due date is
            seven days later.

    Returns:
        A new InvoiceRecord the caller may mutate freely.
    """
    today = today or date.today()
    return InvoiceRecord(
        invoice_number="INV-2023-001",
        date=today.isoformat(),
        due_date=(today + timedelta(days=DEFAULT_DUE_DAYS)).isoformat(),
        currency=Currency.USD,
        company=CompanyDetails(
            name="Atlantic Sea Freight Ltd",
            address="Tema Harbour, Ghana",
            email="ops@atlanticfreight.gh",
            phone="+233 55 123 4567",
            logo_url=None,
        ),
        customer=CustomerDetails(),
        items=[
            LineItem(
                id="1",
                description="20ft Container - General Goods",
                dimensions="6.06m x 2.44m x 2.59m",
                weight=2200,
                unit="Container",
                cbm=33.2,
                qty=1,
                rate=2500,
                amount=2500,
            )
        ],
        notes=(
            "Please make checks payable to Atlantic Sea Freight Ltd.\n"
            "Payment due within 14 days of invoice date."
        ),
    )


def blank_item(item_id: str) -> LineItem:
    """Return the row appended by the "Add item" action."""
    return LineItem(
        id=item_id,
        description="",
        dimensions="",
        weight=0,
        unit="pcs",
        cbm=0,
        qty=1,
        rate=0,
        amount=0,
    )
