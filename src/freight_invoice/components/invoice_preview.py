"""
Print-ready invoice document.

Rendered next to the editor and re-rendered after every edit. The print
stylesheet hides everything except this component, so the browser's print
dialog produces the same document.
"""

from __future__ import annotations

from dash import html
from dash_iconify import DashIconify

from freight_invoice.models.invoice import (
    CompanyDetails,
    Currency,
    InvoiceRecord,
    LineItem,
)
from freight_invoice.utils.formatting import (
    format_cbm,
    format_money,
    format_quantity,
    format_total_cbm,
    format_weight,
)

_TABLE_COLUMNS = [
    ("Description", "col-description"),
    ("Unit", "center"),
    ("Qty", "center"),
    ("Weight", "center"),
    ("CBM", "center"),
    ("Rate", "right"),
    ("Amount", "right"),
]


def build_invoice_preview(record: InvoiceRecord) -> html.Div:
    """Return the full invoice document for the given record."""
    return html.Div(
        id="invoice-document",
        className="invoice-document",
        children=[
            html.Div(className="document-accent"),
            html.Div(
                className="document-body",
                children=[
                    _build_header(record),
                    _build_parties(record),
                    _build_items_table(record),
                    _build_totals(record),
                    _build_notes(record.notes),
                ],
            ),
            html.Div(
                className="document-footer",
                children=html.P("Generated by InvoiceGen"),
            ),
        ],
    )


def _build_header(record: InvoiceRecord) -> html.Div:
    """Return the company block and the invoice meta block."""
    company = record.company
    return html.Div(
        className="document-header",
        children=[
            html.Div(
                className="company-block",
                children=[
                    _logo(company),
                    html.Div(
                        children=[
                            html.H1(company.name or "Your Company Name"),
                            html.Div(
                                className="muted company-lines",
                                children=[
                                    html.P(
                                        company.address or "123 Ocean Drive, Port City"
                                    ),
                                    html.P(company.email or "contact@logistics.com"),
                                    html.P(company.phone or "+233 20 000 0000"),
                                ],
                            ),
                        ]
                    ),
                ],
            ),
            html.Div(
                className="invoice-meta",
                children=[
                    html.H2("Invoice", className="document-title"),
                    _meta_row("Invoice #", record.invoice_number),
                    _meta_row("Date", record.date),
                    _meta_row("Due Date", record.due_date),
                ],
            ),
        ],
    )


def _logo(company: CompanyDetails) -> html.Div | html.Img:
    """Return the uploaded logo or the ship placeholder."""
    if company.logo_url:
        return html.Img(src=company.logo_url, alt="Company Logo", className="logo")
    return html.Div(
        className="logo placeholder",
        children=DashIconify(icon="lucide:ship", width=48),
    )


def _meta_row(label: str, value: str) -> html.P:
    return html.P(
        className="meta-line",
        children=[f"{label}: ", html.Span(value, className="strong")],
    )


def _build_parties(record: InvoiceRecord) -> html.Div:
    """Return the Bill To block and the shipment details panel."""
    customer = record.customer
    bill_to = [html.P(customer.display_name, className="party-name")]
    if customer.company_name:
        bill_to.append(html.P(customer.name))
    bill_to.append(html.P(customer.address, className="multiline"))
    bill_to.append(html.P(customer.email))

    return html.Div(
        className="party-grid",
        children=[
            html.Div(
                children=[
                    html.H3("Bill To", className="section-label"),
                    html.Div(className="party-lines", children=bill_to),
                ]
            ),
            html.Div(
                children=[
                    html.H3("Shipment Details", className="section-label"),
                    html.Div(
                        className="shipment-panel",
                        children=[
                            html.P("Reference / Booking No.", className="label"),
                            html.P(customer.reference_id or "N/A", className="reference"),
                            html.Div(
                                className="service-line muted",
                                children=[
                                    DashIconify(icon="lucide:anchor", width=16),
                                    html.Span("Sea Freight Service"),
                                ],
                            ),
                        ],
                    ),
                ]
            ),
        ],
    )


def _build_items_table(record: InvoiceRecord) -> html.Table:
    """Return the line item table, or its empty row."""
    if record.items:
        rows = [_item_row(item, record.currency) for item in record.items]
    else:
        rows = [
            html.Tr(
                html.Td(
                    "No items added yet.",
                    colSpan=len(_TABLE_COLUMNS),
                    className="empty-row",
                )
            )
        ]
    return html.Table(
        className="items-table",
        children=[
            html.Thead(
                html.Tr([html.Th(label, className=cls) for label, cls in _TABLE_COLUMNS])
            ),
            html.Tbody(rows),
        ],
    )


def _item_row(item: LineItem, currency: Currency) -> html.Tr:
    description = [html.Div(item.description, className="item-description")]
    if item.dimensions:
        description.append(html.Div(f"Dims: {item.dimensions}", className="item-dims"))
    return html.Tr(
        [
            html.Td(description),
            html.Td(item.unit, className="center unit"),
            html.Td(format_quantity(item.qty), className="center"),
            html.Td(format_weight(item.weight), className="center"),
            html.Td(format_cbm(item.cbm), className="center"),
            html.Td(format_money(item.rate, currency), className="right"),
            html.Td(format_money(item.amount, currency), className="right strong"),
        ]
    )


def _build_totals(record: InvoiceRecord) -> html.Div:
    """Return the subtotal, total CBM and total rows."""
    totals = record.totals
    return html.Div(
        className="document-totals",
        children=[
            _totals_row("Subtotal", format_money(totals.subtotal, record.currency)),
            _totals_row("Total CBM", format_total_cbm(totals.total_cbm)),
            _totals_row(
                "Total", format_money(totals.total, record.currency), emphasize=True
            ),
        ],
    )


def _totals_row(label: str, value: str, emphasize: bool = False) -> html.Div:
    classes = "totals-row"
    if emphasize:
        classes += " emphasize"
    return html.Div(className=classes, children=[html.Span(label), html.Span(value)])


def _build_notes(notes: str) -> html.Div:
    return html.Div(
        className="document-notes",
        children=[
            html.H4("Notes & Instructions"),
            html.P(notes, className="multiline muted"),
        ],
    )
