"""
Invoice editor form.

Builds the left-hand editing panel:
- Invoice details (number with next-number action, currency, dates) and the
  save indicator with a manual Save button
- Company details with logo upload
- Bill To (customer) details
- Freight & service line items with per-item description refinement
- Notes / payment instructions

Inputs use pattern-matching ids so one callback per section can route edits
into EditorState:

    {"type": "record-field", "field": <record attribute>}
    {"type": "record-date", "field": "date" | "due_date"}
    {"type": "company-field", "field": <company attribute>}
    {"type": "customer-field", "field": <customer attribute>}
    {"type": "item-field", "item": <item id>, "field": <item attribute>}
    {"type": "item-amount", "item": <item id>}

The amount input has its own type because pricing edits write to it.
"""

from typing import Sequence

from dash import dcc, html
from dash_iconify import DashIconify

from freight_invoice.data import suggestions
from freight_invoice.models.common import SaveStatus
from freight_invoice.models.invoice import Currency, InvoiceRecord, LineItem

# Text inputs send their value once typing pauses or the field loses focus
_DEBOUNCE = True


def build_invoice_editor(
    record: InvoiceRecord,
    save_status: SaveStatus = SaveStatus.SAVED,
    pending_items: Sequence[str] = (),
) -> html.Div:
    """
    Build the editing panel for the given record.

    Args:
        record: Invoice to populate the form with.
        save_status: Initial save indicator state.
        pending_items: Item ids whose refine button starts disabled.

    Returns:
        Card-styled div containing the whole form.
    """
    return html.Div(
        className="card editor-card",
        children=[
            _build_datalists(),
            _build_details_section(record, save_status),
            html.Hr(),
            _build_company_section(record),
            html.Hr(),
            _build_customer_section(record),
            html.Hr(),
            html.Div(
                className="editor-section",
                children=[
                    html.H3("Freight & Service Items"),
                    html.Div(
                        id="items-editor",
                        children=build_item_rows(record, pending_items),
                    ),
                    html.Button(
                        id="add-item",
                        className="button ghost gap wide",
                        children=[
                            DashIconify(icon="lucide:plus", className="button-icon"),
                            "Add Item",
                        ],
                    ),
                ],
            ),
            html.Hr(),
            html.Div(
                className="editor-section",
                children=[
                    html.Label("Notes / Payment Instructions", className="field-label"),
                    dcc.Textarea(
                        id={"type": "record-field", "field": "notes"},
                        value=record.notes,
                        placeholder="Thank you for your business. Please pay via bank transfer to...",
                        className="input textarea",
                    ),
                ],
            ),
        ],
    )


def build_item_rows(
    record: InvoiceRecord, pending_items: Sequence[str] = ()
) -> list[html.Div]:
    """Return one editor card per line item, in record order."""
    return [
        _item_card(index, item, item.id in pending_items)
        for index, item in enumerate(record.items, start=1)
    ]


def build_save_indicator(status: SaveStatus) -> tuple[str, str]:
    """Return the (text, className) pair for the save status label."""
    return status.label, f"save-status {status.value}"


def amount_mode_label(item: LineItem) -> str:
    """Return the badge text shown beside an item's amount."""
    return "manual" if item.amount_overridden else ""


def _build_datalists() -> html.Div:
    """Return the autocomplete option lists used by the item inputs."""
    return html.Div(
        className="hidden",
        children=[
            html.Datalist(
                id="list-descriptions",
                children=[html.Option(value=v) for v in suggestions.DESCRIPTIONS],
            ),
            html.Datalist(
                id="list-units",
                children=[html.Option(value=v) for v in suggestions.UNITS],
            ),
            html.Datalist(
                id="list-cbm",
                children=[
                    html.Option(label, value=value)
                    for value, label in suggestions.CBM_PRESETS
                ],
            ),
            html.Datalist(
                id="list-rates",
                children=[html.Option(value=v) for v in suggestions.RATES],
            ),
            html.Datalist(
                id="list-qty",
                children=[html.Option(value=v) for v in suggestions.QUANTITIES],
            ),
        ],
    )


def _build_details_section(record: InvoiceRecord, save_status: SaveStatus) -> html.Div:
    """Return the invoice number, currency and date inputs with the save bar."""
    status_text, status_class = build_save_indicator(save_status)
    return html.Div(
        className="editor-section",
        children=[
            html.Div(
                className="section-header",
                children=[
                    html.H2("Invoice Details"),
                    html.Div(
                        className="save-bar",
                        children=[
                            html.Span(status_text, id="save-status", className=status_class),
                            html.Button(
                                id="save-button",
                                title="Save Invoice",
                                className="button ghost gap small",
                                children=[
                                    DashIconify(icon="lucide:save", className="button-icon"),
                                    "Save",
                                ],
                            ),
                        ],
                    ),
                ],
            ),
            html.Div(
                className="field-grid",
                children=[
                    html.Div(
                        children=[
                            html.Label("Invoice Number", className="field-label"),
                            html.Div(
                                className="input-with-action",
                                children=[
                                    dcc.Input(
                                        id={"type": "record-field", "field": "invoice_number"},
                                        type="text",
                                        value=record.invoice_number,
                                        placeholder="e.g. INV-001",
                                        className="input",
                                        debounce=_DEBOUNCE,
                                    ),
                                    html.Button(
                                        id="next-number",
                                        title="Generate Next Sequence (AI)",
                                        className="icon-button",
                                        children=DashIconify(icon="lucide:refresh-cw"),
                                    ),
                                ],
                            ),
                            html.P(
                                "Click icon to auto-generate next number",
                                className="hint",
                            ),
                        ]
                    ),
                    html.Div(
                        children=[
                            html.Label("Currency", className="field-label"),
                            dcc.RadioItems(
                                id={"type": "record-field", "field": "currency"},
                                options=[
                                    {"label": "GHS (₵)", "value": Currency.GHS.value},
                                    {"label": "USD ($)", "value": Currency.USD.value},
                                ],
                                value=record.currency.value,
                                className="segmented",
                                inline=True,
                            ),
                        ]
                    ),
                    _labeled_date("Date", "date", record.date),
                    _labeled_date("Due Date", "due_date", record.due_date),
                ],
            ),
        ],
    )


def _labeled_date(label: str, field: str, value: str) -> html.Div:
    return html.Div(
        children=[
            html.Label(label, className="field-label"),
            dcc.DatePickerSingle(
                id={"type": "record-date", "field": field},
                date=value or None,
                display_format="YYYY-MM-DD",
                clearable=True,
                className="date-input",
            ),
        ]
    )


def _build_company_section(record: InvoiceRecord) -> html.Div:
    """Return the company inputs and the logo upload."""
    company = record.company
    return html.Div(
        className="editor-section",
        children=[
            html.H3("Your Company"),
            html.Div(
                className="company-row",
                children=[
                    dcc.Upload(
                        id="logo-upload",
                        accept="image/*",
                        className="logo-upload",
                        children=html.Div(
                            id="logo-thumb",
                            children=build_logo_thumb(company.logo_url),
                        ),
                    ),
                    _text_input("company-field", "name", company.name, "Company Name"),
                ],
            ),
            html.Button(
                "Remove logo",
                id="logo-clear",
                className="button link small",
            ),
            dcc.Textarea(
                id={"type": "company-field", "field": "address"},
                value=company.address,
                placeholder="Address / Location",
                className="input textarea short",
            ),
            html.Div(
                className="field-grid",
                children=[
                    _text_input("company-field", "email", company.email, "Email"),
                    _text_input("company-field", "phone", company.phone, "Phone"),
                ],
            ),
        ],
    )


def build_logo_thumb(logo_url: str | None) -> html.Img | html.Div:
    """Return the logo preview inside the upload area."""
    if logo_url:
        return html.Img(src=logo_url, alt="Logo", className="logo-thumb")
    return html.Div(
        className="logo-thumb empty",
        children=[DashIconify(icon="lucide:upload"), html.Span("Logo")],
    )


def _build_customer_section(record: InvoiceRecord) -> html.Div:
    """Return the Bill To inputs."""
    customer = record.customer
    return html.Div(
        className="editor-section",
        children=[
            html.H3("Bill To (Customer)"),
            _text_input(
                "customer-field", "name", customer.name, "Customer / Contact Name"
            ),
            _text_input(
                "customer-field",
                "company_name",
                customer.company_name,
                "Customer Company Name",
            ),
            dcc.Textarea(
                id={"type": "customer-field", "field": "address"},
                value=customer.address,
                placeholder="Customer Address",
                className="input textarea short",
            ),
            html.Div(
                className="field-grid",
                children=[
                    _text_input(
                        "customer-field", "email", customer.email, "Customer Email"
                    ),
                    _text_input(
                        "customer-field",
                        "reference_id",
                        customer.reference_id,
                        "Ref ID / Booking / BL No",
                    ),
                ],
            ),
        ],
    )


def _text_input(kind: str, field: str, value: str, placeholder: str) -> dcc.Input:
    return dcc.Input(
        id={"type": kind, "field": field},
        type="text",
        value=value,
        placeholder=placeholder,
        className="input",
        debounce=_DEBOUNCE,
    )


def _item_card(position: int, item: LineItem, refining: bool) -> html.Div:
    """Return the editor card for one line item."""
    return html.Div(
        className="item-card",
        children=[
            html.Div(
                className="item-card-header",
                children=[
                    html.Span(f"Item {position}", className="label"),
                    html.Button(
                        id={"type": "remove-item", "item": item.id},
                        title="Remove item",
                        className="icon-button danger",
                        children=DashIconify(icon="lucide:trash-2"),
                    ),
                ],
            ),
            html.Label("Description", className="field-label"),
            html.Div(
                className="input-with-action",
                children=[
                    _item_input(
                        item,
                        "description",
                        "text",
                        placeholder="e.g. 20ft Container",
                        datalist="list-descriptions",
                    ),
                    html.Button(
                        id={"type": "refine-item", "item": item.id},
                        title="Refine description (AI)",
                        disabled=refining,
                        className="icon-button",
                        children=DashIconify(icon="lucide:wand-2"),
                    ),
                ],
            ),
            _item_input(item, "dimensions", "text", placeholder="Dimensions (optional)"),
            html.Div(
                className="item-grid",
                children=[
                    _item_cell("Weight", _item_input(item, "weight", "number")),
                    _item_cell(
                        "Unit",
                        _item_input(
                            item, "unit", "text", placeholder="e.g. Pcs", datalist="list-units"
                        ),
                    ),
                    _item_cell(
                        "CBM (Vol)",
                        _item_input(item, "cbm", "number", datalist="list-cbm"),
                    ),
                    _item_cell(
                        "Qty", _item_input(item, "qty", "number", datalist="list-qty")
                    ),
                    _item_cell(
                        "Rate",
                        _item_input(item, "rate", "number", datalist="list-rates"),
                    ),
                    _item_cell(
                        html.Span(
                            [
                                "Amount ",
                                html.Span(
                                    amount_mode_label(item),
                                    id={"type": "amount-mode", "item": item.id},
                                    className="badge",
                                ),
                            ]
                        ),
                        dcc.Input(
                            id={"type": "item-amount", "item": item.id},
                            type="number",
                            value=item.amount,
                            className="input",
                        ),
                    ),
                ],
            ),
        ],
    )


def _item_cell(label: object, control: object) -> html.Div:
    return html.Div(
        className="item-cell",
        children=[html.Label(label, className="field-label small"), control],
    )


def _item_input(
    item: LineItem,
    field: str,
    input_type: str,
    placeholder: str | None = None,
    datalist: str | None = None,
) -> dcc.Input:
    kwargs = {}
    if placeholder:
        kwargs["placeholder"] = placeholder
    if datalist:
        kwargs["list"] = datalist
    return dcc.Input(
        id={"type": "item-field", "item": item.id, "field": field},
        type=input_type,
        value=getattr(item, field),
        className="input",
        debounce=_DEBOUNCE if input_type == "text" else False,
        **kwargs,
    )
