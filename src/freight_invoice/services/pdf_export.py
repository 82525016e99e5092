"""
PDF export of an invoice record using the reportlab canvas.

The document mirrors the on-screen preview: accent bar, company header,
bill-to and shipment details, the item table, totals, notes and a footer.

Everything is drawn on one page. When the content is taller than A4 the page
is stretched to fit instead of being paginated, so the exported file always
reads top to bottom like the preview.
"""

import base64
import binascii
from dataclasses import dataclass
from io import BytesIO
from typing import Callable

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from freight_invoice.errors import ExportError
from freight_invoice.lib import logs
from freight_invoice.models.invoice import Currency, InvoiceRecord, LineItem
from freight_invoice.utils.formatting import (
    currency_symbol,
    format_cbm,
    format_quantity,
    format_total_cbm,
    format_weight,
)
from freight_invoice.utils.pricing import to_number

LOG = logs.logger(__file__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
TOP_BAR = 12.0
FOOTER_SPACE = 40.0

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
ACCENT = colors.HexColor("#0284c7")
INK = colors.HexColor("#0f172a")
MUTED = colors.HexColor("#64748b")
RULE = colors.HexColor("#e2e8f0")
PANEL = colors.HexColor("#f8fafc")

# (label, width, alignment) for the item table
_COLUMNS = [
    ("Description", 165.0, "left"),
    ("Unit", 55.0, "center"),
    ("Qty", 45.0, "center"),
    ("Weight", 60.0, "center"),
    ("CBM", 55.0, "center"),
    ("Rate", 65.0, "right"),
    ("Amount", CONTENT_WIDTH - 445.0, "right"),
]
_CELL_PAD = 4.0


@dataclass
class _Block:
    """A horizontal band of the document; ``draw`` receives the band's top y."""

    height: float
    draw: Callable[[canvas.Canvas, float], None]


def pdf_filename(record: InvoiceRecord) -> str:
    """Return the download name, e.g. 'INV-2023-001.pdf'."""
    stem = (record.invoice_number or "").strip() or "Invoice"
    return stem.replace("/", "-").replace("\\", "-") + ".pdf"


def render_invoice_pdf(record: InvoiceRecord) -> bytes:
    """
    Render the invoice as a single-page PDF.

    Args:
        record: The invoice to render.

    Returns:
        The PDF file contents.

    Raises:
        ExportError: If rendering fails.
    """
    try:
        return _render(record)
    except Exception as exc:
        raise ExportError(f"Failed to render invoice PDF: {exc}") from exc


def page_height_for(record: InvoiceRecord) -> float:
    """Return the page height the record renders onto (A4 or taller)."""
    return _page_height(_layout(record))


def _render(record: InvoiceRecord) -> bytes:
    blocks = _layout(record)
    page_height = _page_height(blocks)

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, page_height))
    pdf.setTitle(record.invoice_number or "Invoice")
    pdf.setAuthor(record.company.name or "")
    pdf.setSubject("Invoice")
    pdf.setCreator("InvoiceGen")

    pdf.setFillColor(ACCENT)
    pdf.rect(0, page_height - TOP_BAR, PAGE_WIDTH, TOP_BAR, stroke=0, fill=1)

    top = page_height - TOP_BAR - MARGIN
    for block in blocks:
        block.draw(pdf, top)
        top -= block.height

    pdf.setFont(REGULAR, 8)
    pdf.setFillColor(MUTED)
    pdf.drawCentredString(PAGE_WIDTH / 2, MARGIN / 2, "Generated by InvoiceGen")

    pdf.showPage()
    pdf.save()
    LOG.info(
        "Rendered %s (%d items, page height %.0fpt)",
        pdf_filename(record),
        len(record.items),
        page_height,
    )
    return buffer.getvalue()


def _page_height(blocks: list[_Block]) -> float:
    content = TOP_BAR + MARGIN + sum(b.height for b in blocks) + FOOTER_SPACE
    return max(PAGE_HEIGHT, content)


def _layout(record: InvoiceRecord) -> list[_Block]:
    blocks = [_header_block(record), _parties_block(record), _table_header_block()]
    if record.items:
        blocks.extend(_item_block(item, record.currency) for item in record.items)
    else:
        blocks.append(_empty_items_block())
    blocks.append(_totals_block(record))
    blocks.append(_notes_block(record.notes))
    return blocks


def _header_block(record: InvoiceRecord) -> _Block:
    company = record.company
    lines = [
        *(company.address or "123 Ocean Drive, Port City").splitlines(),
        company.email or "contact@logistics.com",
        company.phone or "+233 20 000 0000",
    ]
    logo = _logo_image(company.logo_url)
    meta = [
        ("Invoice #", record.invoice_number),
        ("Date", record.date),
        ("Due Date", record.due_date),
    ]
    height = max(80.0, 36.0 + 12.0 * len(lines)) + 24.0

    def draw(pdf: canvas.Canvas, top: float) -> None:
        x = MARGIN
        if logo is not None:
            pdf.drawImage(
                logo,
                x,
                top - 64,
                width=64,
                height=64,
                preserveAspectRatio=True,
                mask="auto",
            )
            x += 76
        pdf.setFillColor(INK)
        pdf.setFont(BOLD, 16)
        pdf.drawString(x, top - 16, company.name or "Your Company Name")
        pdf.setFillColor(MUTED)
        pdf.setFont(REGULAR, 9)
        for index, line in enumerate(lines):
            pdf.drawString(x, top - 34 - index * 12, line)

        right = PAGE_WIDTH - MARGIN
        pdf.setFillColor(ACCENT)
        pdf.setFont(REGULAR, 24)
        pdf.drawRightString(right, top - 20, "INVOICE")
        pdf.setFont(REGULAR, 9)
        for index, (label, value) in enumerate(meta):
            pdf.setFillColor(INK)
            pdf.drawRightString(right, top - 42 - index * 13, f"{label}: {value}")

    return _Block(height, draw)


def _parties_block(record: InvoiceRecord) -> _Block:
    customer = record.customer
    bill_to = [customer.display_name]
    if customer.company_name:
        bill_to.append(customer.name)
    bill_to.extend(customer.address.splitlines())
    bill_to.append(customer.email)
    bill_to = [line for line in bill_to if line]
    reference = customer.reference_id or "N/A"
    height = 22.0 + max(13.0 * len(bill_to), 64.0) + 20.0

    def draw(pdf: canvas.Canvas, top: float) -> None:
        half = CONTENT_WIDTH / 2
        pdf.setFillColor(ACCENT)
        pdf.setFont(BOLD, 8)
        pdf.drawString(MARGIN, top - 8, "BILL TO")
        pdf.drawString(MARGIN + half + 12, top - 8, "SHIPMENT DETAILS")

        for index, line in enumerate(bill_to):
            pdf.setFillColor(INK)
            pdf.setFont(BOLD if index == 0 else REGULAR, 11 if index == 0 else 9)
            pdf.drawString(MARGIN, top - 24 - index * 13, line)

        panel_x = MARGIN + half + 12
        panel_width = half - 12
        pdf.setFillColor(PANEL)
        pdf.setStrokeColor(RULE)
        pdf.rect(panel_x, top - 80, panel_width, 64, stroke=1, fill=1)
        pdf.setFillColor(MUTED)
        pdf.setFont(REGULAR, 7)
        pdf.drawString(panel_x + 8, top - 28, "REFERENCE / BOOKING NO.")
        pdf.setFillColor(INK)
        pdf.setFont("Courier-Bold", 12)
        pdf.drawString(panel_x + 8, top - 44, reference)
        pdf.setFillColor(MUTED)
        pdf.setFont(REGULAR, 9)
        pdf.drawString(panel_x + 8, top - 66, "Sea Freight Service")

    return _Block(height, draw)


def _table_header_block() -> _Block:
    height = 20.0

    def draw(pdf: canvas.Canvas, top: float) -> None:
        pdf.setFillColor(ACCENT)
        pdf.rect(MARGIN, top - height, CONTENT_WIDTH, height, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.setFont(BOLD, 9)
        _draw_cells(pdf, top - 14, [label for label, _, _ in _COLUMNS])

    return _Block(height, draw)


def _item_block(item: LineItem, currency: Currency) -> _Block:
    description_width = _COLUMNS[0][1] - 2 * _CELL_PAD
    description = simpleSplit(item.description or "", REGULAR, 9, description_width)
    description = description or [""]
    dimensions = (
        simpleSplit(f"Dims: {item.dimensions}", REGULAR, 7, description_width)
        if item.dimensions
        else []
    )
    height = 10.0 + 11.0 * len(description) + 9.0 * len(dimensions)
    cells = [
        "",
        (item.unit or "").upper(),
        format_quantity(item.qty),
        format_weight(item.weight),
        format_cbm(item.cbm),
        _money(item.rate, currency),
        _money(item.amount, currency),
    ]

    def draw(pdf: canvas.Canvas, top: float) -> None:
        baseline = top - 14
        pdf.setFillColor(INK)
        pdf.setFont(REGULAR, 9)
        for index, line in enumerate(description):
            pdf.drawString(MARGIN + _CELL_PAD, baseline - index * 11, line)
        pdf.setFillColor(MUTED)
        pdf.setFont(REGULAR, 7)
        dims_top = baseline - 11 * len(description)
        for index, line in enumerate(dimensions):
            pdf.drawString(MARGIN + _CELL_PAD, dims_top - index * 9, line)
        pdf.setFillColor(INK)
        pdf.setFont(REGULAR, 9)
        _draw_cells(pdf, baseline, cells)
        pdf.setStrokeColor(RULE)
        pdf.line(MARGIN, top - height, MARGIN + CONTENT_WIDTH, top - height)

    return _Block(height, draw)


def _empty_items_block() -> _Block:
    height = 40.0

    def draw(pdf: canvas.Canvas, top: float) -> None:
        pdf.setFillColor(MUTED)
        pdf.setFont("Helvetica-Oblique", 9)
        pdf.drawCentredString(PAGE_WIDTH / 2, top - 24, "No items added yet.")

    return _Block(height, draw)


def _totals_block(record: InvoiceRecord) -> _Block:
    totals = record.totals
    rows = [
        ("Subtotal", _money(totals.subtotal, record.currency)),
        ("Total CBM", format_total_cbm(totals.total_cbm)),
    ]
    height = 90.0

    def draw(pdf: canvas.Canvas, top: float) -> None:
        right = PAGE_WIDTH - MARGIN
        left = right - 200
        pdf.setFont(REGULAR, 9)
        pdf.setFillColor(MUTED)
        for index, (label, value) in enumerate(rows):
            y = top - 24 - index * 16
            pdf.drawString(left, y, label)
            pdf.drawRightString(right, y, value)
        pdf.setStrokeColor(RULE)
        pdf.line(left, top - 60, right, top - 60)
        pdf.setFillColor(INK)
        pdf.setFont(BOLD, 13)
        pdf.drawString(left, top - 78, "Total")
        pdf.setFillColor(ACCENT)
        pdf.setFont(BOLD, 15)
        pdf.drawRightString(right, top - 78, _money(totals.total, record.currency))

    return _Block(height, draw)


def _notes_block(notes: str) -> _Block:
    lines: list[str] = []
    for paragraph in (notes or "").splitlines():
        lines.extend(simpleSplit(paragraph, REGULAR, 9, CONTENT_WIDTH) or [""])
    height = 44.0 + 12.0 * len(lines)

    def draw(pdf: canvas.Canvas, top: float) -> None:
        pdf.setStrokeColor(RULE)
        pdf.line(MARGIN, top - 8, MARGIN + CONTENT_WIDTH, top - 8)
        pdf.setFillColor(INK)
        pdf.setFont(BOLD, 10)
        pdf.drawString(MARGIN, top - 26, "Notes & Instructions")
        pdf.setFillColor(MUTED)
        pdf.setFont(REGULAR, 9)
        for index, line in enumerate(lines):
            pdf.drawString(MARGIN, top - 42 - index * 12, line)

    return _Block(height, draw)


def _draw_cells(pdf: canvas.Canvas, baseline: float, values: list[str]) -> None:
    """Draw one row of table cells using each column's alignment."""
    x = MARGIN
    for (_, width, align), value in zip(_COLUMNS, values):
        if value:
            if align == "left":
                pdf.drawString(x + _CELL_PAD, baseline, value)
            elif align == "right":
                pdf.drawRightString(x + width - _CELL_PAD, baseline, value)
            else:
                pdf.drawCentredString(x + width / 2, baseline, value)
        x += width


def _money(value: object, currency: Currency) -> str:
    """
    Format an amount for the PDF.

    The standard Type 1 fonts cannot draw the cedi sign, so currencies whose
    symbol falls outside WinAnsi are written with their code instead.
    """
    symbol = currency_symbol(currency)
    try:
        symbol.encode("cp1252")
    except UnicodeEncodeError:
        symbol = f"{getattr(currency, 'value', currency)} "
    return f"{symbol}{to_number(value):.2f}"


def _logo_image(logo_url: str | None) -> ImageReader | None:
    """Decode a base64 data URI into an image, or None if absent or broken."""
    if not logo_url:
        return None
    _, _, encoded = logo_url.partition("base64,")
    if not encoded:
        LOG.warning("Logo is not a base64 data URI, leaving it out of the PDF")
        return None
    try:
        return ImageReader(BytesIO(base64.b64decode(encoded)))
    except (binascii.Error, ValueError, OSError) as e:
        LOG.warning("Logo could not be decoded, leaving it out of the PDF: %s", e)
        return None
