"""
Layout helpers for the SeaFreight invoice editor.

This module defines the root layout structure including:
- A status poll interval that refreshes the save indicator
- Download target and error dialog for PDF export
- Page header with Print and Download PDF actions
- Editor form on the left, live invoice preview on the right

The print stylesheet hides everything except the preview.
"""

from dash import dcc, html
from dash_iconify import DashIconify

from freight_invoice.components.invoice_editor import build_invoice_editor
from freight_invoice.components.invoice_preview import build_invoice_preview
from freight_invoice.models.common import EditorStatus
from freight_invoice.models.invoice import InvoiceRecord

APP_TITLE = "SeaFreight Invoice"

# How often the page asks for the save status, in milliseconds
STATUS_POLL_MS = 1000

EXPORT_ERROR_MESSAGE = (
    "Could not generate the PDF. Please use the Print option and choose "
    "'Save as PDF' instead."
)


def build_layout(record: InvoiceRecord, status: EditorStatus | None = None) -> html.Div:
    """
    Build the root layout for the invoice editor.

    Args:
        record: Invoice the page opens with.
        status: Editor status at load time; a fresh status when None.

    Returns:
        Root html.Div containing the complete application layout.
    """
    status = status or EditorStatus()
    return html.Div(
        className="app-shell",
        children=[
            # Drives the save indicator and assist button states
            dcc.Interval(id="status-poll", interval=STATUS_POLL_MS),
            # Download component for PDF exports
            dcc.Download(id="pdf-download"),
            dcc.ConfirmDialog(id="export-error", message=EXPORT_ERROR_MESSAGE),
            # Target for the clientside print callback
            dcc.Store(id="print-trigger", data=0),
            _build_page_header(),
            html.Main(
                className="app-container editor-grid",
                children=[
                    html.Section(
                        className="editor-pane",
                        children=build_invoice_editor(
                            record,
                            save_status=status.save_status,
                            pending_items=status.pending_items,
                        ),
                    ),
                    html.Section(
                        className="preview-pane",
                        children=html.Div(
                            id="invoice-preview",
                            children=build_invoice_preview(record),
                        ),
                    ),
                ],
            ),
        ],
    )


def _build_page_header() -> html.Header:
    """Return the top bar with the title and document actions."""
    return html.Header(
        className="page-header no-print",
        children=[
            html.Div(
                className="brand",
                children=[
                    html.Div(
                        className="brand-mark",
                        children=DashIconify(icon="lucide:ship", width=22),
                    ),
                    html.H1(APP_TITLE),
                ],
            ),
            html.Div(
                className="header-actions",
                children=[
                    html.Button(
                        id="print-button",
                        className="button ghost gap",
                        children=[
                            DashIconify(icon="lucide:printer", className="button-icon"),
                            "Print",
                        ],
                    ),
                    html.Button(
                        id="export-pdf",
                        className="button primary gap",
                        children=[
                            DashIconify(icon="lucide:download", className="button-icon"),
                            "Download PDF",
                        ],
                    ),
                ],
            ),
        ],
    )
