"""
Dash application entry point for the SeaFreight invoice editor.

create_app() wires an EditorState to the page. Each callback routes one kind
of interaction into the state and re-renders the parts of the page it
affects; the preview is rebuilt from the record after every edit.

Callback overview:
- on_details_edit: header, date, company and customer fields
- on_item_edit / on_amount_edit: line item fields and manual amounts
- on_items_changed: add and remove line items
- on_logo_change: logo upload and removal
- on_refine / on_next_number: text assist actions
- on_save / poll_status: manual save and the save indicator
- on_export: PDF download
"""

import os
from pathlib import Path
from typing import Any

from dash import ALL, MATCH, Dash, Input, Output, ctx, dcc, no_update
from dash.exceptions import PreventUpdate

from freight_invoice.components.invoice_editor import (
    amount_mode_label,
    build_item_rows,
    build_logo_thumb,
    build_save_indicator,
)
from freight_invoice.components.invoice_preview import build_invoice_preview
from freight_invoice.errors import ExportError
from freight_invoice.layout import APP_TITLE, build_layout
from freight_invoice.lib import logs
from freight_invoice.models.invoice import InvoiceRecord
from freight_invoice.services.pdf_export import pdf_filename, render_invoice_pdf
from freight_invoice.state import EditorState
from freight_invoice.utils.pricing import PRICING_FIELDS

LOG = logs.logger(__file__)

APP_PORT = int(os.getenv("PORT", "8080"))

_ASSETS_PATH = Path(__file__).resolve().parent / "assets"

_PRINT_SCRIPT = """
function(clicks) {
    if (clicks) {
        window.print();
    }
    return clicks || 0;
}
"""


def create_app(state: EditorState | None = None) -> Dash:
    """
    Build the Dash application around an editing session.

    Args:
        state: Session to serve; built from configuration when None.

    Returns:
        Dash app with layout and callbacks registered.
    """
    state = state or EditorState.from_config()
    app = Dash(
        __name__,
        title=APP_TITLE,
        assets_folder=str(_ASSETS_PATH),
        suppress_callback_exceptions=True,
    )
    # Rebuilt per page load so a refresh shows the current record
    app.layout = lambda: build_layout(state.snapshot(), state.status())
    _register_callbacks(app, state)
    return app


def _register_callbacks(app: Dash, state: EditorState) -> None:
    """Attach every page callback to the app."""

    def preview() -> object:
        return build_invoice_preview(state.snapshot())

    @app.callback(
        Output("invoice-preview", "children", allow_duplicate=True),
        Input({"type": "record-field", "field": ALL}, "value"),
        Input({"type": "record-date", "field": ALL}, "date"),
        Input({"type": "company-field", "field": ALL}, "value"),
        Input({"type": "customer-field", "field": ALL}, "value"),
        prevent_initial_call=True,
    )
    def on_details_edit(*_values: Any) -> object:
        """Apply header, company and customer edits."""
        updaters = {
            "record-field": state.update_field,
            "record-date": state.update_field,
            "company-field": state.update_company,
            "customer-field": state.update_customer,
        }
        for component_id, value in _triggered_values():
            updaters[component_id["type"]](component_id["field"], value)
        return preview()

    @app.callback(
        Output({"type": "item-amount", "item": ALL}, "value"),
        Output({"type": "amount-mode", "item": ALL}, "children", allow_duplicate=True),
        Output("invoice-preview", "children", allow_duplicate=True),
        Input({"type": "item-field", "item": ALL, "field": ALL}, "value"),
        prevent_initial_call=True,
    )
    def on_item_edit(_values: list) -> tuple:
        """Apply line item edits; pricing edits rewrite that item's amount."""
        return apply_item_edits(state)

    @app.callback(
        Output({"type": "amount-mode", "item": ALL}, "children", allow_duplicate=True),
        Output("invoice-preview", "children", allow_duplicate=True),
        Input({"type": "item-amount", "item": ALL}, "value"),
        prevent_initial_call=True,
    )
    def on_amount_edit(_values: list) -> tuple:
        """Apply direct amount edits, marking the amount as manual."""
        return apply_amount_edits(state)

    @app.callback(
        Output("items-editor", "children"),
        Output("invoice-preview", "children", allow_duplicate=True),
        Input("add-item", "n_clicks"),
        Input({"type": "remove-item", "item": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def on_items_changed(_add_clicks: int | None, _remove_clicks: list) -> tuple:
        """Add a blank item or remove the clicked one."""
        trigger = ctx.triggered_id
        if not ctx.triggered or not ctx.triggered[0]["value"]:
            # Buttons re-rendered with no clicks
            raise PreventUpdate
        if trigger == "add-item":
            item = state.add_item()
            LOG.info("Added line item %s", item.id)
        else:
            state.remove_item(trigger["item"])
            LOG.info("Removed line item %s", trigger["item"])
        record = state.snapshot()
        status = state.status()
        return (
            build_item_rows(record, status.pending_items),
            build_invoice_preview(record),
        )

    @app.callback(
        Output("logo-thumb", "children"),
        Output("invoice-preview", "children", allow_duplicate=True),
        Input("logo-upload", "contents"),
        Input("logo-clear", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_logo_change(contents: str | None, _clear_clicks: int | None) -> tuple:
        """Store an uploaded logo as a data URI, or remove it."""
        if ctx.triggered_id == "logo-clear":
            state.set_logo(None)
        elif contents:
            state.set_logo(contents)
        else:
            raise PreventUpdate
        record = state.snapshot()
        return build_logo_thumb(record.company.logo_url), build_invoice_preview(record)

    @app.callback(
        Output({"type": "item-field", "item": MATCH, "field": "description"}, "value"),
        Input({"type": "refine-item", "item": MATCH}, "n_clicks"),
        prevent_initial_call=True,
    )
    def on_refine(clicks: int | None) -> str:
        """Rewrite the item's description with the text assist."""
        if not clicks:
            raise PreventUpdate
        refined = state.refine_description(ctx.triggered_id["item"])
        if refined is None:
            raise PreventUpdate
        return refined

    @app.callback(
        Output({"type": "record-field", "field": "invoice_number"}, "value"),
        Input("next-number", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_next_number(clicks: int | None) -> str:
        """Replace the invoice number with its successor."""
        if not clicks:
            raise PreventUpdate
        following = state.generate_next_invoice_number()
        if following is None:
            raise PreventUpdate
        return following

    @app.callback(
        Output("save-status", "children", allow_duplicate=True),
        Output("save-status", "className", allow_duplicate=True),
        Input("save-button", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_save(clicks: int | None) -> tuple[str, str]:
        """Save immediately, bypassing the debounce."""
        if not clicks:
            raise PreventUpdate
        if not state.save_now():
            LOG.warning("Manual save failed")
        return build_save_indicator(state.save_status)

    @app.callback(
        Output("save-status", "children"),
        Output("save-status", "className"),
        Output({"type": "refine-item", "item": ALL}, "disabled"),
        Output("next-number", "disabled"),
        Input("status-poll", "n_intervals"),
    )
    def poll_status(_intervals: int | None) -> tuple:
        """Refresh the save indicator and the assist button states."""
        status = state.status()
        text, class_name = build_save_indicator(status.save_status)
        refining = [
            output["id"]["item"] in status.pending_items
            for output in ctx.outputs_list[2]
        ]
        return text, class_name, refining, status.numbering_pending

    @app.callback(
        Output("pdf-download", "data"),
        Output("export-error", "displayed"),
        Input("export-pdf", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_export(clicks: int | None) -> tuple:
        """Send the invoice as a PDF download."""
        if not clicks:
            raise PreventUpdate
        record = state.snapshot()
        try:
            content = render_invoice_pdf(record)
        except ExportError:
            LOG.error("PDF export failed", exc_info=True)
            return no_update, True
        return dcc.send_bytes(content, pdf_filename(record)), False

    app.clientside_callback(
        _PRINT_SCRIPT,
        Output("print-trigger", "data"),
        Input("print-button", "n_clicks"),
        prevent_initial_call=True,
    )


def apply_item_edits(state: EditorState) -> tuple:
    """
    Route the fired item-field inputs into the state.

    Must run inside a callback context whose outputs are the item-amount
    values, the amount-mode badges and the preview, in that order.

    Returns:
        Amount values (new value only for items whose pricing fields were
        edited, no_update for the rest), badge texts and the rebuilt preview.
    """
    changed: set[str] = set()
    for component_id, value in _triggered_values():
        field = component_id["field"]
        item = state.update_item(component_id["item"], field, _raw(value))
        if item is not None and field in PRICING_FIELDS:
            changed.add(item.id)
    record = state.snapshot()
    amounts = []
    for output in ctx.outputs_list[0]:
        item = record.find_item(output["id"]["item"])
        if item is None or item.id not in changed:
            amounts.append(no_update)
        else:
            amounts.append(item.amount)
    return (
        amounts,
        _amount_modes(record, ctx.outputs_list[1]),
        build_invoice_preview(record),
    )


def apply_amount_edits(state: EditorState) -> tuple:
    """
    Route the fired item-amount inputs into the state.

    An amount equal to the stored one (the echo of a pricing edit) changes
    nothing; any other value marks the amount as manual.

    Returns:
        Badge texts for the amount-mode outputs and the rebuilt preview.
    """
    for component_id, value in _triggered_values():
        state.update_item(component_id["item"], "amount", _raw(value))
    record = state.snapshot()
    return _amount_modes(record, ctx.outputs_list[0]), build_invoice_preview(record)


def _triggered_values() -> list[tuple[dict, Any]]:
    """Return (component id, new value) for every input that fired."""
    values = {trigger["prop_id"]: trigger.get("value") for trigger in ctx.triggered}
    return [
        (component_id, values.get(prop_id))
        for prop_id, component_id in ctx.triggered_prop_ids.items()
        if isinstance(component_id, dict)
    ]


def _amount_modes(record: InvoiceRecord, outputs: list[dict]) -> list[str]:
    """Return the manual badge text for each amount-mode output."""
    labels = []
    for output in outputs:
        item = record.find_item(output["id"]["item"])
        labels.append(amount_mode_label(item) if item is not None else "")
    return labels


def _raw(value: Any) -> Any:
    """Cleared inputs send None; store them as empty text."""
    return "" if value is None else value


def main() -> None:
    """Entrypoint used via `freight_invoice` or `python -m freight_invoice.app`."""
    state = EditorState.from_config()
    app = create_app(state)
    LOG.info("Starting %s on port %s", APP_TITLE, APP_PORT)
    try:
        app.run(host="0.0.0.0", port=APP_PORT)
    finally:
        state.close()


if __name__ == "__main__":
    main()
