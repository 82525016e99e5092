import json
from contextvars import copy_context

import pytest
from dash import no_update
from dash._callback_context import context_value
from dash._utils import AttributeDict

from freight_invoice.app import apply_amount_edits, apply_item_edits


def _trigger(component_id, value, prop="value"):
    return {"prop_id": f"{json.dumps(component_id)}.{prop}", "value": value}


def _outputs(kind, item_ids, prop):
    return [{"id": {"type": kind, "item": item_id}, "property": prop} for item_id in item_ids]


def _run(handler, state, triggered, outputs_list):
    """Call a handler the way Dash does, with the callback context set."""

    def call():
        context_value.set(
            AttributeDict(triggered_inputs=triggered, outputs_list=outputs_list)
        )
        return handler(state)

    return copy_context().run(call)


def _item_edit(editor, item_id, field, value):
    ids = [item.id for item in editor.record.items]
    return _run(
        apply_item_edits,
        editor,
        [_trigger({"type": "item-field", "item": item_id, "field": field}, value)],
        [
            _outputs("item-amount", ids, "value"),
            _outputs("amount-mode", ids, "children"),
            {"id": "invoice-preview", "property": "children"},
        ],
    )


def _amount_edit(editor, item_id, value):
    ids = [item.id for item in editor.record.items]
    return _run(
        apply_amount_edits,
        editor,
        [_trigger({"type": "item-amount", "item": item_id}, value)],
        [
            _outputs("amount-mode", ids, "children"),
            {"id": "invoice-preview", "property": "children"},
        ],
    )


def test_rate_edit_updates_only_that_items_amount(editor):
    other = editor.add_item()

    amounts, modes, preview = _item_edit(editor, "1", "rate", 100)

    assert amounts[0] == pytest.approx(33.2 * 100)
    assert amounts[1] is no_update
    assert modes == ["", ""]
    assert preview.id == "invoice-document"
    assert editor.record.find_item(other.id).amount == 0


def test_echoed_amount_stays_computed(editor):
    amounts, _, _ = _item_edit(editor, "1", "qty", 2)

    modes, _ = _amount_edit(editor, "1", amounts[0])

    assert modes == [""]
    assert editor.record.find_item("1").amount_overridden is False


def test_direct_amount_edit_shows_manual_badge(editor):
    modes, _ = _amount_edit(editor, "1", 5000)

    item = editor.record.find_item("1")
    assert modes == ["manual"]
    assert item.amount == 5000
    assert item.amount_overridden is True


def test_pricing_edit_clears_manual_badge(editor):
    _amount_edit(editor, "1", 5000)

    amounts, modes, _ = _item_edit(editor, "1", "cbm", 0)

    assert amounts == [2500.0]
    assert modes == [""]


def test_description_edit_leaves_amounts_untouched(editor):
    amounts, modes, _ = _item_edit(editor, "1", "description", "40ft HC - Machinery")

    assert amounts == [no_update]
    assert modes == [""]
    assert editor.record.find_item("1").description == "40ft HC - Machinery"


def test_cleared_number_input_is_stored_as_empty_text(editor):
    amounts, _, _ = _item_edit(editor, "1", "qty", None)

    assert editor.record.find_item("1").qty == ""
    assert amounts == [0.0]
