from datetime import date
from types import SimpleNamespace

import pytest

from freight_invoice.services import get_record_store, get_text_assist
from freight_invoice.services.text_assist import increment_invoice_number
from freight_invoice.services.text_assist_gemini import GeminiTextAssist
from freight_invoice.services.text_assist_offline import OfflineTextAssist


@pytest.mark.parametrize(
    "current, expected",
    [
        ("INV-2023-007", "INV-2023-008"),
        ("A1", "A2"),
        ("A99", "A100"),
        ("INV-009", "INV-010"),
        ("7", "8"),
        ("NOFMT", "NOFMT-NEXT"),
    ],
)
def test_offline_increment(current, expected):
    assert increment_invoice_number(current) == expected


def test_offline_assist_passes_descriptions_through():
    assist = OfflineTextAssist()
    assert assist.refine_description("20ft box of shoes") == "20ft box of shoes"
    assert assist.next_invoice_number("INV-2023-001") == "INV-2023-002"
    assert not assist.ai_available


class FakeModels:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_content(self, model, contents):
        self.calls.append((model, contents))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


def _assist(models):
    return GeminiTextAssist(
        api_key="test-key",
        model="test-model",
        client=SimpleNamespace(models=models),
        today=lambda: date(2025, 1, 15),
    )


def test_gemini_refines_description():
    models = FakeModels(reply="  20' Container - Footwear, General Cargo\n")
    assist = _assist(models)

    assert assist.ai_available
    assert assist.refine_description("20ft box of shoes") == (
        "20' Container - Footwear, General Cargo"
    )
    model, prompt = models.calls[0]
    assert model == "test-model"
    assert '"20ft box of shoes"' in prompt


def test_gemini_failure_returns_input():
    assist = _assist(FakeModels(error=RuntimeError("quota")))
    assert assist.refine_description("pallets") == "pallets"
    assert assist.next_invoice_number("INV-2024-010") == "INV-2024-010"


def test_gemini_empty_reply_returns_input():
    assist = _assist(FakeModels(reply=""))
    assert assist.refine_description("pallets") == "pallets"
    assert assist.next_invoice_number("INV-2024-010") == "INV-2024-010"


def test_gemini_blank_description_is_not_sent():
    models = FakeModels(reply="anything")
    assert _assist(models).refine_description("   ") == "   "
    assert models.calls == []


def test_gemini_next_number_mentions_current_year():
    models = FakeModels(reply="INV-2025-001")
    assert _assist(models).next_invoice_number("INV-2024-087") == "INV-2025-001"
    _, prompt = models.calls[0]
    assert "INV-2024-087" in prompt
    assert "2025" in prompt


def test_gemini_without_key_uses_offline_rules(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assist = GeminiTextAssist()

    assert not assist.ai_available
    assert assist.refine_description("pallets") == "pallets"
    assert assist.next_invoice_number("A1") == "A2"


def test_factories_reject_unknown_kinds():
    with pytest.raises(ValueError):
        get_record_store("cloud")
    with pytest.raises(ValueError):
        get_text_assist("oracle")


def test_factories_build_requested_kinds():
    assert isinstance(get_text_assist("offline"), OfflineTextAssist)
    assert get_record_store("memory") is get_record_store("memory")
