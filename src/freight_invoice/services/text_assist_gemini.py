"""
Gemini-backed implementation of TextAssistService.

Sends short prompts to a Gemini model through the google-genai SDK:

- Cargo descriptions are rewritten as concise (under 20 words) invoice
  line items.
- Invoice numbers are advanced in the same format, rolling an embedded year
  forward to the current year when needed.

Any failure (network, quota, empty reply) is logged and the caller's input
is returned unchanged. Without an API key the offline rules apply.

Environment variables:
    API_KEY / GEMINI_API_KEY: credential (see lib.clients)
    GEMINI_MODEL: model name, default gemini-2.0-flash
"""

import os
from datetime import date
from typing import Any, Callable

from freight_invoice.lib import clients, logs
from freight_invoice.services.text_assist_offline import OfflineTextAssist

LOG = logs.logger(__file__)

DEFAULT_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

_DESCRIPTION_PROMPT = """
You are a logistics and sea freight expert assistant.
Refine the following rough cargo description into a professional line item description suitable for a commercial invoice or shipping manifest.
Keep it concise (under 20 words).

Rough Input: "{text}"

Output only the refined description text.
""".strip()

_INVOICE_NUMBER_PROMPT = """
You are an invoicing assistant.
The previous invoice number was "{current}".
Generate the next unique and sequential invoice number.

Rules:
1. If the number contains a year (e.g., 2023, 24), update it to the current year ({year}) if necessary.
2. If updating the year, reset the sequence number to 001 or similar, unless the format implies a continuous sequence.
3. If no year change is needed, simply increment the sequence.
4. Maintain the exact same style/format (separators, prefixes).

Output ONLY the new invoice number string.
""".strip()


class GeminiTextAssist(OfflineTextAssist):
    """
    Text assist backed by a Gemini model.

    Attributes:
        model: Gemini model name used for generation.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: Any = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        Args:
            api_key: Credential; defaults to the environment.
            model: Model name; defaults to GEMINI_MODEL.
            client: Pre-built genai client (tests inject a fake).
            today: Clock used for the year-rollover rule.
        """
        self._api_key = clients.api_key() if api_key is None else api_key
        self.model = model or DEFAULT_MODEL
        self._client = client
        self._today = today

    @property
    def ai_available(self) -> bool:
        """Return True when a credential or client is configured."""
        return bool(self._api_key) or self._client is not None

    def refine_description(self, text: str) -> str:
        """Return the model's rewrite of ``text``, or ``text`` on any failure."""
        if not self.ai_available:
            return super().refine_description(text)
        if not text or not text.strip():
            return text
        try:
            refined = self._generate(_DESCRIPTION_PROMPT.format(text=text))
        except Exception:
            LOG.error("Error generating description", exc_info=True)
            return text
        return refined or text

    def next_invoice_number(self, current: str) -> str:
        """Return the model's successor for ``current``, or ``current`` on failure."""
        if not self.ai_available:
            return super().next_invoice_number(current)
        prompt = _INVOICE_NUMBER_PROMPT.format(
            current=current, year=self._today().year
        )
        try:
            generated = self._generate(prompt)
        except Exception:
            LOG.error("Error generating invoice number", exc_info=True)
            return current
        return generated or current

    def _generate(self, prompt: str) -> str:
        """Run one generation and return the trimmed reply text."""
        response = self._genai().models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return (response.text or "").strip()

    def _genai(self) -> Any:
        if self._client is None:
            self._client = clients.genai_client(self._api_key)
        return self._client
