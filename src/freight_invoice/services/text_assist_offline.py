"""
Offline implementation of TextAssistService.

Used when no API key is configured. Descriptions pass through untouched and
invoice numbers are incremented locally.
"""

from freight_invoice.lib import logs
from freight_invoice.services.text_assist import (
    TextAssistService,
    increment_invoice_number,
)

LOG = logs.logger(__file__)


class OfflineTextAssist(TextAssistService):
    """Text assist without a model behind it."""

    def refine_description(self, text: str) -> str:
        """Return ``text`` unchanged."""
        LOG.warning("Text assist API key is missing, description left as typed")
        return text

    def next_invoice_number(self, current: str) -> str:
        """Return ``current`` with its trailing number incremented."""
        return increment_invoice_number(current)
