"""
Collaborator factories for the invoice editor.

This module provides get_record_store() and get_text_assist(), which return
the implementation selected by configuration.

Record stores (FREIGHT_INVOICE_STORE):
- disk: diskcache slot that survives restarts (default)
- memory: in-process slot, lost on exit

Text assist (FREIGHT_INVOICE_ASSIST):
- gemini: Gemini model via google-genai (default when an API key is set)
- offline: no network, local invoice-number increment (default otherwise)

Factories are cached, so the application shares one instance of each.
"""

import os
from functools import cache
from typing import Callable, Dict

from freight_invoice.lib import clients, logs
from freight_invoice.services.record_store import RecordStore
from freight_invoice.services.record_store_disk import DiskRecordStore
from freight_invoice.services.record_store_memory import MemoryRecordStore
from freight_invoice.services.text_assist import TextAssistService
from freight_invoice.services.text_assist_gemini import GeminiTextAssist
from freight_invoice.services.text_assist_offline import OfflineTextAssist

LOG = logs.logger(__file__)

_STORE_REGISTRY: Dict[str, Callable[[], RecordStore]] = {
    "disk": lambda: DiskRecordStore(),
    "memory": lambda: MemoryRecordStore(),
}

_ASSIST_REGISTRY: Dict[str, Callable[[], TextAssistService]] = {
    "gemini": lambda: GeminiTextAssist(),
    "offline": lambda: OfflineTextAssist(),
}


@cache
def get_record_store(kind: str | None = None) -> RecordStore:
    """Return the configured record store implementation."""
    resolved_kind = (kind or os.getenv("FREIGHT_INVOICE_STORE", "disk")).lower()
    LOG.info("get_record_store - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _STORE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown record store kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


@cache
def get_text_assist(kind: str | None = None) -> TextAssistService:
    """Return the configured text-assist implementation."""
    default_kind = "gemini" if clients.api_key() else "offline"
    resolved_kind = (kind or os.getenv("FREIGHT_INVOICE_ASSIST", default_kind)).lower()
    LOG.info("get_text_assist - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _ASSIST_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown text assist kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()
