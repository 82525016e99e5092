"""
In-memory RecordStore.

Useful for:
- Unit tests that exercise load/save without touching disk
- Throwaway editing sessions (FREIGHT_INVOICE_STORE=memory)
"""

from freight_invoice.services.record_store import RecordStore


class MemoryRecordStore(RecordStore):
    """
    RecordStore holding the blob in an attribute.

    Attributes:
        blob: The stored JSON text, or None.
        writes: Number of successful writes, for observing debounce behaviour.
    """

    def __init__(self, blob: str | None = None) -> None:
        """
        Initialize with an optional pre-stored blob.

        Args:
            blob: Raw text to report from read(), as if saved earlier.
        """
        self.blob = blob
        self.writes = 0

    def read(self) -> str | None:
        """Return the stored blob."""
        return self.blob

    def write(self, blob: str) -> None:
        """Store the blob and count the write."""
        self.blob = blob
        self.writes += 1
