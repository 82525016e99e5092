"""
Disk-backed RecordStore using a diskcache directory.

The slot survives server restarts, so reopening the editor resumes the last
saved invoice. The directory comes from FREIGHT_INVOICE_DATA_DIR, falling
back to a folder under the system temp directory.
"""

from pathlib import Path

from freight_invoice.lib import caches, logs, paths
from freight_invoice.services.record_store import STORAGE_KEY, RecordStore

LOG = logs.logger(__file__)


class DiskRecordStore(RecordStore):
    """
    RecordStore persisting the invoice blob in a diskcache slot.

    Attributes:
        cache_dir: Directory holding the cache files.
    """

    def __init__(self, cache_dir: str | Path | None = None, key: str = STORAGE_KEY):
        """
        Open the storage slot.

        Args:
            cache_dir: Cache directory, or None for the configured data dir.
            key: Slot name inside the cache.
        """
        self.cache_dir = Path(cache_dir) if cache_dir else paths.data_dir()
        self._slot = caches.StorageSlot(self.cache_dir, key)
        LOG.info("Invoice data slot: %s [%s]", self.cache_dir, key)

    def read(self) -> str | None:
        """Return the stored blob, or None when the slot is empty."""
        return self._slot.read()

    def write(self, blob: str) -> None:
        """Overwrite the slot with ``blob``."""
        self._slot.write(blob)

    def clear(self) -> None:
        """Delete the saved invoice."""
        self._slot.clear()

    def close(self) -> None:
        """Release the underlying cache."""
        self._slot.close()
