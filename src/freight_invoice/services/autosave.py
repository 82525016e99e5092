"""
Debounced persistence of the invoice being edited.

Every edit calls ``mark_modified()``, which restarts a countdown; when the
editor has been idle for ``delay`` seconds the current record is written
once. ``save_now()`` is the manual save: it cancels the countdown and writes
immediately.

Save status follows MODIFIED -> SAVING -> SAVED. Any edit returns it to
MODIFIED, including an edit that lands while a write is in flight, in which
case the finished write does not claim SAVED. A failed write is logged and
leaves the status at MODIFIED.
"""

import functools
import threading
from typing import Callable

from freight_invoice.errors import StorageError
from freight_invoice.lib import logs
from freight_invoice.models.common import SaveStatus
from freight_invoice.models.invoice import InvoiceRecord
from freight_invoice.services.record_store import RecordStore

LOG = logs.logger(__file__)

DEFAULT_DELAY = 2.0

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class AutoSaver:
    """
    Timer-driven writer with a three-state save indicator.

    Attributes:
        store: Destination for writes.
        delay: Idle seconds before a debounced write.
    """

    def __init__(
        self,
        store: RecordStore,
        snapshot: Callable[[], InvoiceRecord],
        delay: float = DEFAULT_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        """
        Args:
            store: RecordStore receiving the writes.
            snapshot: Returns a consistent copy of the record to write.
            delay: Debounce window in seconds.
            timer_factory: Builds the countdown; swapped out in tests.
        """
        self.store = store
        self.delay = delay
        self._snapshot = snapshot
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._status = SaveStatus.SAVED
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def status(self) -> SaveStatus:
        """Current save status."""
        return self._status

    @property
    def pending(self) -> bool:
        """True while a debounced write is scheduled."""
        return self._timer is not None

    def mark_modified(self) -> None:
        """Record an edit and restart the debounce countdown."""
        with self._lock:
            self._generation += 1
            self._status = SaveStatus.MODIFIED
            self._cancel_timer()
            timer = self._timer_factory(
                self.delay, functools.partial(self._on_timer, self._generation)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()

    def save_now(self) -> bool:
        """
        Write the current record immediately, bypassing the debounce.

        Returns:
            True if the write succeeded, False otherwise. Never raises for
            storage failures.
        """
        with self._lock:
            self._cancel_timer()
            self._status = SaveStatus.SAVING
            generation = self._generation

        try:
            self.store.save(self._snapshot())
        except StorageError as e:
            LOG.error("Invoice not saved: %s", e)
            with self._lock:
                self._status = SaveStatus.MODIFIED
            return False

        with self._lock:
            if generation == self._generation:
                self._status = SaveStatus.SAVED
            else:
                self._status = SaveStatus.MODIFIED
        LOG.debug("Invoice saved (generation %d)", generation)
        return True

    def cancel(self) -> None:
        """Drop any scheduled write without saving."""
        with self._lock:
            self._cancel_timer()

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            # A newer edit rescheduled the write
            if generation != self._generation:
                return
            self._timer = None
        self.save_now()

    def _cancel_timer(self) -> None:
        # Caller holds the lock
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
