from freight_invoice.data.template import default_record
from freight_invoice.errors import StorageError
from freight_invoice.models.common import SaveStatus
from freight_invoice.services.autosave import AutoSaver
from freight_invoice.services.record_store_memory import MemoryRecordStore


def _saver(store, timers, record=None):
    record = record or default_record()
    return AutoSaver(store, lambda: record, delay=2.0, timer_factory=timers)


def test_starts_saved_with_nothing_pending(store, timers):
    saver = _saver(store, timers)
    assert saver.status is SaveStatus.SAVED
    assert not saver.pending
    assert timers.timers == []


def test_edit_schedules_a_daemon_timer(store, timers):
    saver = _saver(store, timers)
    saver.mark_modified()

    assert saver.status is SaveStatus.MODIFIED
    assert saver.pending
    assert timers.last.interval == 2.0
    assert timers.last.daemon
    assert timers.last.started


def test_burst_of_edits_writes_once(store, timers):
    saver = _saver(store, timers)
    for _ in range(5):
        saver.mark_modified()

    assert all(timer.cancelled for timer in timers.timers[:-1])
    for timer in timers.timers:
        timer.fire()

    assert store.writes == 1
    assert saver.status is SaveStatus.SAVED
    assert not saver.pending


def test_stale_timer_callback_is_ignored(store, timers):
    saver = _saver(store, timers)
    saver.mark_modified()
    stale = timers.last
    saver.mark_modified()

    # Call the callback directly, as if it had already been dequeued
    stale.function()
    assert store.writes == 0
    assert saver.status is SaveStatus.MODIFIED


def test_save_now_bypasses_the_debounce(store, timers):
    saver = _saver(store, timers)
    saver.mark_modified()

    assert saver.save_now()
    assert store.writes == 1
    assert timers.last.cancelled
    assert saver.status is SaveStatus.SAVED


def test_edit_during_write_keeps_modified(timers):
    class SlowStore(MemoryRecordStore):
        def write(self, blob):
            saver.mark_modified()
            super().write(blob)

    store = SlowStore()
    saver = _saver(store, timers)
    saver.mark_modified()

    assert saver.save_now()
    assert saver.status is SaveStatus.MODIFIED
    assert saver.pending


def test_failed_write_leaves_modified(timers):
    class BrokenStore(MemoryRecordStore):
        def save(self, record):
            raise StorageError("quota exceeded")

    saver = _saver(BrokenStore(), timers)
    saver.mark_modified()

    assert not saver.save_now()
    assert saver.status is SaveStatus.MODIFIED


def test_cancel_drops_the_pending_write(store, timers):
    saver = _saver(store, timers)
    saver.mark_modified()
    saver.cancel()
    timers.last.fire()

    assert store.writes == 0
    assert not saver.pending
