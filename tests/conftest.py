"""Shared fixtures: a controllable timer and an in-memory editing session."""

import pytest

from freight_invoice.data.template import default_record
from freight_invoice.services.record_store_memory import MemoryRecordStore
from freight_invoice.services.text_assist_offline import OfflineTextAssist
from freight_invoice.state import EditorState


class FakeTimer:
    """Stands in for threading.Timer; fires only when the test says so."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


class TimerRecorder:
    """Timer factory that keeps every timer it builds."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def editor(store, timers):
    return EditorState(
        store=store,
        assist=OfflineTextAssist(),
        record=default_record(),
        save_delay=2.0,
        timer_factory=timers,
    )
