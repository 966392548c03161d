# tests/conftest.py
import pytest

from memory_match.timer import Scheduler


class _Handle:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Fake clock: callbacks only run when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback):
        h = _Handle(self.now + delay, callback)
        self.handles.append(h)
        return h

    def outstanding(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        self.now += seconds
        due = sorted((h for h in self.handles if h.due <= self.now), key=lambda h: h.due)
        self.handles = [h for h in self.handles if h.due > self.now]
        for h in due:
            if not h.cancelled:
                h.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()
