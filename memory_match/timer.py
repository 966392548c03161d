# memory_match/timer.py
from __future__ import annotations
import asyncio
import threading
from typing import Callable, Optional


class Scheduler:
    """Defers a callback by a delay and hands back a handle with cancel()."""

    def call_later(self, delay: float, callback: Callable[[], None]):
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    """Runs callbacks on an asyncio event loop, in scheduling order."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay), callback)


class ThreadingScheduler(Scheduler):
    """One daemon timer thread per callback; for hosts without an event loop (Flask)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        t = threading.Timer(max(0.0, delay), callback)
        t.daemon = True
        t.start()
        return t
