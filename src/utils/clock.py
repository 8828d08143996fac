"""Audit clock used for entity timestamps."""

import threading
from datetime import datetime, timedelta

import pytz


class MonotonicClock:
    """Returns UTC timestamps that strictly increase across calls.

    When the wall clock does not advance (or steps backwards) between two
    calls, the previous value is bumped by one microsecond.
    """

    def __init__(self):
        self._last = None
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            now = datetime.now(pytz.utc)
            if self._last is not None and now <= self._last:
                now = self._last + timedelta(microseconds=1)
            self._last = now
            return now
