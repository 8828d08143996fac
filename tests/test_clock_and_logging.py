import logging
from datetime import datetime, timedelta
from unittest import mock

import pytz

from core.logging_config import (
    RequestIdFilter,
    bind_request_id,
    get_request_id,
    reset_request_id,
)
from utils.clock import MonotonicClock


def test_clock_is_strictly_increasing_when_time_stands_still():
    frozen = datetime(2024, 1, 1, tzinfo=pytz.utc)
    clock = MonotonicClock()
    with mock.patch("utils.clock.datetime") as fake_datetime:
        fake_datetime.now.return_value = frozen
        first, second, third = clock(), clock(), clock()
    assert first == frozen
    assert second == frozen + timedelta(microseconds=1)
    assert third == frozen + timedelta(microseconds=2)


def test_clock_returns_utc():
    assert MonotonicClock()().tzinfo is not None


def test_request_id_is_bound_to_log_records():
    token = bind_request_id("req-42")
    try:
        record = logging.LogRecord("its", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIdFilter().filter(record)
        assert record.request_id == "req-42"
    finally:
        reset_request_id(token)
    assert get_request_id() == "-"


def test_fresh_request_id_is_generated():
    token = bind_request_id()
    try:
        assert len(get_request_id()) == 32
    finally:
        reset_request_id(token)
