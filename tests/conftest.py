import time
from datetime import datetime, timezone

import pytest

from run_tui.core.dispatch import ImmediateDispatcher, QueueDispatcher
from run_tui.models.logs import LogEntry


def wait_until(predicate, timeout=2.0, interval=0.005):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


def settle(dispatcher, count=1, timeout=2.0):
    """Wait for ``count`` posted callbacks, then run everything queued."""
    assert dispatcher.wait_for(count, timeout)
    return dispatcher.drain()


def entry(text, payload=""):
    return LogEntry(timestamp=text, timestamp_text=text, payload=payload or text)


def at(hms):
    return f"2024-05-01T{hms}Z"


def utc(hms):
    h, m, s = (int(x) for x in hms.split(":"))
    return datetime(2024, 5, 1, h, m, s, tzinfo=timezone.utc)


@pytest.fixture
def queue_dispatcher():
    return QueueDispatcher()


@pytest.fixture
def immediate_dispatcher():
    return ImmediateDispatcher()
