from __future__ import annotations

import threading
import time
from typing import Optional

from ..errors import Cancelled, DeadlineExceeded


class Context:
    """Cooperative cancellation signal with an optional deadline.

    Blocking calls are expected to consult ``remaining()`` for their own
    timeout and to check ``cancelled`` between steps; nothing is interrupted
    preemptively.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.expired

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; True as soon as the context is done."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)
        return self.cancelled

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise Cancelled()
        if self.expired:
            raise DeadlineExceeded()


def timeout_for(ctx: Optional[Context], default: float) -> float:
    """Per-request timeout bounded by the context deadline."""
    if ctx is None:
        return default
    ctx.raise_if_cancelled()
    remaining = ctx.remaining()
    if remaining is None:
        return default
    return min(default, remaining)
