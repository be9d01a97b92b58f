"""Run blocking work off the UI thread and hand exactly one result back to it."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .context import Context
from .dispatch import Dispatcher

Work = Callable[[Context], Any]
OnComplete = Callable[[Any, Optional[BaseException]], None]


@dataclass(frozen=True)
class TaskHandle:
    slot: Optional[str]
    generation: int
    context: Context

    def cancel(self) -> None:
        self.context.cancel()


class TaskRunner:
    """One worker thread per task; completion is posted through the dispatcher.

    Tasks sharing a ``slot`` are numbered. Starting a new task in a slot does
    not stop the old one, but when the old one finishes its completion is
    dropped on the UI thread instead of reaching ``on_complete``.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def run(self, work: Work, on_complete: OnComplete, *, slot: Optional[str] = None,
            timeout: Optional[float] = None) -> TaskHandle:
        with self._lock:
            generation = 0
            if slot is not None:
                generation = self._generations.get(slot, 0) + 1
                self._generations[slot] = generation
        handle = TaskHandle(slot=slot, generation=generation, context=Context(timeout))
        worker = threading.Thread(
            target=self._execute,
            args=(handle, work, on_complete),
            name=f"task-{slot or 'anon'}-{generation}",
            daemon=True,
        )
        worker.start()
        return handle

    def is_current(self, handle: TaskHandle) -> bool:
        if handle.slot is None:
            return True
        with self._lock:
            return self._generations.get(handle.slot) == handle.generation

    def _execute(self, handle: TaskHandle, work: Work, on_complete: OnComplete) -> None:
        result: Any = None
        error: Optional[BaseException] = None
        try:
            result = work(handle.context)
        except Exception as exc:
            error = exc
        self.dispatcher.post(lambda: self._deliver(handle, on_complete, result, error))

    def _deliver(self, handle: TaskHandle, on_complete: OnComplete, result: Any,
                 error: Optional[BaseException]) -> None:
        if not self.is_current(handle):
            return
        on_complete(result, error)
