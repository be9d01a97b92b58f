from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .dispatch import Dispatcher

FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
FRAME_INTERVAL = 0.1

Paint = Callable[[str], None]


@dataclass(frozen=True)
class IndicatorState:
    running: bool = False
    message: str = ""
    context: str = ""


def render_frame(frame: int, message: str, context: str = "") -> str:
    text = f"{FRAMES[frame % len(FRAMES)]} {message}"
    if context:
        text += f"\n{context}"
    return text


class BusyIndicator:
    """Spinner animated from its own ticker thread, painted on the UI thread.

    ``start`` and ``stop`` may be called from any thread. Restarting while
    running replaces the old loop so only one ever paints; ``stop`` does not
    wait for the loop to exit.
    """

    def __init__(self, dispatcher: Dispatcher, paint: Paint, interval: float = FRAME_INTERVAL) -> None:
        self._dispatcher = dispatcher
        self._paint = paint
        self._interval = interval
        self._lock = threading.Lock()
        self._cancel: Optional[threading.Event] = None
        self._message = ""
        self._context = ""
        self._loops = 0

    @property
    def state(self) -> IndicatorState:
        with self._lock:
            if self._cancel is None:
                return IndicatorState()
            return IndicatorState(True, self._message, self._context)

    @property
    def active_loops(self) -> int:
        with self._lock:
            return self._loops

    def start(self, message: str) -> None:
        cancel = threading.Event()
        with self._lock:
            if self._cancel is not None:
                self._cancel.set()
            self._cancel = cancel
            self._message = message
            self._context = ""
            self._loops += 1
        threading.Thread(target=self._animate, args=(cancel,), name="busy-indicator", daemon=True).start()

    def set_context(self, context: str) -> None:
        with self._lock:
            self._context = context

    def stop(self, message: str = "") -> None:
        with self._lock:
            if self._cancel is not None:
                self._cancel.set()
                self._cancel = None
            self._message = ""
            self._context = ""
        if message:
            self._dispatcher.post(lambda: self._paint(message))

    def _animate(self, cancel: threading.Event) -> None:
        frame = 0
        try:
            while not cancel.wait(self._interval):
                with self._lock:
                    text = render_frame(frame, self._message, self._context)
                self._dispatcher.post(lambda text=text: self._repaint(cancel, text))
                frame += 1
        finally:
            with self._lock:
                self._loops -= 1

    def _repaint(self, cancel: threading.Event, text: str) -> None:
        # a frame queued just before stop() must not overwrite the final message
        if cancel.is_set():
            return
        self._paint(text)
