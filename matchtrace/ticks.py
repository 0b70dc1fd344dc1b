"""Tick sources — pluggable clocks that drive playback."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickSource(ABC):
    """Calls a callback periodically until stopped."""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """Begin invoking *callback* once per tick."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop ticking. Must be idempotent and safe to call from inside the callback."""
        ...

    @property
    @abstractmethod
    def running(self) -> bool: ...

    def join(self, timeout: float | None = None) -> None:
        """Wait until a stopped source has delivered its last tick."""


class ManualTickSource(TickSource):
    """Ticks only when ``tick()`` is called; for tests and single-stepping."""

    def __init__(self):
        self._callback: TickCallback | None = None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def tick(self) -> bool:
        """Deliver one tick. Returns False if the source is stopped."""
        callback = self._callback
        if callback is None:
            return False
        callback()
        return True


class IntervalTickSource(TickSource):
    """Ticks every *interval_ms* milliseconds on a daemon thread."""

    def __init__(self, interval_ms: int):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval = interval_ms / 1000.0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def start(self, callback: TickCallback) -> None:
        with self._lock:
            self._stop_event.set()
            # Fresh event per run so a late stop() of the previous run
            # cannot silence this one.
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run,
                args=(callback, stop_event),
                name="matchtrace-ticker",
                daemon=True,
            )
            self._thread.start()
        logger.debug("IntervalTickSource started: interval=%.3fs", self._interval)

    def _run(self, callback: TickCallback, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            callback()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def running(self) -> bool:
        thread = self._thread
        return (
            thread is not None
            and thread.is_alive()
            and not self._stop_event.is_set()
        )

    def join(self, timeout: float | None = None) -> None:
        """Wait for the ticker thread to exit (no-op from the ticker thread itself)."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
