from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Protocol


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    return timer


class RepeatingTask:
    """Runs ``callback`` every ``interval_seconds`` until cancelled."""

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        timer_factory: TimerFactory | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than 0")
        self.interval_seconds = interval_seconds
        self._callback = callback
        self._timer_factory = timer_factory or thread_timer
        self._lock = threading.Lock()
        self._timer: TimerHandle | None = None
        self._generation = 0

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._schedule_locked()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _schedule_locked(self) -> None:
        generation = self._generation
        self._timer = self._timer_factory(self.interval_seconds, lambda: self._tick(generation))
        self._timer.start()

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
        try:
            self._callback()
        finally:
            with self._lock:
                # the callback may have cancelled or restarted the task
                if generation == self._generation and self._timer is not None:
                    self._schedule_locked()


class DebouncedTask:
    """Coalesces rapid ``trigger`` calls into one delayed ``callback`` call.

    Only the arguments of the last trigger are delivered.
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[..., None],
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.delay_ms = max(0, int(delay_ms))
        self._callback = callback
        self._timer_factory = timer_factory or thread_timer
        self._lock = threading.Lock()
        self._timer: TimerHandle | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        if self.delay_ms == 0:
            self.cancel()
            self._callback(*args, **kwargs)
            return
        with self._lock:
            self._drop_timer_locked()
            self._pending = (args, kwargs)
            generation = self._generation
            self._timer = self._timer_factory(self.delay_ms / 1000, lambda: self._fire(generation))
            self._timer.start()

    def flush(self) -> bool:
        with self._lock:
            pending = self._pending
            self._drop_timer_locked()
            self._pending = None
        if pending is None:
            return False
        args, kwargs = pending
        self._callback(*args, **kwargs)
        return True

    def cancel(self) -> None:
        with self._lock:
            self._drop_timer_locked()
            self._pending = None

    def _drop_timer_locked(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                return
            args, kwargs = self._pending
            self._pending = None
            self._timer = None
        self._callback(*args, **kwargs)
