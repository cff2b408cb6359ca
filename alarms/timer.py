from __future__ import annotations

import logging
from threading import Event, RLock, Thread, current_thread
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTimer:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread until stopped.

    The callback runs while holding ``lock``. ``stop()`` sets the stop flag and the
    worker re-checks it under the same lock before every call, so a caller that
    holds ``lock`` while stopping is guaranteed no further callback runs, even one
    whose wait already elapsed. ``stop()`` may be called from inside the callback.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], object],
        lock: Optional[RLock] = None,
        name: str = "alarm-poll",
    ):
        self.interval = interval
        self.callback = callback
        self.name = name
        self._lock = lock or RLock()
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop_event = Event()
            self._thread = Thread(target=self._loop, args=(self._stop_event,), name=self.name, daemon=True)
            self._thread.start()
        logger.debug("Timer %s started (interval=%ss)", self.name, self.interval)

    def stop(self) -> None:
        with self._lock:
            self._stop_event.set()
        logger.debug("Timer %s stopped", self.name)

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread and thread is not current_thread():
            thread.join(timeout=timeout)

    def _loop(self, stop_event: Event) -> None:
        while not stop_event.wait(self.interval):
            with self._lock:
                if stop_event.is_set():
                    break
                try:
                    self.callback()
                except Exception:
                    logger.error("Timer %s callback failed", self.name, exc_info=True)
