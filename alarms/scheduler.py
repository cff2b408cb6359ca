from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Callable, Optional

from time_utils import format_clock, is_valid_time, now_local

from .errors import AlarmStorageError, ValidationErrorKind
from .storage import DEFAULT_STATE, AlarmState, ensure_state_file, load_state, save_state
from .timer import PeriodicTimer

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0


class AlarmScheduler:
    """Single daily alarm: armed flag plus an ``HH:MM:SS`` time, checked once per second.

    Firing is one-shot. When the clock matches, ``on_alarm`` is called once, polling
    stops and the alarm disarms itself; the time is kept for the next arming.
    """

    def __init__(
        self,
        storage_path,
        on_alarm: Optional[Callable[[], None]] = None,
        on_state_changed: Optional[Callable[[bool, Optional[str]], None]] = None,
        on_validation_error: Optional[Callable[[ValidationErrorKind], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        timer_factory: Callable[..., PeriodicTimer] = PeriodicTimer,
    ):
        self.storage_path = Path(storage_path)
        self.on_alarm = on_alarm
        self.on_state_changed = on_state_changed
        self.on_validation_error = on_validation_error
        self.clock = clock or now_local
        self.timer_factory = timer_factory

        self._lock = RLock()
        self._enabled = False
        self._time: Optional[str] = None
        self._timer: Optional[PeriodicTimer] = None

    @staticmethod
    def validate(text) -> bool:
        return is_valid_time(text)

    @property
    def state(self) -> AlarmState:
        with self._lock:
            return AlarmState(enabled=self._enabled, time=self._time)

    @property
    def is_polling(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_running

    def start(self) -> AlarmState:
        try:
            ensure_state_file(self.storage_path)
        except AlarmStorageError as exc:
            logger.error("Failed to create alarm state file: %s", exc)
        try:
            loaded = load_state(self.storage_path)
        except AlarmStorageError as exc:
            logger.error("Failed to load alarm state, using defaults: %s", exc)
            loaded = DEFAULT_STATE
        with self._lock:
            self._enabled = loaded.enabled
            self._time = loaded.time
            if self._enabled:
                self._start_polling()
        logger.info("Loaded alarm state from %s (enabled=%s, time=%s)", self.storage_path, loaded.enabled, loaded.time)
        return loaded

    def set_time(self, text) -> bool:
        if not self.validate(text):
            logger.info("Rejected alarm time %r", text)
            self._report(ValidationErrorKind.INVALID_FORMAT)
            return False
        with self._lock:
            self._time = text
            self._persist()
            self._notify_state_changed()
        logger.info("Alarm time set to %s", text)
        return True

    def set_enabled(self, flag: bool) -> bool:
        with self._lock:
            if not flag:
                self._enabled = False
                self._stop_polling()
                self._persist()
                self._notify_state_changed()
                logger.info("Alarm disarmed")
                return True
            if not self.validate(self._time):
                logger.info("Refusing to arm alarm without a time")
                self._enabled = False
                self._notify_state_changed()
                self._report(ValidationErrorKind.NO_TIME_SET)
                return False
            self._enabled = True
            self._persist()
            self._start_polling()
            self._notify_state_changed()
            logger.info("Alarm armed for %s", self._time)
            return True

    def tick(self) -> bool:
        with self._lock:
            if not self._enabled or not self._time:
                return False
            current = format_clock(self.clock())
            if current != self._time:
                return False
            logger.info("Alarm time reached: %s", current)
            if self.on_alarm:
                try:
                    self.on_alarm()
                except Exception:
                    logger.error("on_alarm callback failed", exc_info=True)
            self._stop_polling()
            self._enabled = False
            self._persist()
            self._notify_state_changed()
            return True

    def shutdown(self) -> None:
        with self._lock:
            timer = self._timer
            self._stop_polling()
        if timer:
            timer.join(timeout=2)

    def _start_polling(self) -> None:
        if self._timer is not None and self._timer.is_running:
            return
        self._timer = self.timer_factory(POLL_INTERVAL_SECONDS, self.tick, lock=self._lock, name="alarm-poll")
        self._timer.start()

    def _stop_polling(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None

    def _persist(self) -> None:
        state = AlarmState(enabled=self._enabled, time=self._time)
        try:
            save_state(self.storage_path, state)
        except AlarmStorageError as exc:
            logger.error("Failed to save alarm state, keeping it in memory: %s", exc)

    def _notify_state_changed(self) -> None:
        if not self.on_state_changed:
            return
        try:
            self.on_state_changed(self._enabled, self._time)
        except Exception:
            logger.error("on_state_changed callback failed", exc_info=True)

    def _report(self, kind: ValidationErrorKind) -> None:
        if not self.on_validation_error:
            return
        try:
            self.on_validation_error(kind)
        except Exception:
            logger.error("on_validation_error callback failed", exc_info=True)
