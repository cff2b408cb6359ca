from datetime import datetime

import pytest


class FakeClock:
    def __init__(self, value: datetime):
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def set(self, hh: int, mm: int, ss: int) -> None:
        self.value = self.value.replace(hour=hh, minute=mm, second=ss)


class FakeTimer:
    def __init__(self, interval, callback, lock=None, name="alarm-poll"):
        self.interval = interval
        self.callback = callback
        self.lock = lock
        self.name = name
        self.starts = 0
        self.stopped = False

    @property
    def is_running(self) -> bool:
        return self.starts > 0 and not self.stopped

    def start(self) -> None:
        self.starts += 1

    def stop(self) -> None:
        self.stopped = True

    def join(self, timeout=None) -> None:
        pass


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 1, 6, 0, 0))


@pytest.fixture
def timers():
    return []


@pytest.fixture
def timer_factory(timers):
    def factory(*args, **kwargs):
        timer = FakeTimer(*args, **kwargs)
        timers.append(timer)
        return timer

    return factory
