from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

TIME_FORMAT = "%H:%M:%S"
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d):([0-5]\d)$", re.ASCII)


def is_valid_time(text: Optional[str]) -> bool:
    if not isinstance(text, str):
        return False
    return TIME_PATTERN.fullmatch(text) is not None


def now_local() -> datetime:
    return datetime.now()


def format_clock(dt: datetime) -> str:
    return dt.strftime(TIME_FORMAT)


def seconds_until(alarm_time: str, now: datetime) -> int:
    """Seconds from ``now`` until the next occurrence of ``alarm_time`` (0..86399)."""
    hh, mm, ss = (int(part) for part in alarm_time.split(":"))
    target = hh * 3600 + mm * 60 + ss
    current = now.hour * 3600 + now.minute * 60 + now.second
    return (target - current) % 86400


def format_countdown(seconds: int) -> str:
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
