from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from time_utils import is_valid_time

from .errors import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlarmState:
    enabled: bool = False
    time: Optional[str] = None

    def to_dict(self) -> dict:
        return {"enabled": self.enabled, "time": self.time}

    @classmethod
    def from_dict(cls, data: dict) -> "AlarmState":
        if not isinstance(data, dict):
            raise ValueError(f"State payload must be an object, got {type(data).__name__}")
        enabled = data.get("enabled") is True
        time = data.get("time")
        if time is not None and not is_valid_time(time):
            logger.warning("Dropping malformed stored alarm time %r", time)
            time = None
        if enabled and time is None:
            logger.warning("Stored state is armed without a valid time, disarming")
            enabled = False
        return cls(enabled=enabled, time=time)


DEFAULT_STATE = AlarmState()


def ensure_state_file(path: Path) -> bool:
    """Create ``path`` holding the default state if it does not exist yet."""
    if path.exists():
        return False
    save_state(path, DEFAULT_STATE)
    logger.info("Created alarm state file at %s", path)
    return True


def load_state(path: Path) -> AlarmState:
    if not path.exists():
        return DEFAULT_STATE
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceReadError(path, str(exc)) from exc
    if not raw.strip():
        return DEFAULT_STATE
    try:
        return AlarmState.from_dict(json.loads(raw))
    except ValueError as exc:
        raise PersistenceReadError(path, str(exc)) from exc


def save_state(path: Path, state: AlarmState) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f)
    except OSError as exc:
        raise PersistenceWriteError(path, str(exc)) from exc
