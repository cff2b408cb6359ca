from __future__ import annotations

from enum import Enum


class ValidationErrorKind(str, Enum):
    INVALID_FORMAT = "invalid_format"
    NO_TIME_SET = "no_time_set"


class AlarmStorageError(Exception):
    """Base class for state file failures. Never fatal for the running alarm."""

    def __init__(self, path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PersistenceReadError(AlarmStorageError):
    pass


class PersistenceWriteError(AlarmStorageError):
    pass
