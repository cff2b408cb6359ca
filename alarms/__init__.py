"""Single daily alarm: scheduler, state storage and alert collaborators."""

from .errors import PersistenceReadError, PersistenceWriteError, ValidationErrorKind
from .scheduler import AlarmScheduler
from .storage import AlarmState
