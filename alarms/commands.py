from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from time_utils import format_countdown, now_local, seconds_until

from .scheduler import AlarmScheduler
from .storage import AlarmState

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "  set HH:MM:SS   set the alarm time (a bare HH:MM:SS works too)\n"
    "  on | off       arm or disarm the alarm\n"
    "  toggle         flip the alarm switch\n"
    "  status         show the current alarm\n"
    "  quit           exit"
)

ON_WORDS = {"on", "enable", "arm"}
OFF_WORDS = {"off", "disable", "disarm"}
EXIT_WORDS = {"quit", "exit", "q"}


@dataclass
class CommandResult:
    handled: bool
    response_text: Optional[str] = None
    action: Optional[str] = None
    should_exit: bool = False


class CommandRouter:
    """Turns menu-style text commands into scheduler calls."""

    def __init__(self, scheduler: AlarmScheduler, clock: Optional[Callable[[], datetime]] = None):
        self.scheduler = scheduler
        self.clock = clock or now_local

    def handle_text(self, text: str) -> Optional[CommandResult]:
        words = text.strip().split()
        if not words:
            return None
        verb = words[0].lower()
        args = words[1:]
        logger.debug("Command %s args=%s", verb, args)

        if verb in EXIT_WORDS:
            return CommandResult(handled=True, response_text="Bye.", action="quit", should_exit=True)

        if verb in {"help", "?"}:
            return CommandResult(handled=True, response_text=HELP_TEXT, action="help")

        if verb == "status":
            return CommandResult(handled=True, response_text=describe_state(self.scheduler.state, self.clock()), action="status")

        if verb == "set" or self.scheduler.validate(words[0]):
            value = words[0] if verb != "set" else (args[0] if args else "")
            if self.scheduler.set_time(value):
                resp = f"Alarm time set to {value}."
            else:
                resp = "Invalid time. Use HH:MM:SS format (e.g., 08:30:00)."
            return CommandResult(handled=True, response_text=resp, action="set")

        if verb == "toggle":
            verb = "off" if self.scheduler.state.enabled else "on"

        if verb in ON_WORDS:
            if self.scheduler.set_enabled(True):
                resp = f"Alarm on for {self.scheduler.state.time}."
            else:
                resp = "Alarm not set. Enter a time in HH:MM:SS format before enabling."
            return CommandResult(handled=True, response_text=resp, action="on")

        if verb in OFF_WORDS:
            self.scheduler.set_enabled(False)
            return CommandResult(handled=True, response_text="Alarm off.", action="off")

        return CommandResult(
            handled=False,
            response_text=f"Unknown command: {words[0]}. Type 'help' for the list.",
            action="unknown",
        )


def describe_state(state: AlarmState, now: datetime) -> str:
    if state.enabled and state.time:
        left = format_countdown(seconds_until(state.time, now))
        return f"Alarm is ON for {state.time} (rings in {left})."
    if state.time:
        return f"Alarm is OFF (time {state.time})."
    return "Alarm is OFF, no time set."
