from __future__ import annotations

import logging
import shutil
import subprocess
from typing import List, Optional

from .errors import ValidationErrorKind

logger = logging.getLogger(__name__)

ALARM_TITLE = "Alarm Ringing!"
ALARM_BODY = "Your alarm time has been reached."

VALIDATION_MESSAGES = {
    ValidationErrorKind.INVALID_FORMAT: ("Invalid Time", "Use HH:MM:SS format (e.g., 08:30:00)."),
    ValidationErrorKind.NO_TIME_SET: ("Alarm Not Set", "Please enter a time in HH:MM:SS format before enabling."),
}


class DesktopNotifier:
    def __init__(
        self,
        command: Optional[str] = "notify-send",
        app_name: str = "Alarm",
        alarm_urgency: str = "critical",
        enabled: bool = True,
    ):
        self.command = command
        self.app_name = app_name
        self.alarm_urgency = alarm_urgency
        self.enabled = enabled

    def build_command(self, title: str, body: str, urgency: str = "normal") -> Optional[List[str]]:
        if not self.enabled or not self.command:
            return None
        executable = shutil.which(self.command)
        if not executable:
            logger.warning("Notification command %s not found on PATH", self.command)
            return None
        return [executable, "-u", urgency, "-a", self.app_name, title, body]

    def notify(self, title: str, body: str, urgency: str = "normal") -> bool:
        logger.info("Notification: %s - %s", title, body)
        cmd = self.build_command(title, body, urgency)
        if not cmd:
            return False
        try:
            subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as exc:
            logger.warning("Failed to send notification via %s: %s", cmd[0], exc)
            return False
        return True

    def notify_alarm(self) -> bool:
        return self.notify(ALARM_TITLE, ALARM_BODY, urgency=self.alarm_urgency)

    def notify_validation_error(self, kind: ValidationErrorKind) -> bool:
        title, body = VALIDATION_MESSAGES[kind]
        return self.notify(title, body)
