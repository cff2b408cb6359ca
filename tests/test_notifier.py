from alarms import notifier as notifier_module
from alarms.errors import ValidationErrorKind
from alarms.notifier import DesktopNotifier


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        return object()


def test_alarm_notification_is_critical(monkeypatch):
    popen = _Recorder()
    monkeypatch.setattr(notifier_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(notifier_module.subprocess, "Popen", popen)
    assert DesktopNotifier(app_name="Alarm").notify_alarm()
    assert popen.calls == [
        ["/usr/bin/notify-send", "-u", "critical", "-a", "Alarm", "Alarm Ringing!", "Your alarm time has been reached."]
    ]


def test_validation_messages(monkeypatch):
    popen = _Recorder()
    monkeypatch.setattr(notifier_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(notifier_module.subprocess, "Popen", popen)
    notifier = DesktopNotifier()
    notifier.notify_validation_error(ValidationErrorKind.INVALID_FORMAT)
    notifier.notify_validation_error(ValidationErrorKind.NO_TIME_SET)
    assert popen.calls[0][-2:] == ["Invalid Time", "Use HH:MM:SS format (e.g., 08:30:00)."]
    assert popen.calls[1][-2:] == ["Alarm Not Set", "Please enter a time in HH:MM:SS format before enabling."]
    assert popen.calls[1][2] == "normal"


def test_missing_command_is_not_fatal(monkeypatch):
    monkeypatch.setattr(notifier_module.shutil, "which", lambda name: None)
    assert DesktopNotifier().notify_alarm() is False


def test_popen_failure_is_logged(monkeypatch, caplog):
    def broken(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(notifier_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(notifier_module.subprocess, "Popen", broken)
    assert DesktopNotifier().notify_alarm() is False
    assert "Failed to send notification" in caplog.text


def test_disabled_notifier_skips_command():
    assert DesktopNotifier(enabled=False).build_command("t", "b") is None
