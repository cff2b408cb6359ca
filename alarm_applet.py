import logging
import signal
import sys
from typing import Optional, TextIO

from alarms.commands import CommandRouter, describe_state
from alarms.errors import ValidationErrorKind
from alarms.notifier import DesktopNotifier
from alarms.scheduler import AlarmScheduler
from alarms.sounds import AlarmSoundPlayer
from config import Config, load_config, setup_logging
from time_utils import now_local

logger = logging.getLogger("alarm")

PROMPT = "alarm> "


def graceful_exit(signum, frame) -> None:  # pragma: no cover - signal handler
    logger.info("Shutting down (signal %s)", signum)
    raise KeyboardInterrupt()


class AppletRuntime:
    """Wires the scheduler to the desktop collaborators and a console menu."""

    def __init__(
        self,
        config: Config,
        notifier: DesktopNotifier,
        sound_player: AlarmSoundPlayer,
        output: TextIO = sys.stdout,
    ):
        self.config = config
        self.notifier = notifier
        self.sound_player = sound_player
        self.output = output
        self.scheduler = AlarmScheduler(
            storage_path=config.state_path,
            on_alarm=self._on_alarm,
            on_state_changed=self._on_state_changed,
            on_validation_error=self._on_validation_error,
        )
        self.router = CommandRouter(self.scheduler)
        self._switch_on: Optional[bool] = None

    def start(self) -> None:
        state = self.scheduler.start()
        self._switch_on = state.enabled
        self._print(describe_state(state, now_local()))

    def shutdown(self) -> None:
        self.scheduler.shutdown()
        self.sound_player.stop()

    def handle_line(self, line: str) -> bool:
        result = self.router.handle_text(line)
        if result is None:
            return True
        if result.response_text:
            self._print(result.response_text)
        return not result.should_exit

    def run(self, stream: TextIO = sys.stdin) -> None:
        self._print("Type 'help' for commands.")
        while True:
            self.output.write(PROMPT)
            self.output.flush()
            line = stream.readline()
            if not line:
                break
            if not self.handle_line(line):
                break

    def _print(self, text: str) -> None:
        self.output.write(text + "\n")
        self.output.flush()

    def _on_alarm(self) -> None:
        self._print(f"\n*** Alarm! {self.scheduler.state.time} ***")
        self.notifier.notify_alarm()
        self.sound_player.play()

    def _on_state_changed(self, enabled: bool, time: Optional[str]) -> None:
        if self._switch_on != enabled:
            logger.info("Alarm switch -> %s", "on" if enabled else "off")
        self._switch_on = enabled

    def _on_validation_error(self, kind: ValidationErrorKind) -> None:
        self.notifier.notify_validation_error(kind)


def build_runtime(config: Config) -> AppletRuntime:
    notifier = DesktopNotifier(
        command=config.notify_command,
        app_name=config.notify_app_name,
        alarm_urgency=config.notify_urgency,
        enabled=config.enable_notifications,
    )
    sound_player = AlarmSoundPlayer(
        sound_path=config.sound_path,
        command=config.sound_command,
        fallback_path=config.fallback_sound_path,
        tone_hz=config.tone_hz,
        tone_seconds=config.tone_seconds,
    )
    return AppletRuntime(config, notifier, sound_player)


def main() -> None:
    config = load_config()
    setup_logging(config.log_level, config.log_dir, config.log_max_bytes)
    signal.signal(signal.SIGINT, graceful_exit)
    signal.signal(signal.SIGTERM, graceful_exit)
    logger.info("Starting alarm applet (state=%s)", config.state_path)

    runtime = build_runtime(config)
    runtime.start()
    try:
        runtime.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        runtime.shutdown()


if __name__ == "__main__":
    main()
