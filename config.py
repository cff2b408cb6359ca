import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from alarms.sounds import DEFAULT_SOUND_PATH


def _get_env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip() in {"1", "true", "True", "yes", "YES", "y"}


def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _get_env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float") from exc


@dataclass
class Config:
    state_path: Path
    sound_command: Optional[str]
    sound_path: Path
    fallback_sound_path: Path
    tone_hz: float
    tone_seconds: float
    notify_command: Optional[str]
    notify_urgency: str
    notify_app_name: str
    enable_notifications: bool
    debug: bool
    log_level: str
    log_dir: Path
    log_max_bytes: int


def load_config(env_path: Optional[Path] = None) -> Config:
    if env_path is None:
        env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    state_path = Path(os.getenv("ALARM_STATE_PATH", "data/alarm.json"))
    sound_command = os.getenv("ALARM_SOUND_COMMAND", "paplay") or None
    sound_path = Path(os.getenv("ALARM_SOUND_PATH", str(DEFAULT_SOUND_PATH)))
    fallback_sound_path = Path(os.getenv("ALARM_FALLBACK_SOUND_PATH", "data/alarm.wav"))
    tone_hz = _get_env_float("ALARM_TONE_HZ", 880.0)
    tone_seconds = _get_env_float("ALARM_TONE_SECONDS", 1.5)
    notify_command = os.getenv("NOTIFY_COMMAND", "notify-send") or None
    notify_urgency = os.getenv("NOTIFY_URGENCY", "critical").lower()
    notify_app_name = os.getenv("NOTIFY_APP_NAME", "Alarm")
    enable_notifications = _get_env_bool("ENABLE_NOTIFICATIONS", True)
    debug = _get_env_bool("DEBUG", False)
    log_level = os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper()
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_max_bytes = _get_env_int("LOG_MAX_BYTES", 1_000_000)

    if notify_urgency not in {"low", "normal", "critical"}:
        logging.warning("NOTIFY_URGENCY=%s is not low/normal/critical, using critical", notify_urgency)
        notify_urgency = "critical"

    return Config(
        state_path=state_path,
        sound_command=sound_command,
        sound_path=sound_path,
        fallback_sound_path=fallback_sound_path,
        tone_hz=tone_hz,
        tone_seconds=tone_seconds,
        notify_command=notify_command,
        notify_urgency=notify_urgency,
        notify_app_name=notify_app_name,
        enable_notifications=enable_notifications,
        debug=debug,
        log_level=log_level,
        log_dir=log_dir,
        log_max_bytes=log_max_bytes,
    )


def setup_logging(log_level: str = "INFO", logs_dir: Path = Path("logs"), max_bytes: int = 1_000_000) -> None:
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_path = logs_dir / "alarm.log"
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[file_handler, console_handler],
    )
