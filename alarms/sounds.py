from __future__ import annotations

import logging
import shutil
import subprocess
import wave
from pathlib import Path
from threading import Thread
from typing import List, Optional

import numpy as np

try:
    from audio_io import play_pcm_once
except ImportError:  # pragma: no cover - pyaudio is an optional extra
    play_pcm_once = None  # type: ignore

logger = logging.getLogger(__name__)

DEFAULT_SOUND_PATH = Path("/usr/share/sounds/freedesktop/stereo/alarm-clock-elapsed.oga")
SAMPLE_RATE = 24000


def synth_tone(freq: float, duration_seconds: float, sample_rate: int = SAMPLE_RATE, amplitude: float = 0.4) -> np.ndarray:
    t = np.arange(int(duration_seconds * sample_rate)) / sample_rate
    wave_data = amplitude * np.sin(2 * np.pi * freq * t)
    return (wave_data * 32767).astype(np.int16)


def ensure_alarm_sound(path: Path, freq: float = 880.0, duration_seconds: float = 1.5) -> None:
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    samples = synth_tone(freq, duration_seconds)
    with wave.open(str(path), "w") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(SAMPLE_RATE)
        wav.writeframes(samples.tobytes())
    logger.info("Generated default alarm sound at %s", path)


class AlarmSoundPlayer:
    """Plays the alarm once: external sound command first, synthesized tone otherwise."""

    def __init__(
        self,
        sound_path: Path = DEFAULT_SOUND_PATH,
        command: Optional[str] = "paplay",
        fallback_path: Path = Path("data/alarm.wav"),
        tone_hz: float = 880.0,
        tone_seconds: float = 1.5,
    ):
        self.sound_path = Path(sound_path)
        self.command = command
        self.fallback_path = Path(fallback_path)
        self.tone_hz = tone_hz
        self.tone_seconds = tone_seconds
        self._process: Optional[subprocess.Popen] = None
        self._tone_thread: Optional[Thread] = None

    def build_command(self) -> Optional[List[str]]:
        if not self.command:
            return None
        executable = shutil.which(self.command)
        if not executable:
            logger.warning("Sound command %s not found on PATH", self.command)
            return None
        if not self.sound_path.exists():
            logger.warning("Alarm sound file %s is missing", self.sound_path)
            return None
        return [executable, str(self.sound_path)]

    def play(self) -> None:
        if self._play_with_command():
            return
        ensure_alarm_sound(self.fallback_path, self.tone_hz, self.tone_seconds)
        if self._tone_thread and self._tone_thread.is_alive():
            return
        self._tone_thread = Thread(target=self._play_tone, name="alarm-tone", daemon=True)
        self._tone_thread.start()

    def stop(self) -> None:
        if self._process and self._process.poll() is None:
            self._process.terminate()
        self._process = None

    def _play_with_command(self) -> bool:
        cmd = self.build_command()
        if not cmd:
            return False
        try:
            self._process = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as exc:
            logger.warning("Failed to run %s: %s", cmd[0], exc)
            return False
        logger.info("Playing alarm sound %s", self.sound_path)
        return True

    def _play_tone(self) -> None:  # pragma: no cover - audio device
        if play_pcm_once is None:
            logger.info("Alarm ringing...")
            return
        try:
            play_pcm_once(synth_tone(self.tone_hz, self.tone_seconds), SAMPLE_RATE)
        except Exception:
            logger.error("Fallback tone playback failed", exc_info=True)
            logger.info("Alarm ringing...")
