import logging
from typing import Optional

import numpy as np
import pyaudio

logger = logging.getLogger(__name__)


def create_pyaudio() -> pyaudio.PyAudio:
    pa = pyaudio.PyAudio()
    return pa


def get_output_device_name(pa: pyaudio.PyAudio, device_index: Optional[int]) -> str:
    if device_index is None:
        device_index = int(pa.get_default_output_device_info()["index"])
    info = pa.get_device_info_by_index(device_index)
    return str(info.get("name", "unknown"))


class AudioPlayer:
    def __init__(self, pa: pyaudio.PyAudio, rate: int, device_index: Optional[int] = None):
        self.pa = pa
        self.rate = rate
        self.stream = self.pa.open(
            format=pyaudio.paInt16,
            channels=1,
            rate=self.rate,
            output=True,
            output_device_index=device_index,
        )

    def play_bytes(self, audio_bytes: bytes) -> None:
        self.stream.write(audio_bytes)

    def play_samples(self, samples: np.ndarray) -> None:
        self.play_bytes(samples.astype(np.int16).tobytes())

    def close(self) -> None:
        self.stream.stop_stream()
        self.stream.close()


def play_pcm_once(samples: np.ndarray, rate: int) -> None:
    pa = create_pyaudio()
    try:
        logger.debug("Playing %d samples on %s", len(samples), get_output_device_name(pa, None))
        player = AudioPlayer(pa, rate)
        try:
            player.play_samples(samples)
        finally:
            player.close()
    finally:
        pa.terminate()
