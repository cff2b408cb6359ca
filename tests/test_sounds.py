import wave

import numpy as np

from alarms import sounds as sounds_module
from alarms.sounds import SAMPLE_RATE, AlarmSoundPlayer, ensure_alarm_sound, synth_tone


class _FakeProcess:
    def __init__(self, cmd):
        self.cmd = cmd
        self.terminated = False

    def poll(self):
        return None

    def terminate(self):
        self.terminated = True


def test_synth_tone_shape():
    samples = synth_tone(440.0, 0.5)
    assert samples.dtype == np.int16
    assert len(samples) == SAMPLE_RATE // 2
    assert np.abs(samples).max() <= 32767


def test_ensure_alarm_sound_writes_wav(tmp_path):
    path = tmp_path / "data" / "alarm.wav"
    ensure_alarm_sound(path, duration_seconds=0.25)
    with wave.open(str(path), "r") as wav:
        assert wav.getframerate() == SAMPLE_RATE
        assert wav.getnframes() == int(0.25 * SAMPLE_RATE)


def test_play_uses_sound_command(tmp_path, monkeypatch):
    sound = tmp_path / "alarm.oga"
    sound.write_bytes(b"OggS")
    launched = []

    def fake_popen(cmd, **kwargs):
        launched.append(_FakeProcess(cmd))
        return launched[-1]

    monkeypatch.setattr(sounds_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(sounds_module.subprocess, "Popen", fake_popen)
    player = AlarmSoundPlayer(sound_path=sound, fallback_path=tmp_path / "fallback.wav")
    player.play()
    assert launched[0].cmd == ["/usr/bin/paplay", str(sound)]
    assert not (tmp_path / "fallback.wav").exists()
    player.stop()
    assert launched[0].terminated


def test_missing_sound_file_falls_back_to_tone(tmp_path, monkeypatch):
    played = []
    monkeypatch.setattr(sounds_module.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(AlarmSoundPlayer, "_play_tone", lambda self: played.append(self.tone_hz))
    player = AlarmSoundPlayer(sound_path=tmp_path / "missing.oga", fallback_path=tmp_path / "fallback.wav", tone_hz=660.0)
    assert player.build_command() is None
    player.play()
    player._tone_thread.join(timeout=1)
    assert played == [660.0]
    assert (tmp_path / "fallback.wav").exists()


def test_no_command_configured(tmp_path):
    assert AlarmSoundPlayer(sound_path=tmp_path / "x.oga", command=None).build_command() is None
