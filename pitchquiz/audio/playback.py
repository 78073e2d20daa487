from __future__ import annotations

"""FluidSynth-based audio playback implementation."""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..app.explain import warn
from .player import SynthNotePlayer
from .synthesis import Synth


class FluidSynthSynth(Synth):
    """Concrete Synth using pyfluidsynth."""

    def __init__(self, soundfont_path: str, sample_rate: int = 44100, gain: float = 0.5) -> None:
        super().__init__(sample_rate=sample_rate, gain=gain)
        try:
            import fluidsynth  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("pyfluidsynth is not installed") from e

        self._fs = fluidsynth.Synth(samplerate=sample_rate, gain=gain)
        # Prefer CoreAudio on macOS to avoid SDL warnings
        driver = None
        if sys.platform == "darwin":
            driver = "coreaudio"
        try:
            if driver:
                self._fs.start(driver=driver)
            else:
                self._fs.start()
        except Exception:
            self._fs.start()
        self._sfid = self._fs.sfload(soundfont_path)
        self.program_piano()

    def program_piano(self) -> None:
        self._fs.program_select(0, self._sfid, 0, 0)  # channel 0 = Acoustic Grand

    def note_on_raw(self, channel: int, midi: int, velocity: int) -> None:
        self._fs.noteon(int(channel), int(midi), max(0, min(127, int(velocity))))

    def note_off_raw(self, channel: int, midi: int) -> None:
        self._fs.noteoff(int(channel), int(midi))

    def all_notes_off(self, channel: int) -> None:
        # CC#123 = All Notes Off
        self._fs.cc(int(channel), 123, 0)

    def close(self) -> None:
        try:
            self._fs.delete()
        except Exception as e:  # pragma: no cover - driver teardown
            warn(f"FluidSynth teardown failed: {e}")


def make_synth_from_config(cfg: Dict[str, Any]) -> Synth:
    """Factory for Synth from config dict."""
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "fluidsynth")
    if backend == "fluidsynth":
        return FluidSynthSynth(
            soundfont_path=audio.get("soundfont_path"),
            sample_rate=int(audio.get("sample_rate", 44100)),
            gain=float(audio.get("gain", 0.5)),
        )
    raise ValueError(f"Unsupported backend: {backend}")


def make_note_player_from_config(cfg: Dict[str, Any]) -> Optional[SynthNotePlayer]:
    """Build the quiz's note player, or None when audio is unavailable.

    A missing soundfont or synth backend is not fatal: the quiz runs silently.
    """
    audio = cfg.get("audio", {})
    if not bool(audio.get("enabled", True)):
        return None
    sf_path = Path(str(audio.get("soundfont_path", "")))
    if not sf_path.exists():
        warn(f"SoundFont not found at '{sf_path}'; running without sound.")
        return None
    try:
        synth = make_synth_from_config(cfg)
    except (RuntimeError, ValueError) as e:
        warn(f"Audio init failed: {e}; running without sound.")
        return None
    return SynthNotePlayer(
        synth,
        root_midi=int(audio.get("root_midi", 60)),
        velocity=int(audio.get("velocity", 100)),
    )
