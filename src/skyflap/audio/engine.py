"""
SKYFLAP Audio Engine - chiptune sound cues.

The simulation only names cues; this module turns them into short
square/sine blips and plays them through pygame.mixer. Audio problems
are logged and never reach the game loop.
"""

import array
import math
import logging
from typing import Callable, Dict, Optional

import pygame

from skyflap.core.events import Event, EventType, SoundCue

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def _render(duration: float, voice: Callable[[float], float]) -> array.array:
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * duration)):
        val = max(-1.0, min(1.0, voice(i / SAMPLE_RATE)))
        samples.append(int(val * 32767))
    return samples


def _start(t: float) -> float:
    """Rising two-note chirp."""
    freq = 523 if t < 0.08 else 784
    return square(t, freq) * 0.25 * max(0, 1 - t * 6)


def _game_over(t: float) -> float:
    """Sad descending tone."""
    freq = 400 - t * 250
    return square(t, freq) * 0.25 * max(0, 1 - t * 2)


def _bonus(t: float) -> float:
    """Sparkly upward sweep."""
    freq = 900 + t * 6000
    return (triangle(t, freq) * 0.3 + sine(t, freq * 2) * 0.1) * max(0, 1 - t * 8)


def _pipe_pass(t: float) -> float:
    """Short score blip."""
    return square(t, 1046) * 0.2 * max(0, 1 - t * 15)


def _celebration(t: float) -> float:
    """Fanfare arpeggio."""
    notes = [523, 659, 784, 1047, 1319, 1047, 1319, 1568]
    note = notes[min(int(t * 8), len(notes) - 1)]
    return (square(t, note) * 0.2 + sine(t, note / 2) * 0.15) * max(0, 1 - t)


CUE_VOICES: Dict[SoundCue, tuple[float, Callable[[float], float]]] = {
    SoundCue.START: (0.16, _start),
    SoundCue.GAME_OVER: (0.5, _game_over),
    SoundCue.BONUS: (0.12, _bonus),
    SoundCue.PIPE_PASS: (0.07, _pipe_pass),
    SoundCue.CELEBRATION: (1.0, _celebration),
}


def synthesize(cue: SoundCue) -> array.array:
    """Mono 16-bit samples for a cue."""
    duration, voice = CUE_VOICES[cue]
    return _render(duration, voice)


class AudioEngine:
    """Plays engine sound cues received from the EventBus."""

    def __init__(self, volume: float = 0.8):
        self._initialized = False
        self._muted = False
        self._volume = volume
        self._sounds: Dict[SoundCue, pygame.mixer.Sound] = {}

    def init(self) -> bool:
        """Initialize the mixer and generate every cue."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            for cue in SoundCue:
                self._sounds[cue] = self._create_sound(synthesize(cue))
            self._initialized = True
            logger.info(f"Audio engine initialized ({len(self._sounds)} cues)")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def play(self, cue: SoundCue) -> Optional[pygame.mixer.Channel]:
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(cue)
        if sound is None:
            logger.warning(f"Sound not found: {cue}")
            return None

        sound.set_volume(self._volume)
        return sound.play()

    def handle_event(self, event: Event) -> None:
        """EventBus handler for SOUND_PLAY events."""
        if event.type != EventType.SOUND_PLAY:
            return
        cue = event.data.get("cue")
        if isinstance(cue, SoundCue):
            self.play(cue)

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
