"""Sawtooth tone synthesis and fire-and-forget playback through pygame.mixer."""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

LOG = logging.getLogger("honeycomb.audio")

SAMPLE_RATE = 44100
ATTACK_TIME = 0.01
MASTER_VOLUME = 0.3


def sawtooth(frequency: float, duration: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    t = np.arange(int(sample_rate * duration), dtype=np.float64) / sample_rate
    phase = (t * frequency) % 1.0
    return (2.0 * phase - 1.0).astype(np.float32)


def envelope(duration: float, attack: float = ATTACK_TIME, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Linear ramp 0 -> 1 over ``attack``, then 1 -> 0 by the end of ``duration``."""
    n = int(sample_rate * duration)
    t = np.arange(n, dtype=np.float64) / sample_rate
    attack = min(attack, duration)
    return np.interp(t, [0.0, attack, duration], [0.0, 1.0, 0.0]).astype(np.float32)


def synthesize_tone(
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    attack: float = ATTACK_TIME,
    peak: float = 0.2,
    master_volume: float = MASTER_VOLUME,
) -> np.ndarray:
    wave = sawtooth(frequency, duration, sample_rate) * envelope(duration, attack, sample_rate)
    wave *= peak * master_volume
    np.clip(wave, -1.0, 1.0, out=wave)
    return (wave * 32767).astype(np.int16)


class ToneSynth:
    """Plays synthesized tones on free mixer channels.

    The synth starts out suspended. ``resume()`` opens the mixer; when that fails
    the synth stays silent and every ``play()`` is a no-op, so missing audio never
    gets in the way of drawing or input.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        attack: float = ATTACK_TIME,
        peak: float = 0.2,
        master_volume: float = MASTER_VOLUME,
        channels: int = 64,
        buffer: int = 512,
    ):
        self.sample_rate = int(sample_rate)
        self.attack = attack
        self.peak = peak
        self.master_volume = master_volume
        self.num_channels = channels
        self.buffer = buffer
        self.muted = False
        self._mixer_spec: Optional[Tuple[int, int, int]] = None
        self._cache: Dict[Tuple[float, float], pygame.mixer.Sound] = {}

    @classmethod
    def from_config(cls, config: Dict) -> "ToneSynth":
        return cls(
            sample_rate=config["sample_rate"],
            attack=config["attack_time"],
            peak=config["tone_peak"],
            master_volume=config["master_volume"],
            channels=config["mixer_channels"],
            buffer=config["mixer_buffer"],
        )

    @property
    def ready(self) -> bool:
        return self._mixer_spec is not None

    def resume(self) -> bool:
        """Open the mixer if it is not running yet. Returns whether audio is available."""
        if self.ready:
            return True
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=2, buffer=self.buffer)
            pygame.mixer.set_num_channels(self.num_channels)
            spec = pygame.mixer.get_init()
        except pygame.error as exc:
            LOG.warning("Audio unavailable, continuing silently: %s", exc)
            return False
        if not spec:
            LOG.warning("Audio mixer did not start, continuing silently")
            return False
        self._mixer_spec = spec
        self._cache.clear()
        LOG.info("pygame mixer initialised (%d Hz, %d-bit, %d channels)", spec[0], abs(spec[1]), spec[2])
        return True

    def _sound_for(self, frequency: float, duration: float) -> pygame.mixer.Sound:
        key = (round(frequency, 3), duration)
        sound = self._cache.get(key)
        if sound is None:
            rate, _size, channels = self._mixer_spec
            mono = synthesize_tone(frequency, duration, rate, self.attack, self.peak, self.master_volume)
            samples = np.column_stack([mono] * channels) if channels > 1 else mono
            sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
            self._cache[key] = sound
        return sound

    def play(self, frequency: float, duration: float) -> None:
        if self.muted or not self.ready:
            return
        try:
            channel = self._sound_for(frequency, duration).play()
        except pygame.error as exc:
            LOG.error("pygame playback failed: %s", exc)
            return
        if channel is None:
            LOG.debug("No free mixer channel, dropped %.1f Hz", frequency)

    def close(self) -> None:
        if self.ready:
            pygame.mixer.quit()
        self._mixer_spec = None
        self._cache.clear()
