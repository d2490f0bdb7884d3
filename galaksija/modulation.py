"""Audio modulation of Galaksija tape data into a pulse signal."""

from __future__ import annotations

import os
import sys
import wave
from array import array
from typing import Iterable, List, Union

# All durations in milliseconds.
PULSE_WIDTH = 0.6
PERIOD_BASE = 3.0
PERIOD_1 = PERIOD_BASE / 2
PERIOD_0 = PERIOD_BASE
INTERBYTE_PAUSE = 4.5
INTERBLOCK_PAUSE = 2000.0
SYNCBYTES = 100

SUPPORTED_BITS = (8, 16)


class ModulationError(Exception):
    """Raised when the signal cannot be produced or stored."""


class Modulator:
    """Accumulates the tape signal as samples in the range -1.0 .. 1.0."""

    def __init__(self, samplerate: int = 11025, bits: int = 8) -> None:
        if bits not in SUPPORTED_BITS:
            raise ModulationError("Only 8 and 16 bit sample size supported")
        if samplerate <= 0:
            raise ModulationError(f"Invalid sample rate {samplerate}")
        self.samplerate = samplerate
        self.bits = bits
        self._buffer = array("d")

    def _sample_count(self, ms: float) -> int:
        return int(self.samplerate * ms / 1000.0 + 0.5)

    def _impulse(self, value: float, ms: float) -> None:
        count = self._sample_count(ms)
        if count > 0:
            self._buffer.extend(array("d", [value]) * count)

    def samples(self) -> List[float]:
        """Return a copy of the samples produced so far."""
        return list(self._buffer)

    def clear(self) -> None:
        """Discard all samples produced so far."""
        self._buffer = array("d")

    def interbyte_pause(self) -> None:
        """Append the silence that separates two bytes."""
        self._impulse(0.0, INTERBYTE_PAUSE)

    def interblock_pause(self) -> None:
        """Append the silence that precedes a block."""
        self._impulse(0.0, INTERBLOCK_PAUSE)

    def sync(self) -> None:
        """Append the run of zero bytes that lets the loader synchronise."""
        self.block(bytes(SYNCBYTES))

    def block(self, data: Iterable[int]) -> None:
        """Append a sequence of bytes separated by inter-byte pauses."""
        for index, value in enumerate(data):
            if index:
                self.interbyte_pause()
            self.byte(value)

    def byte(self, value: int) -> None:
        """Append one byte, least significant bit first."""
        for bit in range(8):
            if (value >> bit) & 0x01:
                self.one()
            else:
                self.zero()

    def _bit(self, period: float) -> None:
        for _ in range(int(PERIOD_BASE / period)):
            self._impulse(-1.0, PULSE_WIDTH)
            self._impulse(1.0, PULSE_WIDTH)
            self._impulse(0.0, period - 2 * PULSE_WIDTH)

    def one(self) -> None:
        """Append a 1 bit: two pulses within the base period."""
        self._bit(PERIOD_1)

    def zero(self) -> None:
        """Append a 0 bit: one pulse within the base period."""
        self._bit(PERIOD_0)

    def _frames(self) -> bytes:
        if self.bits == 16:
            frames = array("h", (round(v * 0x7FFF) for v in self._buffer))
            if sys.byteorder == "big":
                frames.byteswap()
            return frames.tobytes()
        return bytes(round(v * 0x7F) + 0x80 for v in self._buffer)

    def write(self, filename: Union[str, os.PathLike]) -> None:
        """Store the signal as a mono PCM WAV file."""
        frames = self._frames()
        try:
            with wave.open(os.fspath(filename), "wb") as wav:
                wav.setnchannels(1)
                wav.setsampwidth(self.bits // 8)
                wav.setframerate(self.samplerate)
                wav.writeframes(frames)
        except OSError as exc:
            raise ModulationError(f"Can't write WAV file: {exc}") from exc