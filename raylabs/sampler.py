"""Small deterministic pseudo-random generators."""

from __future__ import annotations

from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_MASK31 = 0x7FFFFFFF
_SCALE = 2147483647.0


@dataclass
class Sampler:
    """Xorshift-mixed LCG producing uniform floats."""

    seed: int = 12345

    def next_seed(self) -> int:
        """Advance the state and return it as an unsigned 32-bit value."""
        s = (self.seed * 1103515245 + 12345) & _MASK32
        s = ((s << 16) & _MASK32) ^ (s >> 16)
        s = (s * 224250251 + 198491317) & _MASK32
        s = ((s << 13) & _MASK32) ^ (s >> 19)
        self.seed = s
        return s

    def random_float(self, low: float = 0.0, high: float = 1.0) -> float:
        """Uniform float between ``low`` and ``high``."""
        unit = (self.next_seed() & _MASK31) / _SCALE
        return low + (high - low) * unit


@dataclass
class HashRandom:
    """Integer-hash generator used for scattering directions."""

    seed: int = 12345

    def _advance(self) -> int:
        s = (self.seed * 1103515245 + 12345) & _MASK32
        s = ((s << 13) & _MASK32) ^ s
        s = (s * (s * s * 15731 + 789221) + 1376312589) & _MASK32
        self.seed = s
        return s

    def random_float(self, low: float = 0.0, high: float = 1.0) -> float:
        """Uniform float between ``low`` and ``high``."""
        unit = (self._advance() & _MASK31) / _SCALE
        return low + unit * (high - low)