"""
Seeded pseudo-random sources for relation generation.

Every generator owns one Sampler. A Sampler built from the same seed always
yields the same sequence, so a relation can be regenerated instead of stored.

Two backends are available:

- LinearCongruentialSampler ("lcg"): the 48-bit linear congruential generator
  a(n+1) = (a(n) * 0x5DEECE66D + 0xB) mod 2^48 with 53-bit doubles and the
  Marsaglia polar method for normal deviates. This is the algorithm behind the
  JDK's java.util.Random, so relations line up with the Java benchmark
  tooling for the same seed (up to libm rounding in log/sqrt).
- PythonRandomSampler ("python"): a private random.Random (Mersenne Twister).
"""

import math
import random
from abc import ABC, abstractmethod

from ..errors import ConfigError

_MULTIPLIER = 0x5DEECE66D
_ADDEND = 0xB
_MASK = (1 << 48) - 1
_DOUBLE_UNIT = 1.0 / (1 << 53)


class Sampler(ABC):
    """Deterministic source of uniform and standard normal deviates."""

    def __init__(self, seed: int = 0):
        self.seed = seed

    @abstractmethod
    def uniform(self) -> float:
        """Draw a uniform value in [0, 1)."""
        pass

    @abstractmethod
    def gaussian(self) -> float:
        """Draw a normal value with mean 0 and standard deviation 1."""
        pass

    def next_double(self) -> float:
        """Draw the next double in [0, 1); same stream as uniform()."""
        return self.uniform()


class LinearCongruentialSampler(Sampler):
    """48-bit LCG with polar-method Gaussians."""

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self._state = (seed ^ _MULTIPLIER) & _MASK
        self._next_gaussian: float | None = None

    def next_bits(self, bits: int) -> int:
        """Advance the state and return its top `bits` bits as a signed 32-bit int."""
        self._state = (self._state * _MULTIPLIER + _ADDEND) & _MASK
        value = self._state >> (48 - bits)
        if value & 0x80000000:
            value -= 1 << 32
        return value

    def uniform(self) -> float:
        return ((self.next_bits(26) << 27) + self.next_bits(27)) * _DOUBLE_UNIT

    def gaussian(self) -> float:
        if self._next_gaussian is not None:
            value = self._next_gaussian
            self._next_gaussian = None
            return value
        while True:
            v1 = 2 * self.uniform() - 1
            v2 = 2 * self.uniform() - 1
            s = v1 * v1 + v2 * v2
            if 0 < s < 1:
                break
        multiplier = math.sqrt(-2 * math.log(s) / s)
        self._next_gaussian = v2 * multiplier
        return v1 * multiplier


class PythonRandomSampler(Sampler):
    """Mersenne Twister backend; reproducible within Python only."""

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self._random = random.Random(seed)

    def uniform(self) -> float:
        return self._random.random()

    def gaussian(self) -> float:
        return self._random.gauss(0.0, 1.0)


_SAMPLERS: dict[str, type[Sampler]] = {
    "lcg": LinearCongruentialSampler,
    "python": PythonRandomSampler,
}


def create_sampler(name: str, seed: int = 0) -> Sampler:
    """Build a fresh sampler of the named backend."""
    key = (name or "").strip().lower()
    sampler_cls = _SAMPLERS.get(key)
    if sampler_cls is None:
        raise ConfigError(f"Unknown sampler: {name}")
    return sampler_cls(seed)
