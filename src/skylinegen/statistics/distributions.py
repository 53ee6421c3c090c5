"""
Distribution shapes for synthetic preference relations.

Each strategy turns draws from a Sampler into one raw vector per tuple, with
every component in [0, 1]. The shapes are the classic skyline benchmark
families: independent, correlated, anti-correlated and Gaussian.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .sampler import Sampler


class Distribution(ABC):
    """Base class for tuple distributions."""

    name: str = ""

    @abstractmethod
    def sample(self, sampler: Sampler, n: int) -> list[float]:
        """Draw one raw vector of n values in [0, 1]."""
        pass


@dataclass
class IndependentDistribution(Distribution):
    """Every column uniform in [0, 1), independent of the others."""

    name = "independent"

    def sample(self, sampler: Sampler, n: int) -> list[float]:
        return [sampler.uniform() for _ in range(n)]


@dataclass
class GaussianDistribution(Distribution):
    """
    Every column normal around 0.5, truncated to [0, 1] by redrawing.

    With spread=6 the unit interval covers three standard deviations on
    either side, so redraws are rare.
    """

    name = "gaussian"

    spread: float = 6.0

    def __post_init__(self):
        if self.spread <= 0:
            raise ValueError("spread must be positive")

    def sample(self, sampler: Sampler, n: int) -> list[float]:
        result = []
        while len(result) < n:
            value = sampler.gaussian() / self.spread + 0.5
            if 0.0 <= value <= 1.0:
                result.append(value)
        return result


@dataclass
class CorrelatedDistribution(Distribution):
    """
    Columns move together: a uniform base value plus small normal jitter per column.

    Tuples cluster along the diagonal, so a tuple good in one column tends to
    be good in all of them and skylines stay small.
    """

    name = "correlated"

    jitter: float = 0.05

    def __post_init__(self):
        if self.jitter < 0:
            raise ValueError("jitter must be non-negative")

    def sample(self, sampler: Sampler, n: int) -> list[float]:
        base = sampler.uniform()
        result = []
        while len(result) < n:
            value = base + sampler.gaussian() * self.jitter
            if 0.0 <= value <= 1.0:
                result.append(value)
        return result


@dataclass
class AntiCorrelatedDistribution(Distribution):
    """
    Trade-off surface: a high first column pushes the other columns low.

    The first column is 0.5 plus a standard normal deviate, folded back into
    [0, 1]. The other columns are uniform between two circular arcs evaluated
    at the first value, low(x) and high(x). With the default borders
    low(x) = 1 - sqrt(1 - (1 - x)^2) and high(x) = sqrt(1 - x^2), so the band
    shrinks toward 0 as x approaches 1 and toward 1 as x approaches 0.
    """

    name = "anti_correlated"

    lower_border_x: float = 1.0
    lower_border_y: float = 1.0
    higher_border_x: float = 0.0
    higher_border_y: float = 0.0

    def low(self, x: float) -> float:
        bx, by = self.lower_border_x, self.lower_border_y
        return by - math.sqrt((bx - 1) * (bx - 1) + by * by - (bx - x) * (bx - x))

    def high(self, x: float) -> float:
        bx, by = self.higher_border_x, self.higher_border_y
        return math.sqrt(bx * bx + (1 + by) * (1 + by) - (bx + x) * (bx + x)) - by

    @staticmethod
    def fold(value: float) -> float:
        """Reflect a value into [0, 1]: negate negatives, mirror odd integer parts."""
        if value < 0.0:
            value = -value
        if value > 1.0:
            if int(value) % 2 == 0:
                value = value % 1
            else:
                value = 1 - (value % 1)
        return value

    def sample(self, sampler: Sampler, n: int) -> list[float]:
        result = [0.0] * n
        first = 0.5 + sampler.gaussian()
        if first == 1.0:
            result[0] = 1.0
            return result
        if first == 0.0:
            return [1.0] * n

        first = self.fold(first)
        result[0] = first
        low = self.low(first)
        distance = self.high(first) - low
        for i in range(1, n):
            result[i] = low + sampler.next_double() * distance
        return result


class DistributionFactory:
    """Factory for creating distributions from names and configuration dictionaries."""

    _ALIASES = {
        "independent": "independent",
        "uniform": "independent",
        "random": "independent",
        "correlated": "correlated",
        "anti_correlated": "anti_correlated",
        "anticorrelated": "anti_correlated",
        "anti": "anti_correlated",
        "gaussian": "gaussian",
        "normal": "gaussian",
    }

    @classmethod
    def names(cls) -> list[str]:
        """Canonical distribution names."""
        return sorted(set(cls._ALIASES.values()))

    @classmethod
    def canonical_name(cls, name: str) -> str:
        key = (name or "").strip().lower().replace("-", "_")
        canonical = cls._ALIASES.get(key)
        if canonical is None:
            raise ValueError(f"Unknown distribution type: {name}")
        return canonical

    @classmethod
    def create(cls, config: dict[str, Any]) -> Distribution:
        """
        Create a distribution from a configuration dictionary.

        Examples:
            {"distribution": "independent"}
            {"distribution": "gaussian", "spread": 8}
            {"distribution": "correlated", "jitter": 0.1}
            {"distribution": "anti_correlated", "lower_border_x": 1.5, "lower_border_y": 1.5}
        """
        dist_type = cls.canonical_name(config.get("distribution", "independent"))

        if dist_type == "independent":
            return IndependentDistribution()

        if dist_type == "gaussian":
            return GaussianDistribution(spread=float(config.get("spread", 6.0)))

        if dist_type == "correlated":
            return CorrelatedDistribution(jitter=float(config.get("jitter", 0.05)))

        return AntiCorrelatedDistribution(
            lower_border_x=float(config.get("lower_border_x", 1.0)),
            lower_border_y=float(config.get("lower_border_y", 1.0)),
            higher_border_x=float(config.get("higher_border_x", 0.0)),
            higher_border_y=float(config.get("higher_border_y", 0.0)),
        )
