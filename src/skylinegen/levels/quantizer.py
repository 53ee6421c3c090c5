"""
Quantization of raw vectors into levels, and mixed-radix tuple ids.

Column i has max_values[i] + 1 possible levels. Reading a level vector as a
number whose digit i has base max_values[i] + 1 gives every vector a unique id
in [0, prod(max_values[i] + 1)). The place values (multipliers) depend only on
max_values, so generators with the same bounds agree on ids.
"""

import math
from collections.abc import Sequence


def compute_multipliers(max_values: Sequence[int]) -> tuple[int, ...]:
    """Place value of each column; the last column has weight 1."""
    n = len(max_values)
    if n == 0:
        return ()
    mult = [1] * n
    for i in range(n - 1, 0, -1):
        mult[i - 1] = mult[i] * (max_values[i] + 1)
    return tuple(mult)


def id_space_size(max_values: Sequence[int]) -> int:
    """Number of distinct level vectors (and ids) for the given bounds."""
    return math.prod(m + 1 for m in max_values)


def encode_id(levels: Sequence[int], multipliers: Sequence[int]) -> int:
    return sum(level * mult for level, mult in zip(levels, multipliers, strict=True))


def decode_id(tuple_id: int, max_values: Sequence[int]) -> tuple[int, ...]:
    """Inverse of encode_id: recover the level vector from an id."""
    if not 0 <= tuple_id < id_space_size(max_values):
        raise ValueError(f"id {tuple_id} outside id space of {list(max_values)}")
    levels = []
    for mult in compute_multipliers(max_values):
        level, tuple_id = divmod(tuple_id, mult)
        levels.append(level)
    return tuple(levels)


def to_level(value: float, maximum: int) -> int:
    """Map a raw value in [0, 1] onto 0..maximum; 1.0 lands on maximum."""
    level = int(value * (maximum + 1))
    return min(max(level, 0), maximum)


def quantize(
    raw: Sequence[float],
    max_values: Sequence[int],
    multipliers: Sequence[int] | None = None,
) -> tuple[tuple[int, ...], int]:
    """Return (levels, id) for one raw vector."""
    if multipliers is None:
        multipliers = compute_multipliers(max_values)
    levels = tuple(to_level(v, m) for v, m in zip(raw, max_values, strict=True))
    return levels, encode_id(levels, multipliers)
