"""Level tuples: one generated row of a synthetic relation."""

from collections.abc import Sequence
from typing import Any

from .quantizer import encode_id


class LevelTuple:
    """
    A row of levels together with the bounds it was generated under.

    `levels` and `objects` hold the same values (ints, and the same ints as a
    plain object tuple for consumers that want column values). `max_values`
    and `multipliers` are shared with the generator and must not be mutated.
    Lower levels are better when comparing tuples.
    """

    __slots__ = ("levels", "objects", "max_values", "multipliers", "_id")

    def __init__(
        self,
        levels: Sequence[int],
        objects: Sequence[Any],
        max_values: tuple[int, ...],
        multipliers: tuple[int, ...],
        tuple_id: int | None = None,
    ):
        if len(levels) != len(max_values) or len(objects) != len(levels):
            raise ValueError("levels, objects and max_values must have the same length")
        self.levels = tuple(levels)
        self.objects = tuple(objects)
        self.max_values = max_values
        self.multipliers = multipliers
        self._id = encode_id(self.levels, multipliers) if tuple_id is None else tuple_id

    @property
    def id(self) -> int:
        """Mixed-radix id, unique among all level vectors with the same bounds."""
        return self._id

    def __len__(self) -> int:
        return len(self.levels)

    def __getitem__(self, index: int) -> int:
        return self.levels[index]

    def __iter__(self):
        return iter(self.levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LevelTuple):
            return NotImplemented
        return self.levels == other.levels and self.max_values == other.max_values

    def __hash__(self) -> int:
        return hash((self.levels, self.max_values))

    def __repr__(self) -> str:
        return f"LevelTuple(id={self._id}, levels={list(self.levels)})"

    def dominates(self, other: "LevelTuple") -> bool:
        """True if self is at least as good in every column and better in one."""
        better = False
        for mine, theirs in zip(self.levels, other.levels, strict=True):
            if mine > theirs:
                return False
            if mine < theirs:
                better = True
        return better

    def compare(self, other: "LevelTuple") -> int:
        """-1 if self dominates other, 1 if other dominates self, 0 otherwise."""
        if self.dominates(other):
            return -1
        if other.dominates(self):
            return 1
        return 0

    def as_dict(self) -> dict[str, int]:
        """Row as column name -> value, with the id first."""
        row = {"id": self._id}
        for i, level in enumerate(self.levels):
            row[f"col{i}"] = level
        return row
