"""Tests for level quantization and mixed-radix ids."""

import itertools

import pytest

from skylinegen.levels import (
    LevelTuple,
    compute_multipliers,
    decode_id,
    encode_id,
    id_space_size,
    quantize,
    to_level,
)


def test_multipliers_are_place_values() -> None:
    """The last column has weight 1; each earlier weight multiplies in the next base."""
    assert compute_multipliers([9, 9]) == (10, 1)
    assert compute_multipliers([2, 3, 4]) == (20, 5, 1)
    assert compute_multipliers([5]) == (1,)
    assert compute_multipliers([0, 0, 3]) == (4, 4, 1)


def test_to_level_bounds() -> None:
    """Raw values scale onto 0..max, and exactly 1.0 is clamped to max."""
    assert to_level(0.0, 9) == 0
    assert to_level(0.5, 9) == 5
    assert to_level(0.999, 9) == 9
    assert to_level(1.0, 9) == 9
    assert to_level(1.0, 0) == 0


def test_quantize_returns_levels_and_id() -> None:
    """quantize() floors each column and encodes the id."""
    levels, tuple_id = quantize([0.31, 0.99, 1.0], [9, 4, 2])
    assert levels == (3, 4, 2)
    assert tuple_id == 3 * 15 + 4 * 3 + 2


def test_id_bijection_over_level_space() -> None:
    """Every level vector gets a distinct id and every id in range is used."""
    max_values = [2, 3, 1]
    multipliers = compute_multipliers(max_values)
    ids = [
        encode_id(levels, multipliers)
        for levels in itertools.product(*(range(m + 1) for m in max_values))
    ]
    assert id_space_size(max_values) == 24
    assert sorted(ids) == list(range(24))


def test_decode_inverts_encode() -> None:
    """decode_id() recovers the level vector."""
    max_values = [4, 0, 7]
    multipliers = compute_multipliers(max_values)
    for levels in itertools.product(*(range(m + 1) for m in max_values)):
        assert decode_id(encode_id(levels, multipliers), max_values) == levels


def test_decode_rejects_ids_outside_space() -> None:
    """Ids outside [0, size) are rejected."""
    with pytest.raises(ValueError):
        decode_id(100, [9, 9])
    with pytest.raises(ValueError):
        decode_id(-1, [9, 9])


def test_ids_independent_of_generator() -> None:
    """Separately computed multipliers for equal bounds give equal ids."""
    a = LevelTuple((3, 7), (3, 7), (9, 9), compute_multipliers([9, 9]))
    b = LevelTuple((3, 7), (3, 7), (9, 9), compute_multipliers((9, 9)))
    assert a.id == b.id == 37


def test_level_tuple_dominance() -> None:
    """Lower levels are better; dominance needs one strictly better column."""
    mult = compute_multipliers([9, 9])
    best = LevelTuple((1, 1), (1, 1), (9, 9), mult)
    worse = LevelTuple((1, 4), (1, 4), (9, 9), mult)
    other = LevelTuple((0, 8), (0, 8), (9, 9), mult)
    assert best.dominates(worse)
    assert not worse.dominates(best)
    assert not best.dominates(best)
    assert best.compare(worse) == -1
    assert worse.compare(best) == 1
    assert best.compare(other) == 0


def test_level_tuple_row_access() -> None:
    """Tuples behave like read-only sequences and render as id/colX rows."""
    row = LevelTuple((2, 0, 5), (2, 0, 5), (3, 3, 9), compute_multipliers([3, 3, 9]))
    assert len(row) == 3
    assert row[2] == 5
    assert list(row) == [2, 0, 5]
    assert row.as_dict() == {"id": 2 * 40 + 5, "col0": 2, "col1": 0, "col2": 5}


def test_level_tuple_length_mismatch() -> None:
    """Levels must match the column bounds."""
    with pytest.raises(ValueError):
        LevelTuple((1,), (1,), (9, 9), (10, 1))
