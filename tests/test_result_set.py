"""Tests for the result set cursor."""

import pytest

from skylinegen.config import GeneratorConfig, OffsetMode
from skylinegen.errors import CursorExhaustedError, UnsupportedCursorOperationError
from skylinegen.generators import (
    AntiCorrelatedResultSet,
    GaussianResultSet,
    IndependentResultSet,
    LevelResultSet,
    create_result_set,
)
from skylinegen.levels import ColumnMetaData

DISTRIBUTIONS = ["independent", "correlated", "anti_correlated", "gaussian"]


def _rows(result_set: LevelResultSet) -> list[tuple[int, ...]]:
    return [row.levels for row in result_set]


def _make(distribution: str = "independent", **kwargs) -> LevelResultSet:
    kwargs.setdefault("max_values", [9, 9])
    kwargs.setdefault("rows", 20)
    kwargs.setdefault("seed", 42)
    return create_result_set(distribution, **kwargs)


def test_concrete_independent_relation() -> None:
    """[9, 9], 3 rows, seed 42: levels in bounds, ids are level0 * 10 + level1."""
    result_set = _make(rows=3)
    rows = list(result_set)
    assert len(rows) == 3
    for row in rows:
        assert all(0 <= level <= 9 for level in row.levels)
        assert 0 <= row.id <= 99
        assert row.id == row.levels[0] * 10 + row.levels[1]
    # seed 42 draws 0.7275... and 0.6832... first
    assert rows[0].levels == (7, 6)
    assert rows[0].id == 76


@pytest.mark.parametrize("distribution", DISTRIBUTIONS)
@pytest.mark.parametrize("in_memory", [False, True])
def test_determinism(distribution: str, in_memory: bool) -> None:
    """Two result sets with the same parameters produce identical rows and ids."""
    a = _make(distribution, in_memory=in_memory, offset=3)
    b = _make(distribution, in_memory=in_memory, offset=3)
    rows_a = [(row.levels, row.id) for row in a]
    rows_b = [(row.levels, row.id) for row in b]
    assert rows_a == rows_b


@pytest.mark.parametrize("distribution", DISTRIBUTIONS)
@pytest.mark.parametrize("sampler", ["lcg", "python"])
def test_levels_within_bounds(distribution: str, sampler: str) -> None:
    """Every level lies in [0, max] for mixed bounds, including a single-level column."""
    result_set = _make(distribution, max_values=[0, 3, 7, 20], rows=500, sampler=sampler)
    for row in result_set:
        for level, maximum in zip(row.levels, (0, 3, 7, 20)):
            assert 0 <= level <= maximum


@pytest.mark.parametrize("in_memory", [False, True])
def test_row_count(in_memory: bool) -> None:
    """A drained cursor yields exactly `rows` tuples, then reports no more."""
    result_set = _make(rows=17, in_memory=in_memory)
    count = 0
    while result_set.has_next():
        result_set.next()
        count += 1
    assert count == 17
    assert not result_set.has_next()
    if in_memory:
        assert len(result_set.get_elements()) == 17


@pytest.mark.parametrize("in_memory", [False, True])
def test_next_past_end_raises(in_memory: bool) -> None:
    """next() after exhaustion is a hard failure."""
    result_set = _make(rows=2, in_memory=in_memory)
    result_set.next()
    result_set.next()
    with pytest.raises(CursorExhaustedError):
        result_set.next()


def test_zero_rows() -> None:
    """An empty relation has no rows in either mode."""
    assert list(_make(rows=0)) == []
    assert _make(rows=0, in_memory=True).get_elements() == []


@pytest.mark.parametrize("distribution", DISTRIBUTIONS)
@pytest.mark.parametrize("in_memory", [False, True])
def test_offset_continues_longer_relation(distribution: str, in_memory: bool) -> None:
    """Offset k with r rows equals the last r rows of offset 0 with k + r rows."""
    shifted = _rows(_make(distribution, rows=10, offset=5, in_memory=in_memory))
    full = _rows(_make(distribution, rows=15, in_memory=in_memory))
    assert shifted == full[5:]


def test_offset_ignored_in_memory_when_configured() -> None:
    """IGNORE_IN_MEMORY materializes from the first draw, ignoring the offset."""
    ignored = _make(rows=10, offset=5, in_memory=True, offset_mode="ignore_in_memory")
    unshifted = _make(rows=10, in_memory=True)
    assert ignored.config.offset_mode is OffsetMode.IGNORE_IN_MEMORY
    assert _rows(ignored) == _rows(unshifted)


def test_offset_mode_does_not_affect_streaming() -> None:
    """Streaming relations skip the offset under either offset mode."""
    skipped = _rows(_make(rows=10, offset=5, offset_mode=OffsetMode.IGNORE_IN_MEMORY))
    assert skipped == _rows(_make(rows=15))[5:]


def test_peek_is_idempotent_in_memory() -> None:
    """peek() returns the same row repeatedly and next() then returns it."""
    result_set = _make(in_memory=True)
    result_set.next()
    peeked = result_set.peek()
    assert result_set.peek() is peeked
    assert result_set.peek() is peeked
    assert result_set.position == 1
    assert result_set.next() is peeked
    assert result_set.position == 2


def test_peek_past_end_raises() -> None:
    """peek() on a drained in-memory cursor is a hard failure."""
    result_set = _make(rows=1, in_memory=True)
    result_set.next()
    with pytest.raises(CursorExhaustedError):
        result_set.peek()


def test_peek_unsupported_when_streaming() -> None:
    """Streaming cursors cannot look ahead."""
    result_set = _make()
    assert not result_set.supports_peek()
    with pytest.raises(UnsupportedCursorOperationError):
        result_set.peek()


@pytest.mark.parametrize("in_memory", [False, True])
def test_remove_and_update_unsupported(in_memory: bool) -> None:
    """remove() and update() always fail."""
    result_set = _make(in_memory=in_memory)
    assert not result_set.supports_remove()
    assert not result_set.supports_update()
    assert result_set.supports_reset()
    assert result_set.supports_peek() is in_memory
    with pytest.raises(UnsupportedCursorOperationError):
        result_set.remove()
    with pytest.raises(UnsupportedCursorOperationError):
        result_set.update(result_set.next())


def test_reset_replays_buffer_in_memory() -> None:
    """In-memory reset replays the identical tuple objects."""
    result_set = _make(in_memory=True, offset=2)
    first = list(result_set)
    result_set.reset()
    second = list(result_set)
    assert len(first) == 20
    assert all(a is b for a, b in zip(first, second))


def test_reset_reproducible_when_streaming() -> None:
    """With replay_is_reproducible, streaming reset regenerates the same rows."""
    result_set = _make(offset=4, replay_is_reproducible=True)
    first = _rows(result_set)
    result_set.reset()
    assert result_set.has_next()
    assert _rows(result_set) == first


def test_reset_rewind_only_when_streaming() -> None:
    """Without reproducible replay, reset rewinds the count and keeps drawing new rows."""
    result_set = _make(rows=10, replay_is_reproducible=False)
    first = _rows(result_set)
    result_set.reset()
    second = _rows(result_set)
    full = _rows(_make(rows=20))
    assert first == full[:10]
    assert second == full[10:]


def test_get_elements_is_a_copy() -> None:
    """Mutating the returned list does not affect the cursor."""
    result_set = _make(rows=5, in_memory=True)
    elements = result_set.get_elements()
    elements.clear()
    assert len(result_set.get_elements()) == 5
    assert len(list(result_set)) == 5


def test_get_elements_empty_when_streaming() -> None:
    """Streaming relations hold no buffer."""
    assert _make().get_elements() == []


def test_meta_data_describes_columns() -> None:
    """Metadata lists the id column and one colX per data column, and is cached."""
    result_set = _make(max_values=[9, 4, 2])
    meta = result_set.get_meta_data()
    assert isinstance(meta, ColumnMetaData)
    assert meta is result_set.get_meta_data()
    assert meta.column_count == 4
    assert meta.column_names == ["id", "col0", "col1", "col2"]
    assert meta.max_value(1) == 4
    assert meta.min_value(2) == 0


def test_rows_share_generator_bounds() -> None:
    """Tuples reference the generator's bounds and multipliers instead of copying them."""
    result_set = _make(in_memory=True)
    rows = result_set.get_elements()
    assert all(row.max_values is result_set.max_values for row in rows)
    assert all(row.multipliers is result_set.multipliers for row in rows)
    assert result_set.multipliers == (10, 1)


def test_columns_with_default_maximum() -> None:
    """A column count alone gives every column levels 0..10."""
    result_set = create_result_set("gaussian", rows=200, columns=3, seed=1)
    assert result_set.max_values == (10, 10, 10)
    assert max(max(levels) for levels in _rows(result_set)) <= 10


def test_open_close_and_context_manager() -> None:
    """open() and close() are no-ops; the cursor works as a context manager."""
    result_set = _make(rows=3)
    result_set.open()
    result_set.close()
    with result_set as rs:
        assert len(list(rs)) == 3


def test_convenience_subclasses_match_factory() -> None:
    """Named result set classes produce the same rows as the factory."""
    config = GeneratorConfig(max_values=(9, 9), rows=25, seed=8)
    assert _rows(IndependentResultSet(config)) == _rows(_make("independent", rows=25, seed=8))
    assert _rows(GaussianResultSet(config)) == _rows(_make("gaussian", rows=25, seed=8))
    assert _rows(AntiCorrelatedResultSet(config)) == _rows(_make("anti_correlated", rows=25, seed=8))


def test_distribution_parameters_flow_through() -> None:
    """Extra keyword options reach the distribution."""
    result_set = create_result_set("gaussian", rows=1, max_values=[9], spread=12)
    assert result_set.distribution.spread == 12.0


def test_convenience_subclasses_record_their_distribution() -> None:
    """A named result set's config describes the relation it produces."""
    config = GeneratorConfig(max_values=(9, 9), rows=10, seed=3, distribution="correlated")
    result_set = GaussianResultSet(config, spread=8)
    assert result_set.config.distribution == "gaussian"
    assert result_set.config.parameters == {"spread": 8}
    assert config.distribution == "correlated"

    rebuilt = LevelResultSet.from_config(GeneratorConfig.from_config(result_set.config.to_dict()))
    assert _rows(rebuilt) == _rows(result_set)


def test_convenience_subclass_keeps_config_parameters() -> None:
    """Parameters already in the config apply unless given explicitly."""
    config = GeneratorConfig(max_values=(9,), rows=1, parameters={"spread": 10})
    assert GaussianResultSet(config).distribution.spread == 10.0
    assert GaussianResultSet(config, spread=4).distribution.spread == 4.0
    assert IndependentResultSet(config).config.distribution == "independent"


def test_create_result_set_uses_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Omitted seed and sampler come from the environment, as for configs."""
    expected = _rows(_make(seed=42, sampler="python"))
    monkeypatch.setenv("SKYLINEGEN_SEED", "42")
    monkeypatch.setenv("SKYLINEGEN_SAMPLER", "python")
    result_set = create_result_set("independent", rows=20, max_values=[9, 9])
    assert result_set.config.seed == 42
    assert result_set.config.sampler == "python"
    assert _rows(result_set) == expected
    assert create_result_set("independent", rows=1, columns=2, seed=7).config.seed == 7
