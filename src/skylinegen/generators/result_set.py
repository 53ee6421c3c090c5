"""
Cursor over a generated relation.

LevelResultSet drives a Distribution and the quantizer to produce LevelTuples
one at a time. It runs in one of two modes, fixed at construction:

- streaming: each next() draws a fresh tuple; peek() is not supported.
- in-memory: all rows are drawn up front into a buffer that next(), peek()
  and reset() replay exactly.

In both modes `offset` tuples are drawn and thrown away first, through the
same generation path, so an offset of k continues the sequence of a relation
with k more rows.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from ..config import GeneratorConfig, OffsetMode
from ..defaults import DEFAULT_MAX
from ..errors import ConfigError, CursorExhaustedError, UnsupportedCursorOperationError
from ..levels.level_tuple import LevelTuple
from ..levels.metadata import ColumnMetaData
from ..levels.quantizer import compute_multipliers, quantize
from ..statistics.distributions import Distribution, DistributionFactory
from ..statistics.sampler import Sampler, create_sampler

logger = logging.getLogger(__name__)


def _create_distribution(config: GeneratorConfig) -> Distribution:
    dist_config = dict(config.parameters)
    dist_config["distribution"] = config.distribution
    return DistributionFactory.create(dist_config)


@dataclass
class StreamingCursor:
    """Position within a relation generated on demand."""

    position: int = 0


@dataclass
class MaterializedCursor:
    """Position within a relation held in memory."""

    buffer: list[LevelTuple] = field(default_factory=list)
    position: int = 0


class LevelResultSet:
    """Forward-only cursor producing LevelTuples of one distribution."""

    def __init__(self, distribution: Distribution, config: GeneratorConfig):
        self.distribution = distribution
        self.config = config
        self.rows = config.rows
        self.max_values: tuple[int, ...] = config.max_values
        self._meta: ColumnMetaData | None = None
        self._init()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "LevelResultSet":
        """Build the distribution named in the config and wrap it in a cursor."""
        return cls(_create_distribution(config), config)

    def _init(self) -> None:
        """Seed the sampler, compute multipliers, skip the offset and materialize if asked."""
        self.sampler: Sampler = create_sampler(self.config.sampler, self.config.seed)
        self.multipliers: tuple[int, ...] = compute_multipliers(self.max_values)

        skip = self.config.offset
        if self.config.in_memory and self.config.offset_mode is OffsetMode.IGNORE_IN_MEMORY:
            skip = 0
        for _ in range(skip):
            self._generate()
        if skip:
            logger.debug("Discarded %d offset rows (%s)", skip, self.distribution.name)

        self._cursor: StreamingCursor | MaterializedCursor
        if self.config.in_memory:
            buffer = [self._generate() for _ in range(self.rows)]
            self._cursor = MaterializedCursor(buffer=buffer)
            logger.debug("Materialized %d rows (%s)", len(buffer), self.distribution.name)
        else:
            self._cursor = StreamingCursor()

    def _generate(self) -> LevelTuple:
        raw = self.distribution.sample(self.sampler, len(self.max_values))
        levels, tuple_id = quantize(raw, self.max_values, self.multipliers)
        return LevelTuple(levels, list(levels), self.max_values, self.multipliers, tuple_id)

    @property
    def in_memory(self) -> bool:
        return isinstance(self._cursor, MaterializedCursor)

    @property
    def position(self) -> int:
        """Number of rows returned since construction or the last reset."""
        return self._cursor.position

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> "LevelResultSet":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def has_next(self) -> bool:
        cursor = self._cursor
        if isinstance(cursor, MaterializedCursor):
            return cursor.position < len(cursor.buffer)
        return cursor.position < self.rows

    def next(self) -> LevelTuple:
        """Return the next row; raises CursorExhaustedError once all rows are consumed."""
        if not self.has_next():
            raise CursorExhaustedError(f"All {self.rows} rows have been returned")
        cursor = self._cursor
        if isinstance(cursor, MaterializedCursor):
            row = cursor.buffer[cursor.position]
        else:
            row = self._generate()
        cursor.position += 1
        return row

    def peek(self) -> LevelTuple:
        """Return the next row without consuming it (in-memory mode only)."""
        cursor = self._cursor
        if not isinstance(cursor, MaterializedCursor):
            raise UnsupportedCursorOperationError("peek is not supported")
        if cursor.position >= len(cursor.buffer):
            raise CursorExhaustedError(f"All {self.rows} rows have been returned")
        return cursor.buffer[cursor.position]

    def reset(self) -> None:
        """
        Rewind to the first row.

        In-memory relations replay the buffer. Streaming relations regenerate
        the same rows when replay_is_reproducible is set; otherwise only the
        row count is rewound and the following rows are new draws.
        """
        cursor = self._cursor
        if isinstance(cursor, MaterializedCursor):
            cursor.position = 0
        elif self.config.replay_is_reproducible:
            self._init()
        else:
            cursor.position = 0
        logger.debug("Reset %s result set", self.distribution.name)

    def supports_peek(self) -> bool:
        return self.in_memory

    def supports_reset(self) -> bool:
        return True

    def supports_remove(self) -> bool:
        return False

    def supports_update(self) -> bool:
        return False

    def remove(self) -> None:
        raise UnsupportedCursorOperationError("remove is not supported")

    def update(self, value: object) -> None:
        raise UnsupportedCursorOperationError("update is not supported")

    def get_meta_data(self) -> ColumnMetaData:
        if self._meta is None:
            self._meta = ColumnMetaData(self.max_values)
        return self._meta

    def get_elements(self) -> list[LevelTuple]:
        """Copy of the in-memory buffer; empty for streaming relations."""
        cursor = self._cursor
        if isinstance(cursor, MaterializedCursor):
            return list(cursor.buffer)
        return []

    def __iter__(self) -> Iterator[LevelTuple]:
        return self

    def __next__(self) -> LevelTuple:
        if not self.has_next():
            raise StopIteration
        return self.next()


def _with_distribution(config: GeneratorConfig, distribution: str, **parameters) -> GeneratorConfig:
    """Copy of config naming `distribution`; non-None parameters override its own."""
    merged = dict(config.parameters)
    merged.update({k: v for k, v in parameters.items() if v is not None})
    return replace(config, distribution=distribution, parameters=merged)


class IndependentResultSet(LevelResultSet):
    """Relation with independent, uniformly distributed columns."""

    def __init__(self, config: GeneratorConfig):
        config = _with_distribution(config, "independent")
        super().__init__(_create_distribution(config), config)


class CorrelatedResultSet(LevelResultSet):
    """Relation whose columns rise and fall together."""

    def __init__(self, config: GeneratorConfig, jitter: float | None = None):
        config = _with_distribution(config, "correlated", jitter=jitter)
        super().__init__(_create_distribution(config), config)


class AntiCorrelatedResultSet(LevelResultSet):
    """Relation where a good first column implies poor remaining columns."""

    def __init__(self, config: GeneratorConfig, **borders: float):
        config = _with_distribution(config, "anti_correlated", **borders)
        super().__init__(_create_distribution(config), config)


class GaussianResultSet(LevelResultSet):
    """Relation with truncated normal columns centered on the middle level."""

    def __init__(self, config: GeneratorConfig, spread: float | None = None):
        config = _with_distribution(config, "gaussian", spread=spread)
        super().__init__(_create_distribution(config), config)


def create_result_set(
    distribution: str,
    rows: int,
    columns: int | None = None,
    max_values: list[int] | tuple[int, ...] | None = None,
    maximum_level: int = DEFAULT_MAX,
    offset: int = 0,
    seed: int | None = None,
    in_memory: bool = False,
    **options,
) -> LevelResultSet:
    """
    Build a result set from keyword arguments.

    Pass either `max_values` (one inclusive bound per column) or `columns`, in
    which case every column gets `maximum_level`. Remaining options are
    GeneratorConfig fields (sampler, offset_mode, replay_is_reproducible) or
    distribution parameters (spread, jitter, *_border_*). An omitted seed or
    sampler comes from SKYLINEGEN_SEED / SKYLINEGEN_SAMPLER, as in
    GeneratorConfig.from_config.
    """
    if max_values is None and columns is None:
        raise ConfigError("Either columns or max_values is required")
    config_keys = ("sampler", "offset_mode", "replay_is_reproducible")
    values = {k: options.pop(k) for k in config_keys if k in options}
    values.update(
        distribution=distribution,
        max_values=None if max_values is None else list(max_values),
        columns=columns,
        maximum_level=maximum_level,
        rows=rows,
        offset=offset,
        seed=seed,
        in_memory=in_memory,
        parameters=options,
    )
    return LevelResultSet.from_config(GeneratorConfig.from_config(values))
