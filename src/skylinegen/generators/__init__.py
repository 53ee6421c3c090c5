"""Result set cursors over generated relations."""

from .result_set import (
    AntiCorrelatedResultSet,
    CorrelatedResultSet,
    GaussianResultSet,
    IndependentResultSet,
    LevelResultSet,
    MaterializedCursor,
    StreamingCursor,
    create_result_set,
)

__all__ = [
    "LevelResultSet",
    "StreamingCursor",
    "MaterializedCursor",
    "IndependentResultSet",
    "CorrelatedResultSet",
    "AntiCorrelatedResultSet",
    "GaussianResultSet",
    "create_result_set",
]
