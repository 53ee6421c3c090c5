"""
Correlation and summary statistics for generated relations.

Used to check that a relation has the intended shape: near-zero pairwise
correlation for independent data, positive for correlated, negative for
anti-correlated.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from statistics import fmean

from ..levels.level_tuple import LevelTuple


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two equally long samples.

    Returns 0.0 when either sample is constant (or has fewer than two values),
    since no linear relationship can be measured.
    """
    if len(xs) != len(ys):
        raise ValueError("Samples must have the same length")
    if len(xs) < 2:
        return 0.0
    mean_x = fmean(xs)
    mean_y = fmean(ys)
    sxy = sxx = syy = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        sxy += dx * dy
        sxx += dx * dx
        syy += dy * dy
    if sxx == 0.0 or syy == 0.0:
        return 0.0
    return sxy / math.sqrt(sxx * syy)


def correlation_matrix(columns: Sequence[Sequence[float]]) -> list[list[float]]:
    """Pairwise Pearson coefficients; the diagonal is 1.0."""
    n = len(columns)
    matrix = [[1.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            r = pearson(columns[i], columns[j])
            matrix[i][j] = r
            matrix[j][i] = r
    return matrix


@dataclass
class RelationSummary:
    """Per-column statistics of a relation."""

    rows: int = 0
    minimums: list[int] = field(default_factory=list)
    maximums: list[int] = field(default_factory=list)
    means: list[float] = field(default_factory=list)
    correlations: list[list[float]] = field(default_factory=list)

    @property
    def columns(self) -> int:
        return len(self.means)

    def mean_correlation(self) -> float:
        """Average of the off-diagonal correlation coefficients."""
        n = len(self.correlations)
        if n < 2:
            return 0.0
        off_diagonal = [self.correlations[i][j] for i in range(n) for j in range(n) if i != j]
        return fmean(off_diagonal)


def summarize(tuples: Iterable[LevelTuple]) -> RelationSummary:
    """Summarize the level columns of a relation."""
    columns: list[list[int]] = []
    rows = 0
    for row in tuples:
        if not columns:
            columns = [[] for _ in range(len(row))]
        for values, level in zip(columns, row.levels, strict=True):
            values.append(level)
        rows += 1

    if rows == 0:
        return RelationSummary()

    return RelationSummary(
        rows=rows,
        minimums=[min(c) for c in columns],
        maximums=[max(c) for c in columns],
        means=[fmean(c) for c in columns],
        correlations=correlation_matrix(columns),
    )
