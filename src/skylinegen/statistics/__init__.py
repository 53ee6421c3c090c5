"""Seeded samplers, distribution shapes and relation statistics."""

from .correlations import RelationSummary, correlation_matrix, pearson, summarize
from .distributions import (
    AntiCorrelatedDistribution,
    CorrelatedDistribution,
    Distribution,
    DistributionFactory,
    GaussianDistribution,
    IndependentDistribution,
)
from .sampler import (
    LinearCongruentialSampler,
    PythonRandomSampler,
    Sampler,
    create_sampler,
)

__all__ = [
    "Sampler",
    "LinearCongruentialSampler",
    "PythonRandomSampler",
    "create_sampler",
    "Distribution",
    "IndependentDistribution",
    "CorrelatedDistribution",
    "AntiCorrelatedDistribution",
    "GaussianDistribution",
    "DistributionFactory",
    "RelationSummary",
    "pearson",
    "correlation_matrix",
    "summarize",
]
