"""Shared fixtures for generator tests."""

import pytest

from skylinegen.statistics.sampler import Sampler


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear generator env overrides so defaults apply unless a test sets them."""
    for name in ("SKYLINEGEN_SEED", "SKYLINEGEN_SAMPLER", "SKYLINEGEN_CONFIG"):
        monkeypatch.delenv(name, raising=False)


class ScriptedSampler(Sampler):
    """Sampler that replays fixed uniform and Gaussian values."""

    def __init__(self, uniforms=(), gaussians=()):
        super().__init__(0)
        self.uniforms = list(uniforms)
        self.gaussians = list(gaussians)

    def uniform(self) -> float:
        return self.uniforms.pop(0)

    def gaussian(self) -> float:
        return self.gaussians.pop(0)


@pytest.fixture
def scripted_sampler():
    """Factory for samplers with scripted draws."""
    return ScriptedSampler
