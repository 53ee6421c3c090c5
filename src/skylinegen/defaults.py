"""
Generator defaults, with overrides from the environment.

SKYLINEGEN_SEED and SKYLINEGEN_SAMPLER change the seed and sampler backend used
when a config does not name them; SKYLINEGEN_CONFIG points the CLI at a YAML
config file.
"""

import os
from pathlib import Path

from .errors import ConfigError

# Highest level of a column when only a column count is given; levels are 0..DEFAULT_MAX.
DEFAULT_MAX = 10
DEFAULT_SEED = 0
DEFAULT_SAMPLER = "lcg"
DEFAULT_DISTRIBUTION = "independent"

SAMPLER_NAMES = ("lcg", "python")


def get_default_seed() -> int:
    """Seed from SKYLINEGEN_SEED, else DEFAULT_SEED."""
    raw = os.environ.get("SKYLINEGEN_SEED", "").strip()
    if not raw:
        return DEFAULT_SEED
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"SKYLINEGEN_SEED must be an integer, got {raw!r}") from None


def get_default_sampler() -> str:
    """Sampler backend from SKYLINEGEN_SAMPLER, else DEFAULT_SAMPLER."""
    raw = os.environ.get("SKYLINEGEN_SAMPLER", "").strip().lower()
    if not raw:
        return DEFAULT_SAMPLER
    if raw not in SAMPLER_NAMES:
        raise ConfigError(
            f"SKYLINEGEN_SAMPLER must be one of {', '.join(SAMPLER_NAMES)}, got {raw!r}"
        )
    return raw


def get_default_config_path() -> Path | None:
    """Config file path from SKYLINEGEN_CONFIG, or None when unset."""
    raw = os.environ.get("SKYLINEGEN_CONFIG", "").strip()
    return Path(raw) if raw else None
