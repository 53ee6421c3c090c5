"""
Configuration for synthetic relation generation.

A GeneratorConfig fixes everything that determines the produced relation:
column bounds, row count, offset, seed, sampler backend and distribution.
Configs can be built directly, from a plain dict, or from a YAML file whose
top level is either the config mapping itself or holds it under `generator:`.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .defaults import (
    DEFAULT_DISTRIBUTION,
    DEFAULT_MAX,
    SAMPLER_NAMES,
    get_default_sampler,
    get_default_seed,
)
from .errors import ConfigError
from .statistics.distributions import DistributionFactory


class OffsetMode(Enum):
    """How the offset interacts with in-memory materialization."""

    # Offset rows are drawn and discarded before the buffer is filled.
    SKIP = "skip"
    # In-memory relations ignore the offset; streaming still skips it.
    IGNORE_IN_MEMORY = "ignore_in_memory"


def load_yaml(path: Path, default: Any = None) -> Any:
    """Load YAML file; return default on missing file or parse error."""
    if default is None:
        default = {}
    if not path.exists():
        return default
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return default
    return data if isinstance(data, dict) else default


_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _int_value(config: dict[str, Any], key: str, default: int | None) -> int | None:
    if key not in config:
        return default
    value = config[key]
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None


def _bool_value(config: dict[str, Any], key: str, default: bool) -> bool:
    if key not in config:
        return default
    value = config[key]
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def merge_config(
    base: dict[str, Any],
    overrides: dict[str, Any] | None = None,
    defaults: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Layer `overrides` over `base`, then fill remaining gaps from `defaults`.

    None values count as unset. An override of `columns` or `maximum_level`
    replaces list bounds from `base`; without a `columns` override the column
    count of those bounds is kept. A default `columns` applies only when
    neither layer defines the relation's columns.
    """
    merged = {k: v for k, v in base.items() if v is not None}
    given = {k: v for k, v in (overrides or {}).items() if v is not None}

    if "max_values" not in given and ("columns" in given or "maximum_level" in given):
        bounds = merged.get("max_values")
        if isinstance(bounds, (list, tuple)):
            del merged["max_values"]
            if "columns" not in given:
                merged["columns"] = len(bounds)
    merged.update(given)

    for key, value in (defaults or {}).items():
        if value is None or (key == "columns" and "max_values" in merged):
            continue
        merged.setdefault(key, value)
    return merged


@dataclass
class GeneratorConfig:
    """Parameters of one generated relation."""

    max_values: tuple[int, ...]
    rows: int = 0
    offset: int = 0
    seed: int = 0
    in_memory: bool = False
    distribution: str = DEFAULT_DISTRIBUTION
    sampler: str = "lcg"
    offset_mode: OffsetMode = OffsetMode.SKIP
    replay_is_reproducible: bool = True
    parameters: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.max_values = tuple(int(m) for m in self.max_values)
        if not self.max_values:
            raise ConfigError("At least one column is required")
        if any(m < 0 for m in self.max_values):
            raise ConfigError(f"max_values must be non-negative, got {list(self.max_values)}")
        if self.rows < 0:
            raise ConfigError(f"rows must be non-negative, got {self.rows}")
        if self.offset < 0:
            raise ConfigError(f"offset must be non-negative, got {self.offset}")
        try:
            self.distribution = DistributionFactory.canonical_name(self.distribution)
        except ValueError as e:
            raise ConfigError(str(e)) from None
        self.sampler = self.sampler.strip().lower()
        if self.sampler not in SAMPLER_NAMES:
            raise ConfigError(
                f"sampler must be one of {', '.join(SAMPLER_NAMES)}, got {self.sampler!r}"
            )
        if not isinstance(self.offset_mode, OffsetMode):
            try:
                self.offset_mode = OffsetMode(str(self.offset_mode).strip().lower())
            except ValueError:
                raise ConfigError(f"Unknown offset_mode: {self.offset_mode}") from None

    @property
    def columns(self) -> int:
        """Number of generated columns (the id column not counted)."""
        return len(self.max_values)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "GeneratorConfig":
        """
        Create a GeneratorConfig from a config dictionary.

        Column bounds come from `max_values` when given, otherwise from
        `columns` repeated at `maximum_level` (default DEFAULT_MAX). Keys set
        to None (an empty YAML value) fall back to their defaults; seed and
        sampler defaults are read from the environment only when needed.

        Example:
            {"distribution": "anti_correlated", "columns": 3, "rows": 1000, "seed": 7}
        """
        config = {k: v for k, v in config.items() if v is not None}

        max_values = config.get("max_values")
        if max_values is None:
            if "columns" not in config:
                raise ConfigError("Config must define max_values or columns")
            columns = _int_value(config, "columns", 0)
            maximum = _int_value(config, "maximum_level", DEFAULT_MAX)
            max_values = [maximum] * columns
        elif not isinstance(max_values, (list, tuple)):
            raise ConfigError("max_values must be a list of integers")
        else:
            try:
                max_values = [int(m) for m in max_values]
            except (TypeError, ValueError):
                raise ConfigError(f"max_values must be a list of integers, got {max_values!r}") from None

        parameters = config.get("parameters", {})
        if not isinstance(parameters, dict):
            raise ConfigError("parameters must be a mapping")

        seed = _int_value(config, "seed", None)
        sampler = config.get("sampler")
        return cls(
            max_values=tuple(max_values),
            rows=_int_value(config, "rows", 0),
            offset=_int_value(config, "offset", 0),
            seed=get_default_seed() if seed is None else seed,
            in_memory=_bool_value(config, "in_memory", False),
            distribution=str(config.get("distribution", DEFAULT_DISTRIBUTION)),
            sampler=get_default_sampler() if sampler is None else str(sampler),
            offset_mode=config.get("offset_mode", OffsetMode.SKIP),
            replay_is_reproducible=_bool_value(config, "replay_is_reproducible", True),
            parameters=dict(parameters),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, suitable for YAML dumping and from_config()."""
        return {
            "distribution": self.distribution,
            "max_values": list(self.max_values),
            "rows": self.rows,
            "offset": self.offset,
            "seed": self.seed,
            "in_memory": self.in_memory,
            "sampler": self.sampler,
            "offset_mode": self.offset_mode.value,
            "replay_is_reproducible": self.replay_is_reproducible,
            "parameters": dict(self.parameters),
        }


def load_generator_config(
    path: Path,
    overrides: dict[str, Any] | None = None,
    defaults: dict[str, Any] | None = None,
) -> GeneratorConfig:
    """
    Load a GeneratorConfig from a YAML file.

    Keys in `overrides` (e.g. from the CLI) win over the file, and `defaults`
    fill whatever neither sets (see merge_config). A missing or unreadable
    file raises ConfigError rather than falling back silently.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    data = load_yaml(path, default=None)
    if not data:
        raise ConfigError(f"Config file is empty or invalid: {path}")
    section = data.get("generator", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'generator' section must be a mapping in {path}")
    return GeneratorConfig.from_config(merge_config(section, overrides, defaults))
