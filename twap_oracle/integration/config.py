"""
Oracle configuration.

Precedence (lowest to highest):
1. dataclass defaults,
2. a YAML mapping file (`yaml.safe_load`),
3. environment overrides:
   - TWAP_WINDOW_SIZE_SECONDS
   - TWAP_MAX_STALENESS_MULTIPLIER
   - TWAP_MIN_RESERVE

Environment values that do not parse fall back to the lower-precedence value;
parsed values are clamped into range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..core.twap.guards import is_valid_window_size
from ..errors import InvalidWindowSizeError
from ..kernels.python.uq112x112 import U112_MAX

DEFAULT_WINDOW_SIZE_SECONDS = 24 * 60 * 60
MAX_WINDOW_SIZE_SECONDS = (1 << 32) - 1
MAX_STALENESS_MULTIPLIER = 1_000


def _env_int(env: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


@dataclass(frozen=True)
class OracleConfig:
    """Runtime config for one windowed oracle and its consumer wrapper."""

    window_size_seconds: int = DEFAULT_WINDOW_SIZE_SECONDS
    max_staleness_multiplier: int = 2
    min_reserve: int = 0

    def __post_init__(self) -> None:
        if not is_valid_window_size(self.window_size_seconds):
            raise InvalidWindowSizeError(
                f"window_size_seconds must be in (0, 2**32): {self.window_size_seconds!r}"
            )
        for name, val in (
            ("max_staleness_multiplier", self.max_staleness_multiplier),
            ("min_reserve", self.min_reserve),
        ):
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"{name} must be an int")
        if not (1 <= self.max_staleness_multiplier <= MAX_STALENESS_MULTIPLIER):
            raise ValueError(
                f"max_staleness_multiplier must be in [1, {MAX_STALENESS_MULTIPLIER}]: "
                f"{self.max_staleness_multiplier}"
            )
        if not (0 <= self.min_reserve <= U112_MAX):
            raise ValueError(f"min_reserve must be a u112: {self.min_reserve}")

    @property
    def max_staleness_seconds(self) -> int:
        return self.window_size_seconds * self.max_staleness_multiplier


def config_from_mapping(obj: Mapping[str, Any], base: Optional[OracleConfig] = None) -> OracleConfig:
    """Overlay `obj` onto `base` (defaults if None). Unknown keys raise ValueError."""
    if not isinstance(obj, Mapping):
        raise TypeError("oracle config must be a mapping")
    known = {f.name for f in fields(OracleConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown oracle config keys: {', '.join(map(str, unknown))}")
    return replace(base or OracleConfig(), **dict(obj))


def apply_env_overrides(config: OracleConfig, env: Optional[Mapping[str, str]] = None) -> OracleConfig:
    env = os.environ if env is None else env
    return replace(
        config,
        window_size_seconds=_env_int(
            env, "TWAP_WINDOW_SIZE_SECONDS", config.window_size_seconds,
            lo=1, hi=MAX_WINDOW_SIZE_SECONDS,
        ),
        max_staleness_multiplier=_env_int(
            env, "TWAP_MAX_STALENESS_MULTIPLIER", config.max_staleness_multiplier,
            lo=1, hi=MAX_STALENESS_MULTIPLIER,
        ),
        min_reserve=_env_int(
            env, "TWAP_MIN_RESERVE", config.min_reserve,
            lo=0, hi=U112_MAX,
        ),
    )


def load_config(
    path: Optional[str | Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> OracleConfig:
    """Build an OracleConfig from defaults, an optional YAML file, and the environment."""
    config = OracleConfig()
    if path is not None:
        obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if obj is None:
            obj = {}
        config = config_from_mapping(obj, config)
    return apply_env_overrides(config, env)
