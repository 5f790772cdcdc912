"""State construction and serialization for the windowed TWAP engine.

`initial_state()` builds the zero-length baseline window from a first sample.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` for all valid states.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from ...errors import InvalidWindowSizeError
from .guards import is_valid_window_size
from .types import PriceIntegralSample, WindowState

STATE_VAR_NAMES: tuple[str, ...] = (
    "last_integral0",
    "last_integral1",
    "last_timestamp",
    "window_size_seconds",
    "average0",
    "average1",
    "update_count",
)


def initial_state(sample: PriceIntegralSample, window_size_seconds: int) -> WindowState:
    """Return the baseline state: `sample` as the last sample, averages unset.

    Raises InvalidWindowSizeError unless `window_size_seconds` is a positive u32.
    """
    if not is_valid_window_size(window_size_seconds):
        raise InvalidWindowSizeError(f"window size must be in (0, 2**32): {window_size_seconds!r}")
    return WindowState(last_sample=sample, window_size_seconds=window_size_seconds)


def state_to_dict(state: WindowState) -> dict[str, int]:
    """Serialize a WindowState to a flat dict of ints."""
    return {
        "last_integral0": state.last_sample.integral0,
        "last_integral1": state.last_sample.integral1,
        "last_timestamp": state.last_sample.timestamp,
        "window_size_seconds": state.window_size_seconds,
        "average0": state.average0,
        "average1": state.average1,
        "update_count": state.update_count,
    }


def state_from_dict(d: Mapping[str, Any]) -> WindowState:
    """Deserialize a dict to a WindowState. Raises KeyError on missing fields."""
    kwargs: dict[str, int] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if not isinstance(val, int) or isinstance(val, bool):
            raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
        kwargs[name] = int(val)
    sample = PriceIntegralSample(
        integral0=kwargs["last_integral0"],
        integral1=kwargs["last_integral1"],
        timestamp=kwargs["last_timestamp"],
    )
    state = initial_state(sample, kwargs["window_size_seconds"])
    return replace(
        state,
        average0=kwargs["average0"],
        average1=kwargs["average1"],
        update_count=kwargs["update_count"],
    )
