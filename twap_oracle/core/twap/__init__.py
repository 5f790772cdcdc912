"""`twap`: pure-Python windowed TWAP oracle core.

- deterministic, integer-only transitions (UQ112x112 fixed point),
- immutable state (frozen dataclasses),
- fail-closed guards and invariant checks.

Public API:
- `current_sample(source, now) -> PriceIntegralSample`
- `initial_state(sample, window_size_seconds) -> WindowState`
- `step(state, params) -> StepResult`
- `step_or_raise(state, params) -> StepResult` (raises on rejection)
- `convert0to1(state, amount)`, `convert1to0(state, amount)`, `consult(...)`
"""

from .convert import consult, convert0to1, convert1to0
from .engine import step, step_or_raise
from .sampler import PriceIntegralSource, current_sample, read_snapshot
from .state import initial_state, state_from_dict, state_to_dict
from .types import (
    Action,
    ActionParams,
    Effect,
    Event,
    PriceIntegralSample,
    ReserveSnapshot,
    StepResult,
    WindowState,
)

__all__ = [
    "step",
    "step_or_raise",
    "current_sample",
    "read_snapshot",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "convert0to1",
    "convert1to0",
    "consult",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "PriceIntegralSample",
    "PriceIntegralSource",
    "ReserveSnapshot",
    "StepResult",
    "WindowState",
]
