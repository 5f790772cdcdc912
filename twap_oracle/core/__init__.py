"""
Core oracle algorithms
"""

from .twap import (
    Action,
    ActionParams,
    Effect,
    Event,
    PriceIntegralSample,
    WindowState,
    current_sample,
    initial_state,
    step,
    step_or_raise,
)

__all__ = [
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "PriceIntegralSample",
    "WindowState",
    "current_sample",
    "initial_state",
    "step",
    "step_or_raise",
]
