"""Update functions for the windowed TWAP engine.

One pure function per action, returning the POST-state. Guards have already
passed when these run.
"""

from __future__ import annotations

from dataclasses import replace

from .math import window_averages
from .types import ActionParams, WindowState


def apply_update(state: WindowState, params: ActionParams) -> WindowState:
    new_sample = params.sample
    average0, average1 = window_averages(state.last_sample, new_sample)
    return replace(
        state,
        last_sample=new_sample,
        average0=average0,
        average1=average1,
        update_count=state.update_count + 1,
    )


def apply_set_window_size(state: WindowState, params: ActionParams) -> WindowState:
    return replace(state, window_size_seconds=params.new_window_size)
