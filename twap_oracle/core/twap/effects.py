"""Effect functions for the windowed TWAP engine.

Effects are computed from the POST-state.
"""

from __future__ import annotations

from .types import ActionParams, Effect, Event, WindowState


def effect_update(state: WindowState, params: ActionParams) -> Effect:
    return Effect(
        event=Event.UPDATED,
        average0=state.average0,
        average1=state.average1,
        window_size_seconds=state.window_size_seconds,
        timestamp=state.last_sample.timestamp,
    )


def effect_set_window_size(state: WindowState, params: ActionParams) -> Effect:
    return Effect(
        event=Event.WINDOW_SIZE_CHANGED,
        window_size_seconds=state.window_size_seconds,
    )
