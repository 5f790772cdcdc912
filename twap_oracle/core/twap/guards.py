"""Guard functions for the windowed TWAP engine.

One pure function per action. Each evaluates the PRE-state and returns a
rejection reason, or None when the action is allowed.
"""

from __future__ import annotations

from ...kernels.python.uq112x112 import U32_MOD
from .math import window_elapsed
from .types import ActionParams, WindowState

REJECT_WINDOW_NOT_ELAPSED = "window_not_elapsed"
REJECT_INVALID_WINDOW_SIZE = "invalid_window_size"
REJECT_UNAUTHORIZED = "unauthorized"


def is_valid_window_size(window_size_seconds: int) -> bool:
    if not isinstance(window_size_seconds, int) or isinstance(window_size_seconds, bool):
        return False
    return 0 < window_size_seconds < U32_MOD


def guard_update(state: WindowState, params: ActionParams) -> str | None:
    # Window size is read from the pre-state on every call, never cached.
    if not window_elapsed(state, params.sample):
        return REJECT_WINDOW_NOT_ELAPSED
    return None


def guard_set_window_size(state: WindowState, params: ActionParams) -> str | None:
    if not params.auth_ok:
        return REJECT_UNAUTHORIZED
    if not is_valid_window_size(params.new_window_size):
        return REJECT_INVALID_WINDOW_SIZE
    return None
