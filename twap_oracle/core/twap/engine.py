"""Dispatch-table engine for the windowed TWAP oracle.

``step(state, params)`` is the single entry point for mutating actions. It:

1. Validates parameter domains.
2. Dispatches to the correct guard / update / effect functions.
3. Checks all invariants on the post-state (plus the update transition).
4. Returns a ``StepResult`` (accepted or rejected with reason).

A rejected step never produces a post-state, so callers that only swap in
``result.state`` on acceptance get all-or-nothing commits.
"""

from __future__ import annotations

from typing import Callable

from ...errors import (
    InvalidParamsError,
    InvalidWindowSizeError,
    TwapInvariantError,
    UnauthorizedError,
    WindowNotElapsedError,
)
from .effects import effect_set_window_size, effect_update
from .guards import (
    REJECT_INVALID_WINDOW_SIZE,
    REJECT_UNAUTHORIZED,
    REJECT_WINDOW_NOT_ELAPSED,
    guard_set_window_size,
    guard_update,
)
from .invariants import check_all
from .math import elapsed_seconds
from .types import Action, ActionParams, Effect, PriceIntegralSample, StepResult, WindowState
from .updates import apply_set_window_size, apply_update

GuardFn = Callable[[WindowState, ActionParams], str | None]
UpdateFn = Callable[[WindowState, ActionParams], WindowState]
EffectFn = Callable[[WindowState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.UPDATE: (
        guard_update, apply_update, effect_update,
    ),
    Action.SET_WINDOW_SIZE: (
        guard_set_window_size, apply_set_window_size, effect_set_window_size,
    ),
}


def _validate_params(params: ActionParams) -> str | None:
    """Check parameter domains. Returns rejection reason or None."""
    if params.action is Action.UPDATE:
        if not isinstance(params.sample, PriceIntegralSample):
            return "param_domain:sample"
    elif params.action is Action.SET_WINDOW_SIZE:
        if not isinstance(params.new_window_size, int) or isinstance(params.new_window_size, bool):
            return "param_domain:new_window_size"
    return None


def _check_transition(pre: WindowState, post: WindowState, params: ActionParams) -> list[str]:
    if params.action is not Action.UPDATE:
        return []
    # An accepted update must close a window of non-zero length.
    if elapsed_seconds(post.last_sample.timestamp, pre.last_sample.timestamp) == 0:
        return ["inv_timestamp_advanced"]
    return []


def step(state: WindowState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` reason string.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    domain_err = _validate_params(params)
    if domain_err is not None:
        return StepResult(accepted=False, rejection=domain_err)

    guard_fn, update_fn, effect_fn = entry

    reason = guard_fn(state, params)
    if reason is not None:
        return StepResult(accepted=False, rejection=reason)

    new_state = update_fn(state, params)

    violations = check_all(new_state) + _check_transition(state, new_state, params)
    if violations:
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
        )

    effect = effect_fn(new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


def raise_for_rejection(state: WindowState, params: ActionParams, result: StepResult) -> None:
    """Raise the typed error matching a rejected ``StepResult``; no-op if accepted."""
    if result.accepted:
        return

    reason = result.rejection or ""
    if reason == REJECT_WINDOW_NOT_ELAPSED:
        elapsed = elapsed_seconds(params.sample.timestamp, state.last_sample.timestamp)
        raise WindowNotElapsedError(elapsed, state.window_size_seconds)
    if reason == REJECT_INVALID_WINDOW_SIZE:
        raise InvalidWindowSizeError(f"window size must be in (0, 2**32): {params.new_window_size}")
    if reason == REJECT_UNAUTHORIZED:
        raise UnauthorizedError("caller may not change the window size")
    if reason.startswith("invariant:"):
        violations = reason.removeprefix("invariant:").split(",")
        raise TwapInvariantError(violations)
    raise InvalidParamsError(reason)


def step_or_raise(state: WindowState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        WindowNotElapsedError: Update attempted before the window closed.
        InvalidWindowSizeError: Requested window size is not a positive u32.
        UnauthorizedError: ``auth_ok`` was False for a configuration change.
        InvalidParamsError: Missing or malformed parameters / unknown action.
        TwapInvariantError: Post-state violates one or more invariants.
    """
    result = step(state, params)
    raise_for_rejection(state, params, result)
    return result
