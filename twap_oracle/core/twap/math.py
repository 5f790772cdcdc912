"""Pure arithmetic for the windowed TWAP engine.

Every function is stateless and operates on plain Python ints.

Cumulative prices and timestamps are *wrapping* counters. Differences are
always taken modulo the counter width, which yields the true delta as long as
at most one wraparound happened between the two observations.
"""

from __future__ import annotations

from ...errors import FixedPointDivisionByZero
from ...kernels.python.uq112x112 import (
    fraction,
    wrap_add_u256,
    wrap_mul_u256,
    wrap_sub_u256,
    wrap_sub_u32,
)
from .types import PriceIntegralSample, ReserveSnapshot, WindowState


# -- Time --------------------------------------------------------------------

def elapsed_seconds(now_timestamp: int, then_timestamp: int) -> int:
    """Seconds from `then` to `now` across at most one 2**32 wraparound."""
    # Wraps: a `now` numerically below `then` means the u32 clock rolled over.
    return wrap_sub_u32(now_timestamp, then_timestamp)


def window_elapsed(state: WindowState, sample: PriceIntegralSample) -> bool:
    """True when `sample` closes a window (elapsed >= window size)."""
    return elapsed_seconds(sample.timestamp, state.last_sample.timestamp) >= state.window_size_seconds


# -- Averages ----------------------------------------------------------------

def average_rate(new_integral: int, old_integral: int, elapsed: int) -> int:
    """UQ112x112 average over `elapsed` seconds: ``(new - old) mod 2**256 // elapsed``."""
    if elapsed <= 0:
        raise FixedPointDivisionByZero("average_rate: zero elapsed time")
    # Wraps: the accumulator may have rolled over 2**256 since `old`.
    delta = wrap_sub_u256(new_integral, old_integral)
    return delta // elapsed


def window_averages(last: PriceIntegralSample, new: PriceIntegralSample) -> tuple[int, int]:
    """Both averages between two samples."""
    elapsed = elapsed_seconds(new.timestamp, last.timestamp)
    return (
        average_rate(new.integral0, last.integral0, elapsed),
        average_rate(new.integral1, last.integral1, elapsed),
    )


# -- Extrapolation -----------------------------------------------------------

def extrapolate_integrals(
    integral0: int,
    integral1: int,
    snapshot: ReserveSnapshot,
    now_timestamp: int,
) -> tuple[int, int]:
    """Advance the source's last-reported integrals to `now_timestamp`.

    Uses the spot reserves, which held constant since the source's last sync.
    Raises FixedPointDivisionByZero when either reserve is zero.
    """
    elapsed = elapsed_seconds(now_timestamp, snapshot.last_sync_timestamp)
    rate0 = fraction(snapshot.reserve1, snapshot.reserve0)
    rate1 = fraction(snapshot.reserve0, snapshot.reserve1)
    # Wraps: the accumulators are defined mod 2**256.
    return (
        wrap_add_u256(integral0, wrap_mul_u256(rate0, elapsed)),
        wrap_add_u256(integral1, wrap_mul_u256(rate1, elapsed)),
    )
