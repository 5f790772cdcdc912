"""Amount conversion through the committed window averages.

Conversions read `average0`/`average1` only. They never recompute the average
and do not check freshness; see `twap_oracle.integration.consumer` for a
caller-side staleness wrapper.
"""

from __future__ import annotations

from typing import Hashable

from ...kernels.python.uq112x112 import scale_multiply_shift
from .types import WindowState


def convert0to1(state: WindowState, amount_in: int) -> int:
    """Token1 amount worth `amount_in` of token0 (floor). Raises FixedPointOverflow."""
    return scale_multiply_shift(amount_in, state.average0)


def convert1to0(state: WindowState, amount_in: int) -> int:
    """Token0 amount worth `amount_in` of token1 (floor). Raises FixedPointOverflow."""
    return scale_multiply_shift(amount_in, state.average1)


def consult(
    state: WindowState,
    token: Hashable,
    amount_in: int,
    *,
    token0: Hashable,
    token1: Hashable,
) -> int:
    """Convert `amount_in` of `token` into the pair's other token.

    Raises ValueError when `token` is neither `token0` nor `token1`.
    """
    if token == token0:
        return convert0to1(state, amount_in)
    if token == token1:
        return convert1to0(state, amount_in)
    raise ValueError(f"invalid token: {token!r}")
