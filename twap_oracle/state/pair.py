"""
In-memory constant-product pair that accumulates cumulative prices.

This is a price-integral source for the oracle (see
`twap_oracle.core.twap.sampler.PriceIntegralSource`). It mirrors the upstream
accumulation rule: on every sync, before storing new reserves, each cumulative
price grows by `spot_price * seconds_since_last_sync` using the *old* reserves.

Rounding (swap quotes):
- fee = ceil(amount_in * fee_bps / 10_000)
- amount_out = floor(reserve_out * net_in / (reserve_in + net_in))
"""

from __future__ import annotations

from typing import Hashable

from ..errors import FixedPointOverflow
from ..kernels.python.uq112x112 import (
    U112_MAX,
    fraction,
    to_u32,
    wrap_add_u256,
    wrap_mul_u256,
    wrap_sub_u32,
)


BPS_DENOM = 10_000


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


class ConstantProductPair:
    """Two-asset x*y=k pool with Uniswap-v2 style price accumulators."""

    def __init__(
        self,
        *,
        token0: Hashable = "token0",
        token1: Hashable = "token1",
        reserve0: int = 0,
        reserve1: int = 0,
        timestamp: int = 0,
    ) -> None:
        if token0 == token1:
            raise ValueError("token0 and token1 must differ")
        self.token0 = token0
        self.token1 = token1
        self.reserve0 = 0
        self.reserve1 = 0
        self.block_timestamp_last = to_u32(timestamp)
        self.price0_cumulative_last = 0
        self.price1_cumulative_last = 0
        if reserve0 or reserve1:
            self.sync(reserve0, reserve1, timestamp)

    def get_reserves(self) -> tuple[int, int, int]:
        return self.reserve0, self.reserve1, self.block_timestamp_last

    def sync(self, balance0: int, balance1: int, now: int) -> None:
        """
        Store new reserves at `now`, first accumulating prices over the
        elapsed time at the old reserves.

        Raises FixedPointOverflow if a balance exceeds u112.
        """
        _require_amount("balance0", balance0)
        _require_amount("balance1", balance1)
        if balance0 > U112_MAX or balance1 > U112_MAX:
            raise FixedPointOverflow("balance exceeds u112")

        timestamp = to_u32(now)
        # Wraps: the u32 block timestamp rolls over every ~136 years.
        time_elapsed = wrap_sub_u32(timestamp, self.block_timestamp_last)
        if time_elapsed > 0 and self.reserve0 != 0 and self.reserve1 != 0:
            # Wraps: the accumulators are defined mod 2**256.
            self.price0_cumulative_last = wrap_add_u256(
                self.price0_cumulative_last,
                wrap_mul_u256(fraction(self.reserve1, self.reserve0), time_elapsed),
            )
            self.price1_cumulative_last = wrap_add_u256(
                self.price1_cumulative_last,
                wrap_mul_u256(fraction(self.reserve0, self.reserve1), time_elapsed),
            )
        self.reserve0 = balance0
        self.reserve1 = balance1
        self.block_timestamp_last = timestamp

    def add_liquidity(self, amount0: int, amount1: int, now: int) -> None:
        _require_amount("amount0", amount0)
        _require_amount("amount1", amount1)
        self.sync(self.reserve0 + amount0, self.reserve1 + amount1, now)

    def quote_exact_in(self, amount_in: int, *, zero_for_one: bool, fee_bps: int = 30) -> int:
        """Output amount for an exact-in swap at current reserves (no state change)."""
        _require_amount("amount_in", amount_in)
        if amount_in == 0:
            raise ValueError("amount_in must be positive")
        if not (0 <= fee_bps < BPS_DENOM):
            raise ValueError(f"fee_bps must be in [0, {BPS_DENOM})")
        reserve_in, reserve_out = (
            (self.reserve0, self.reserve1) if zero_for_one else (self.reserve1, self.reserve0)
        )
        if reserve_in == 0 or reserve_out == 0:
            raise ValueError("cannot swap against an empty reserve")
        fee = (amount_in * fee_bps + BPS_DENOM - 1) // BPS_DENOM
        net_in = amount_in - fee
        return (reserve_out * net_in) // (reserve_in + net_in)

    def swap_exact_in(self, amount_in: int, *, zero_for_one: bool, now: int, fee_bps: int = 30) -> int:
        """Execute an exact-in swap at `now`. Returns the output amount."""
        amount_out = self.quote_exact_in(amount_in, zero_for_one=zero_for_one, fee_bps=fee_bps)
        if amount_out == 0:
            raise ValueError("swap output rounds to zero")
        if zero_for_one:
            self.sync(self.reserve0 + amount_in, self.reserve1 - amount_out, now)
        else:
            self.sync(self.reserve0 - amount_out, self.reserve1 + amount_in, now)
        return amount_out
