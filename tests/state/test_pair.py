from __future__ import annotations

import pytest

from twap_oracle.core.twap.sampler import PriceIntegralSource, current_sample
from twap_oracle.errors import FixedPointOverflow
from twap_oracle.kernels.python.uq112x112 import Q112, U112_MAX
from twap_oracle.state import ConstantProductPair


def test_pair_is_a_price_integral_source() -> None:
    assert isinstance(ConstantProductPair(), PriceIntegralSource)


def test_initial_sync_does_not_accumulate() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=2_000, timestamp=100)
    assert pair.get_reserves() == (1_000, 2_000, 100)
    assert pair.price0_cumulative_last == 0
    assert pair.price1_cumulative_last == 0


def test_sync_accumulates_old_reserves_over_elapsed_time() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=2_000, timestamp=100)
    pair.sync(4_000, 1_000, 110)
    assert pair.price0_cumulative_last == 2 * Q112 * 10
    assert pair.price1_cumulative_last == (Q112 // 2) * 10
    assert pair.get_reserves() == (4_000, 1_000, 110)


def test_sync_same_timestamp_does_not_accumulate() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=2_000, timestamp=100)
    pair.sync(1_500, 2_500, 100)
    assert pair.price0_cumulative_last == 0


def test_sync_skips_accumulation_for_empty_pool() -> None:
    pair = ConstantProductPair(timestamp=100)
    pair.sync(1_000, 1_000, 200)
    assert pair.price0_cumulative_last == 0
    assert pair.get_reserves() == (1_000, 1_000, 200)


def test_sync_across_u32_wraparound() -> None:
    start = (1 << 32) - 5
    pair = ConstantProductPair(reserve0=1, reserve1=1, timestamp=start)
    pair.sync(1, 1, start + 10)
    assert pair.block_timestamp_last == 5
    assert pair.price0_cumulative_last == Q112 * 10


def test_sync_rejects_balances_above_u112() -> None:
    pair = ConstantProductPair(reserve0=1, reserve1=1)
    with pytest.raises(FixedPointOverflow):
        pair.sync(U112_MAX + 1, 1, 10)
    assert pair.get_reserves() == (1, 1, 0)


def test_add_liquidity() -> None:
    pair = ConstantProductPair(reserve0=10, reserve1=20, timestamp=0)
    pair.add_liquidity(5, 10, 1)
    assert pair.get_reserves() == (15, 30, 1)


def test_swap_exact_in_rounding_and_reserves() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=2_000_000, timestamp=0)
    # fee = ceil(10 * 30 / 10_000) = 1, net_in = 9, out = floor(2_000_000 * 9 / 1_009)
    out = pair.swap_exact_in(10, zero_for_one=True, now=5)
    assert out == 17_839
    assert pair.get_reserves() == (1_010, 2_000_000 - 17_839, 5)
    assert pair.price0_cumulative_last == 2_000 * Q112 * 5


def test_swap_one_for_zero() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=1_000, timestamp=0)
    out = pair.swap_exact_in(100, zero_for_one=False, now=1, fee_bps=0)
    assert out == 90
    assert pair.get_reserves() == (910, 1_100, 1)


def test_swap_validation() -> None:
    pair = ConstantProductPair(reserve0=1_000, reserve1=1_000)
    with pytest.raises(ValueError):
        pair.swap_exact_in(0, zero_for_one=True, now=1)
    with pytest.raises(ValueError):
        pair.quote_exact_in(10, zero_for_one=True, fee_bps=10_000)
    with pytest.raises(ValueError):
        ConstantProductPair().swap_exact_in(10, zero_for_one=True, now=1)


def test_tokens_must_differ() -> None:
    with pytest.raises(ValueError):
        ConstantProductPair(token0="A", token1="A")


def test_sampler_matches_pair_accumulation() -> None:
    pair = ConstantProductPair(reserve0=3_000, reserve1=7_000, timestamp=100)
    extrapolated = current_sample(pair, 160)
    pair.sync(3_000, 7_000, 160)
    assert extrapolated.integral0 == pair.price0_cumulative_last
    assert extrapolated.integral1 == pair.price1_cumulative_last
