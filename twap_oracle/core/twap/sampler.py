"""Up-to-date price-integral samples from an external source.

The source only advances its cumulative prices when it syncs. Between syncs the
spot reserves are constant, so the integral as of "now" is the reported value
plus `spot_price * seconds_since_sync`. Reading a sample never writes to the
source.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...kernels.python.uq112x112 import to_u32
from .math import extrapolate_integrals
from .types import PriceIntegralSample, ReserveSnapshot


@runtime_checkable
class PriceIntegralSource(Protocol):
    """Read-only interface of a price-integral source (e.g. a constant-product pair)."""

    price0_cumulative_last: int
    price1_cumulative_last: int

    def get_reserves(self) -> tuple[int, int, int]:
        """Return `(reserve0, reserve1, block_timestamp_last)`."""
        ...


def read_snapshot(source: PriceIntegralSource) -> ReserveSnapshot:
    reserve0, reserve1, last_sync = source.get_reserves()
    return ReserveSnapshot(reserve0=reserve0, reserve1=reserve1, last_sync_timestamp=last_sync)


def current_sample(source: PriceIntegralSource, now: int) -> PriceIntegralSample:
    """
    Cumulative prices of `source` as of `now` (seconds; reduced mod 2**32).

    If the source synced at `now` its integrals are already current and are
    returned verbatim. Otherwise they are extrapolated from spot reserves.

    Raises:
        FixedPointDivisionByZero: extrapolation needed but a reserve is zero.
    """
    timestamp = to_u32(now)
    integral0 = source.price0_cumulative_last
    integral1 = source.price1_cumulative_last
    snapshot = read_snapshot(source)

    if snapshot.last_sync_timestamp != timestamp:
        integral0, integral1 = extrapolate_integrals(integral0, integral1, snapshot, timestamp)

    return PriceIntegralSample(integral0=integral0, integral1=integral1, timestamp=timestamp)
