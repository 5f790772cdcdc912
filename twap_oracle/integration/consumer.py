"""
Caller-side freshness and liquidity checks for a `WindowOracle`.

The oracle only promises "the average over the most recently closed window".
Consumers that need more (a bound on how old that window may be, a minimum
pool depth) wrap it with `ConsumerGuard`. The oracle never calls this module.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.twap.math import elapsed_seconds
from ..core.twap.sampler import read_snapshot
from ..errors import InsufficientLiquidityError, StalePriceError
from .config import OracleConfig
from .oracle import WindowOracle

logger = logging.getLogger(__name__)


class ConsumerGuard:
    def __init__(self, oracle: WindowOracle, config: Optional[OracleConfig] = None) -> None:
        self._oracle = oracle
        self._config = config or OracleConfig(window_size_seconds=oracle.window_size_seconds)

    @property
    def max_staleness_seconds(self) -> int:
        # Follows the oracle's live window size, not the one configured at startup.
        return self._oracle.window_size_seconds * self._config.max_staleness_multiplier

    def age_seconds(self) -> int:
        return elapsed_seconds(self._oracle.now(), self._oracle.state.last_sample.timestamp)

    def is_fresh(self) -> bool:
        """True if an average exists and its window closed within the staleness bound."""
        if not self._oracle.state.has_average:
            return False
        return self.age_seconds() <= self.max_staleness_seconds

    def has_liquidity(self) -> bool:
        if self._config.min_reserve == 0:
            return True
        snap = read_snapshot(self._oracle.source)
        return min(snap.reserve0, snap.reserve1) >= self._config.min_reserve

    def check(self) -> None:
        """Raise StalePriceError / InsufficientLiquidityError if the price should not be used."""
        if not self.is_fresh():
            logger.warning(
                "TWAP price stale: has_average=%s age=%ss max=%ss",
                self._oracle.state.has_average, self.age_seconds(), self.max_staleness_seconds,
            )
            raise StalePriceError(
                f"TWAP older than {self.max_staleness_seconds}s or never updated"
            )
        if not self.has_liquidity():
            logger.warning("TWAP source below liquidity floor %s", self._config.min_reserve)
            raise InsufficientLiquidityError(
                f"source reserves below {self._config.min_reserve}"
            )

    def convert0to1(self, amount_in: int) -> int:
        self.check()
        return self._oracle.convert0to1(amount_in)

    def convert1to0(self, amount_in: int) -> int:
        self.check()
        return self._oracle.convert1to0(amount_in)
