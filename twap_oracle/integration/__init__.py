"""
Integration layer (imperative shell).

`WindowOracle` wires the functional core to a clock, a price-integral source,
an authorization predicate and notification listeners. `ConsumerGuard` adds
caller-side freshness and liquidity checks. `load_config()` reads settings from
YAML and the environment.
"""

from .config import OracleConfig, load_config
from .consumer import ConsumerGuard
from .oracle import WindowOracle

__all__ = ["OracleConfig", "load_config", "ConsumerGuard", "WindowOracle"]
