"""
Windowed TWAP oracle over a cumulative price-integral feed.

Layout:
- `twap_oracle.kernels.python` holds the integer-only Q112.112 kernel.
- `twap_oracle.core.twap` is the functional core (immutable state, pure step).
- `twap_oracle.state` holds the synthetic in-memory price-integral source.
- `twap_oracle.integration` is the imperative shell (clock, locking, config, logging).
"""

__version__ = "0.1.0"
