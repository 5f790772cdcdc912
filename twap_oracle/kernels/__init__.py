"""
Kernel layer.

`twap_oracle/kernels/python/` holds the integer-only arithmetic the oracle is
built on. Nothing in this package keeps state.
"""
