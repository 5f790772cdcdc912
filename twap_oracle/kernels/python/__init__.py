"""
Production Python kernels.

These modules are:
- deterministic (integer-only),
- explicit about fixed-width domains and wraparound,
- pure functions with no state.
"""
