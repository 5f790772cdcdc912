"""Invariant checkers for the windowed TWAP engine.

Each function returns True when the invariant holds on a state, and
`check_all()` returns the list of violated invariant IDs (empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from ...kernels.python.uq112x112 import U256_MAX
from .guards import is_valid_window_size
from .types import WindowState


def inv_window_size_positive(s: WindowState) -> bool:
    return is_valid_window_size(s.window_size_seconds)


def inv_averages_in_domain(s: WindowState) -> bool:
    return 0 <= s.average0 <= U256_MAX and 0 <= s.average1 <= U256_MAX


def inv_unset_averages_zeroed(s: WindowState) -> bool:
    if s.has_average:
        return True
    return s.average0 == 0 and s.average1 == 0


def inv_update_count_nonneg(s: WindowState) -> bool:
    return s.update_count >= 0


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[WindowState], bool]] = {
    "inv_window_size_positive": inv_window_size_positive,
    "inv_averages_in_domain": inv_averages_in_domain,
    "inv_unset_averages_zeroed": inv_unset_averages_zeroed,
    "inv_update_count_nonneg": inv_update_count_nonneg,
}


def check_all(s: WindowState) -> list[str]:
    """Return IDs of all violated invariants (empty = all pass)."""
    return [name for name, fn in INVARIANT_REGISTRY.items() if not fn(s)]
