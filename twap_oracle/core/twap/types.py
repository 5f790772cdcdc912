"""Data types for the windowed TWAP engine.

All types are frozen dataclasses (immutable).

Units/conventions:
- `integral*` values are cumulative prices in UQ112x112-seconds, mod 2**256.
- `average*` values are UQ112x112 rates (counter-asset per base-asset).
- `timestamp` values are seconds mod 2**32.
- `reserve*` values are u112 token balances.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ...kernels.python.uq112x112 import require_uint


@unique
class Action(Enum):
    """Mutating actions accepted by ``step()``."""
    UPDATE = "update"
    SET_WINDOW_SIZE = "set_window_size"


@unique
class Event(Enum):
    """Notifications produced by accepted actions."""
    UPDATED = "Updated"
    WINDOW_SIZE_CHANGED = "WindowSizeChanged"


@dataclass(frozen=True)
class PriceIntegralSample:
    """Two cumulative prices observed at one (wrapping) timestamp."""

    integral0: int
    integral1: int
    timestamp: int

    def __post_init__(self) -> None:
        require_uint("integral0", self.integral0, 256)
        require_uint("integral1", self.integral1, 256)
        require_uint("timestamp", self.timestamp, 32)


@dataclass(frozen=True)
class ReserveSnapshot:
    """Spot reserves and last sync time reported by the price-integral source."""

    reserve0: int
    reserve1: int
    last_sync_timestamp: int

    def __post_init__(self) -> None:
        require_uint("reserve0", self.reserve0, 112)
        require_uint("reserve1", self.reserve1, 112)
        require_uint("last_sync_timestamp", self.last_sync_timestamp, 32)


@dataclass(frozen=True)
class WindowState:
    """Complete state of one windowed oracle.

    `average0`/`average1` are 0 until the first accepted update
    (`update_count == 0`); zero then means "uninitialized", not "price is zero".
    """

    last_sample: PriceIntegralSample
    window_size_seconds: int
    average0: int = 0
    average1: int = 0
    update_count: int = 0

    @property
    def has_average(self) -> bool:
        return self.update_count > 0


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields keep their defaults."""

    action: Action
    sample: PriceIntegralSample | None = None   # update
    new_window_size: int = 0                     # set_window_size
    auth_ok: bool = False                        # set_window_size


@dataclass(frozen=True)
class Effect:
    """Notification emitted after a successful step."""

    event: Event
    average0: int = 0
    average1: int = 0
    window_size_seconds: int = 0
    timestamp: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: WindowState | None = None
    effect: Effect | None = None
    rejection: str | None = None
