"""
Windowed TWAP oracle (imperative shell).

The functional core (`twap_oracle.core.twap`) computes every transition; this
class owns what the core must not:
- the mutable handle to the committed `WindowState`,
- the clock and the price-integral source,
- the authorization predicate for configuration changes,
- notification listeners and logging.

Each public call runs under one lock, so observers never see a partially
applied update. State is only swapped after `step()` accepts, which makes every
mutation all-or-nothing. Listeners are called after the lock is released.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable, Optional

from ..core.twap import (
    Action,
    ActionParams,
    Effect,
    PriceIntegralSource,
    WindowState,
    consult,
    convert0to1,
    convert1to0,
    current_sample,
    initial_state,
    state_to_dict,
    step_or_raise,
)
from ..core.twap.guards import is_valid_window_size
from ..errors import InvalidSourceError, InvalidWindowSizeError, UnauthorizedError, WindowNotElapsedError
from ..kernels.python.uq112x112 import to_u32

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
AuthPredicate = Callable[[Any, Any], bool]
Listener = Callable[[Effect], None]


def _wall_clock() -> int:
    return int(time.time())


def _is_owner(caller: Any, owner: Any) -> bool:
    return caller == owner


class WindowOracle:
    """Fixed-window TWAP oracle over one price-integral source."""

    def __init__(
        self,
        source: PriceIntegralSource,
        window_size_seconds: int,
        owner: Any,
        *,
        clock: Optional[Clock] = None,
        is_authorized: Optional[AuthPredicate] = None,
    ) -> None:
        """
        Take the baseline sample and open the first window.

        Raises:
            InvalidSourceError: `source` does not expose the price-integral interface.
            InvalidWindowSizeError: `window_size_seconds` is not a positive u32.
            FixedPointDivisionByZero: the source has a zero reserve and last synced before now.
        """
        if source is None or not isinstance(source, PriceIntegralSource):
            raise InvalidSourceError("source must expose get_reserves() and price{0,1}_cumulative_last")
        if not is_valid_window_size(window_size_seconds):
            raise InvalidWindowSizeError(f"window size must be in (0, 2**32): {window_size_seconds!r}")
        self._source = source
        self._owner = owner
        self._clock = clock or _wall_clock
        self._is_authorized = is_authorized or _is_owner
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

        sample = current_sample(source, self.now())
        self._state = initial_state(sample, window_size_seconds)
        logger.info(
            "TWAP oracle initialized: window=%ss baseline_timestamp=%s",
            window_size_seconds, sample.timestamp,
        )

    # -- Properties ----------------------------------------------------------

    @property
    def state(self) -> WindowState:
        return self._state

    @property
    def window_size_seconds(self) -> int:
        return self._state.window_size_seconds

    @property
    def source(self) -> PriceIntegralSource:
        return self._source

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def token0(self) -> Optional[Hashable]:
        return getattr(self._source, "token0", None)

    @property
    def token1(self) -> Optional[Hashable]:
        return getattr(self._source, "token1", None)

    def now(self) -> int:
        """Current clock reading reduced mod 2**32."""
        return to_u32(self._clock())

    # -- Mutations -----------------------------------------------------------

    def update(self) -> Effect:
        """
        Close the current window and commit new averages.

        Raises:
            WindowNotElapsedError: fewer than `window_size_seconds` since the last update.
            FixedPointDivisionByZero: the source has a zero reserve.
        """
        with self._lock:
            sample = current_sample(self._source, self.now())
            params = ActionParams(action=Action.UPDATE, sample=sample)
            try:
                result = step_or_raise(self._state, params)
            except WindowNotElapsedError as exc:
                logger.debug(
                    "TWAP update rejected: elapsed=%s window=%s",
                    exc.elapsed, exc.window_size_seconds,
                )
                raise
            self._state = result.state
            effect = result.effect
        logger.info(
            "TWAP updated: average0=%s average1=%s timestamp=%s",
            effect.average0, effect.average1, effect.timestamp,
        )
        self._emit(effect)
        return effect

    def set_window_size(self, new_window_size: int, caller: Any) -> Effect:
        """
        Change the window used by the next `update()` call.

        Raises:
            UnauthorizedError: `caller` fails the authorization predicate.
            InvalidWindowSizeError: `new_window_size` is not a positive u32.
        """
        with self._lock:
            params = ActionParams(
                action=Action.SET_WINDOW_SIZE,
                new_window_size=new_window_size,
                auth_ok=bool(self._is_authorized(caller, self._owner)),
            )
            try:
                result = step_or_raise(self._state, params)
            except UnauthorizedError:
                logger.warning("Rejected window size change from unauthorized caller %r", caller)
                raise
            self._state = result.state
            effect = result.effect
        logger.info("TWAP window size changed to %ss", effect.window_size_seconds)
        self._emit(effect)
        return effect

    # -- Reads ---------------------------------------------------------------

    def price0(self) -> int:
        """UQ112x112 average of token0 in token1; 0 before the first update."""
        return self._state.average0

    def price1(self) -> int:
        """UQ112x112 average of token1 in token0; 0 before the first update."""
        return self._state.average1

    def convert0to1(self, amount_in: int) -> int:
        return convert0to1(self._state, amount_in)

    def convert1to0(self, amount_in: int) -> int:
        return convert1to0(self._state, amount_in)

    def consult(self, token: Hashable, amount_in: int) -> int:
        if self.token0 is None or self.token1 is None:
            raise ValueError("source does not identify its tokens")
        return consult(self._state, token, amount_in, token0=self.token0, token1=self.token1)

    def current_integrals(self) -> tuple[int, int, int]:
        """`(integral0, integral1, timestamp)` as of now; never mutates state."""
        with self._lock:
            sample = current_sample(self._source, self.now())
        return sample.integral0, sample.integral1, sample.timestamp

    def snapshot(self) -> dict[str, int]:
        return state_to_dict(self._state)

    # -- Notifications -------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def _emit(self, effect: Effect) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(effect)
            except Exception:
                # The reported state change is already committed.
                logger.exception("TWAP listener failed for %s", effect.event.value)
