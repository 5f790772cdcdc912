"""Exception taxonomy for the TWAP oracle.

Four families, matching how callers are expected to react:

- ``ConstructionError``: the oracle cannot be created (fatal).
- ``PreconditionError``: expected and recoverable; retry later. No state mutated.
- ``TwapArithmeticError``: source data or input unusable right now; treat the
  price as unavailable.
- ``AuthorizationError``: configuration change rejected. No state mutated.

``step_or_raise()`` in ``twap_oracle.core.twap.engine`` maps rejection reasons
onto these classes.
"""

from __future__ import annotations


class TwapError(Exception):
    """Base class for every error raised by this package."""


# -- Construction ------------------------------------------------------------

class ConstructionError(TwapError):
    """Raised when an oracle cannot be constructed."""


class InvalidSourceError(ConstructionError, TypeError):
    """The price-integral source is missing or lacks the required interface."""


class InvalidWindowSizeError(ConstructionError, ValueError):
    """Window size is not a positive u32 (construction or ``set_window_size``)."""


# -- Preconditions -----------------------------------------------------------

class PreconditionError(TwapError):
    """Raised when an operation is not allowed yet; retrying later may succeed."""


class WindowNotElapsedError(PreconditionError):
    """Fewer than ``window_size_seconds`` elapsed since the last accepted sample."""

    def __init__(self, elapsed: int | None = None, window_size_seconds: int | None = None) -> None:
        self.elapsed = elapsed
        self.window_size_seconds = window_size_seconds
        if elapsed is None or window_size_seconds is None:
            super().__init__("window_not_elapsed")
        else:
            super().__init__(f"window_not_elapsed: elapsed={elapsed} window={window_size_seconds}")


class StalePriceError(PreconditionError):
    """The committed average is older than the caller's staleness bound."""


class InsufficientLiquidityError(PreconditionError):
    """Source reserves are below the caller's liquidity floor."""


# -- Arithmetic --------------------------------------------------------------

class TwapArithmeticError(TwapError, ArithmeticError):
    """Base for fixed-point arithmetic failures."""


class FixedPointDivisionByZero(TwapArithmeticError, ZeroDivisionError):
    """Fraction with a zero denominator (e.g. a zero-reserve pool)."""


class FixedPointOverflow(TwapArithmeticError, OverflowError):
    """A result does not fit its fixed-width unsigned domain."""


# -- Authorization -----------------------------------------------------------

class AuthorizationError(TwapError):
    """Raised when a caller may not perform a configuration change."""


class UnauthorizedError(AuthorizationError, PermissionError):
    """Caller failed the injected authorization check."""


# -- Engine ------------------------------------------------------------------

class InvalidParamsError(TwapError, ValueError):
    """Action parameters are missing or outside their domain."""


class TwapInvariantError(TwapError):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
