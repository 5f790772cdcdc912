"""
UQ112x112 fixed-point kernel.

Unsigned rationals are represented as plain ints scaled by 2**112:
- `fraction(n, d)` builds a UQ112x112 from two u112 integers (floor rounding).
- `scale_multiply_shift(amount, rate)` multiplies a u256 amount by a UQ112x112
  rate and drops the 112 fractional bits (floor rounding).

Python ints never overflow, so fixed-width semantics are explicit here:
- checked operations raise `FixedPointOverflow` when a result leaves its domain,
- `wrap_*` helpers reduce modulo 2**N for the accumulators that are *meant*
  to wrap (cumulative prices mod 2**256, timestamps mod 2**32).

Integer-only; no floats anywhere in this module.
"""

from __future__ import annotations

from ...errors import FixedPointDivisionByZero, FixedPointOverflow


RESOLUTION = 112
Q112 = 1 << RESOLUTION

U32_MOD = 1 << 32
U112_MAX = (1 << 112) - 1
U256_MOD = 1 << 256
U256_MAX = U256_MOD - 1

_U32_MASK = U32_MOD - 1


def require_uint(name: str, value: int, bits: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if value >> bits:
        raise FixedPointOverflow(f"{name} exceeds u{bits}: {value}")


# -- Wrapping primitives -----------------------------------------------------

def wrap_add_u256(a: int, b: int) -> int:
    """`(a + b) mod 2**256`."""
    return (a + b) & U256_MAX


def wrap_sub_u256(a: int, b: int) -> int:
    """`(a - b) mod 2**256`; Python's `&` on a negative int yields the two's-complement residue."""
    return (a - b) & U256_MAX


def wrap_mul_u256(a: int, b: int) -> int:
    """`(a * b) mod 2**256`."""
    return (a * b) & U256_MAX


def wrap_sub_u32(a: int, b: int) -> int:
    """`(a - b) mod 2**32`, the elapsed-seconds primitive for wrapping timestamps."""
    return (a - b) & _U32_MASK


def to_u32(value: int) -> int:
    """Reduce a non-negative integer (e.g. a wall-clock reading) modulo 2**32."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be an int")
    if value < 0:
        raise ValueError(f"value must be non-negative: {value}")
    return value & _U32_MASK


# -- Fixed point -------------------------------------------------------------

def decode(x: int) -> int:
    """Integer part of a UQ112x112 (or UQ144x112) value."""
    require_uint("x", x, 256)
    return x >> RESOLUTION


def fraction(numerator: int, denominator: int) -> int:
    """
    `(numerator << 112) // denominator` as UQ112x112.

    Floors on inexact division. The result of two u112 operands is at most
    `(2**112 - 1) * 2**112`, so it always fits in 224 bits.

    Raises FixedPointDivisionByZero when `denominator == 0`.
    """
    require_uint("numerator", numerator, 112)
    require_uint("denominator", denominator, 112)
    if denominator == 0:
        raise FixedPointDivisionByZero("fraction: division by zero")
    return (numerator << RESOLUTION) // denominator


def scale_multiply_shift(amount: int, scaled_rate: int) -> int:
    """
    `(amount * scaled_rate) >> 112`, checked in 256 bits.

    The intermediate product must fit a u256 (UQ144x112); otherwise the
    conversion raises FixedPointOverflow instead of silently wrapping.
    """
    require_uint("amount", amount, 256)
    require_uint("scaled_rate", scaled_rate, 256)
    product = amount * scaled_rate
    if product > U256_MAX:
        raise FixedPointOverflow(f"scale_multiply_shift: product exceeds u256 (amount={amount})")
    return product >> RESOLUTION
