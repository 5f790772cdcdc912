from __future__ import annotations

import pytest

from twap_oracle.errors import FixedPointDivisionByZero, FixedPointOverflow, TwapArithmeticError
from twap_oracle.kernels.python.uq112x112 import (
    Q112,
    U112_MAX,
    U256_MAX,
    decode,
    fraction,
    scale_multiply_shift,
    to_u32,
    wrap_add_u256,
    wrap_mul_u256,
    wrap_sub_u256,
    wrap_sub_u32,
)


def test_fraction_unit_and_integer_ratios() -> None:
    assert fraction(1, 1) == Q112
    assert fraction(2, 1) == 2 * Q112
    assert fraction(1, 2) == Q112 // 2
    assert fraction(0, 5) == 0


def test_fraction_floors_inexact_division() -> None:
    # 2**112 mod 3 == 1, so 1/3 truncates by one ulp.
    assert fraction(1, 3) == (Q112 - 1) // 3
    assert fraction(1, 3) * 3 < Q112


def test_fraction_extremes_fit_u224() -> None:
    assert fraction(U112_MAX, 1) == U112_MAX << 112
    assert fraction(U112_MAX, 1) < 1 << 224
    assert fraction(1, U112_MAX) == Q112 // U112_MAX


@pytest.mark.parametrize("numerator", [0, 1, 12345, U112_MAX])
def test_fraction_zero_denominator_fails(numerator: int) -> None:
    with pytest.raises(FixedPointDivisionByZero):
        fraction(numerator, 0)


def test_division_by_zero_is_an_arithmetic_error() -> None:
    with pytest.raises(ZeroDivisionError):
        fraction(1, 0)
    with pytest.raises(TwapArithmeticError):
        fraction(1, 0)


def test_fraction_rejects_out_of_domain_operands() -> None:
    with pytest.raises(FixedPointOverflow):
        fraction(U112_MAX + 1, 1)
    with pytest.raises(ValueError):
        fraction(-1, 1)
    with pytest.raises(TypeError):
        fraction(True, 1)
    with pytest.raises(TypeError):
        fraction(1.5, 1)  # type: ignore[arg-type]


def test_scale_multiply_shift_identity_rate() -> None:
    for x in (0, 1, 999, 10**30, (1 << 144) - 1):
        assert scale_multiply_shift(x, Q112) == x


def test_scale_multiply_shift_double_rate() -> None:
    assert scale_multiply_shift(1_000_000, 2 * Q112) == 2_000_000


def test_scale_multiply_shift_floors() -> None:
    assert scale_multiply_shift(10, fraction(1, 3)) == 3
    assert scale_multiply_shift(1, Q112 - 1) == 0


def test_scale_multiply_shift_zero_amount() -> None:
    assert scale_multiply_shift(0, U256_MAX) == 0


def test_scale_multiply_shift_overflow_is_checked() -> None:
    with pytest.raises(FixedPointOverflow):
        scale_multiply_shift(1 << 144, Q112)
    with pytest.raises(OverflowError):
        scale_multiply_shift(U256_MAX, 2)


def test_decode_takes_integer_part() -> None:
    assert decode(5 * Q112) == 5
    assert decode(fraction(7, 2)) == 3
    assert decode(Q112 - 1) == 0
    with pytest.raises(FixedPointOverflow):
        decode(U256_MAX + 1)


def test_wrapping_u256() -> None:
    assert wrap_add_u256(U256_MAX, 2) == 1
    assert wrap_sub_u256(1, U256_MAX) == 2
    assert wrap_sub_u256(5, 3) == 2
    assert wrap_mul_u256(1 << 255, 2) == 0
    assert wrap_mul_u256(3, 4) == 12


def test_wrapping_u32_elapsed_across_rollover() -> None:
    assert wrap_sub_u32(5, (1 << 32) - 5) == 10
    assert wrap_sub_u32(1010, 1000) == 10
    assert wrap_sub_u32(7, 7) == 0


def test_to_u32() -> None:
    assert to_u32((1 << 32) + 7) == 7
    assert to_u32(1_700_000_000) == 1_700_000_000
    with pytest.raises(ValueError):
        to_u32(-1)
    with pytest.raises(TypeError):
        to_u32(False)
