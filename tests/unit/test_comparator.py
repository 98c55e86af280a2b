"""
Тесты для Comparator и точной декомпозиции float

Проверяет:
1. Полный порядок BigInteger
2. Точное сравнение с float (без округления)
3. NaN / ±Inf / -0.0
4. decompose / compose
"""

import math
import sys

import pytest

from exactint.core.domain.big_integer import ZERO, BigInteger
from exactint.core.domain.float_bits import (
    MAX_SAFE_INTEGER,
    compose,
    decompose,
    float_to_bits,
    is_infinite,
    is_integral,
    is_nan,
)
from exactint.core.math.comparator import (
    compare_cross_domain,
    compare_same_domain,
    equals_cross_domain,
)


def B(value: int) -> BigInteger:
    return BigInteger.from_int(value)


# =============================================================================
# FLOAT BITS
# =============================================================================


class TestFloatBits:
    """Тесты классификации и декомпозиции float"""

    def test_classification(self) -> None:
        assert is_nan(float("nan"))
        assert is_infinite(float("-inf"))
        assert is_integral(4.0)
        assert is_integral(-0.0)
        assert not is_integral(1.5)
        assert not is_integral(float("nan"))
        assert not is_integral(float("inf"))

    def test_bits_of_one(self) -> None:
        assert float_to_bits(1.0) == 0x3FF0000000000000

    @pytest.mark.parametrize(
        "value",
        [1.0, -1.0, 0.5, 1.5, 3.0, 2.0 ** 60, 0.1, -123.456, sys.float_info.max, 5e-324, 2.2250738585072014e-308],
    )
    def test_decompose_is_exact(self, value) -> None:
        """|value| == mantissa * 2^exponent"""
        parts = decompose(value)
        assert parts.negative == (value < 0)
        assert parts.mantissa % 2 == 1
        assert math.ldexp(parts.mantissa, parts.exponent) == abs(value)

    def test_decompose_zero(self) -> None:
        assert decompose(0.0) == (False, 0, 0)
        assert decompose(-0.0) == (True, 0, 0)

    def test_decompose_non_finite_raises(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            decompose(float("inf"))

    def test_compose(self) -> None:
        assert compose(False, 3, 2) == 12.0
        assert compose(True, 1, -1) == -0.5
        assert compose(False, 1, 1024) == math.inf
        assert compose(True, 1, 1024) == -math.inf


# =============================================================================
# SAME DOMAIN
# =============================================================================


class TestCompareSameDomain:
    """Тесты compare_same_domain"""

    def test_total_order(self) -> None:
        values = sorted([-(2 ** 100), -(2 ** 32), -1, 0, 1, 2 ** 32, 2 ** 100])
        for i, a in enumerate(values):
            for j, b in enumerate(values):
                expected = (i > j) - (i < j)
                assert compare_same_domain(B(a), B(b)) == expected

    def test_negative_magnitudes_reverse(self) -> None:
        assert compare_same_domain(B(-5), B(-3)) == -1
        assert compare_same_domain(B(-3), B(-5)) == 1


# =============================================================================
# CROSS DOMAIN
# =============================================================================


class TestCompareCrossDomain:
    """Тесты compare_cross_domain / equals_cross_domain"""

    def test_no_rounding_at_2_pow_53(self) -> None:
        """2^53 - 1 < 2^53 как float: сравнение точное"""
        assert compare_cross_domain(B(MAX_SAFE_INTEGER), 9007199254740992.0) == -1
        assert compare_cross_domain(B(MAX_SAFE_INTEGER + 1), 9007199254740992.0) == 0
        assert compare_cross_domain(B(MAX_SAFE_INTEGER + 2), 9007199254740992.0) == 1

    def test_beyond_float_precision(self) -> None:
        """2^100 + 1 > float(2^100), хотя float(2^100 + 1) == float(2^100)"""
        assert compare_cross_domain(B(2 ** 100 + 1), 2.0 ** 100) == 1
        assert compare_cross_domain(B(2 ** 100 - 1), 2.0 ** 100) == -1

    def test_fractional_float(self) -> None:
        assert compare_cross_domain(B(1), 1.5) == -1
        assert compare_cross_domain(B(2), 1.5) == 1
        assert compare_cross_domain(B(-1), -1.5) == 1
        assert compare_cross_domain(B(-2), -1.5) == -1
        assert compare_cross_domain(ZERO, 5e-324) == -1
        assert compare_cross_domain(ZERO, -5e-324) == 1

    def test_nan_is_unordered(self) -> None:
        assert compare_cross_domain(B(3), float("nan")) is None
        assert not equals_cross_domain(B(3), float("nan"))

    def test_infinities(self) -> None:
        huge = B(2 ** 5000)
        assert compare_cross_domain(huge, math.inf) == -1
        assert compare_cross_domain(-huge, -math.inf) == 1

    def test_negative_zero_equals_zero(self) -> None:
        assert compare_cross_domain(ZERO, -0.0) == 0
        assert equals_cross_domain(ZERO, -0.0)

    def test_equality_requires_integral(self) -> None:
        assert equals_cross_domain(B(4), 4.0)
        assert not equals_cross_domain(B(4), 4.5)
        assert equals_cross_domain(B(-(2 ** 70)), -(2.0 ** 70))

    def test_sign_mismatch(self) -> None:
        assert compare_cross_domain(B(-1), 0.0) == -1
        assert compare_cross_domain(B(1), -0.5) == 1
        assert compare_cross_domain(ZERO, 0.5) == -1
