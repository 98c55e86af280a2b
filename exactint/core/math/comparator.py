"""
Comparator — полный порядок BigInteger и точное сравнение с float

- compare_same_domain: лексикографический порядок (sign, magnitude)
- compare_cross_domain: единственная разрешённая операция между доменами;
  float раскладывается на точные mantissa * 2^exponent, никакого
  округления до сравнения не происходит

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. compare_same_domain — строгий полный порядок (антисимметричен,
   транзитивен, согласован с равенством канонических представлений)
2. NaN не упорядочен ни с чем: все сравнения и равенство ложны
3. +Inf больше любого BigInteger, -Inf меньше любого
4. BigInteger(2^53 - 1) < 2^53 как float (точно, без округления)
"""

import math
from typing import Optional

from exactint.core.domain.big_integer import BigInteger
from exactint.core.domain.float_bits import decompose
from exactint.core.math.digits import (
    compare_magnitude,
    magnitude_from_int,
    shift_left_magnitude,
    shift_right_magnitude,
    truncate_magnitude,
)


def compare_same_domain(a: BigInteger, b: BigInteger) -> int:
    """
    Сравнение двух BigInteger.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b
    """
    if a.sign != b.sign:
        return -1 if a.sign < b.sign else 1

    order = compare_magnitude(a.magnitude, b.magnitude)
    # Для отрицательных порядок модулей обратный
    return -order if a.is_negative else order


def compare_cross_domain(a: BigInteger, b: float) -> Optional[int]:
    """
    Точное сравнение BigInteger с float.

    Returns:
        -1 / 0 / 1 как compare_same_domain; None если b — NaN (неупорядочено)

    Examples:
        >>> compare_cross_domain(BigInteger.from_int(9007199254740991), 9007199254740992.0)
        -1
        >>> compare_cross_domain(BigInteger.from_int(3), float("nan")) is None
        True
    """
    if math.isnan(b):
        return None
    if math.isinf(b):
        return -1 if b > 0 else 1

    parts = decompose(b)
    if parts.mantissa == 0:
        float_sign = 0
    else:
        float_sign = -1 if parts.negative else 1

    if a.sign != float_sign:
        return -1 if a.sign < float_sign else 1
    if float_sign == 0:
        return 0

    # Знаки совпадают: сравниваем |a| с |b| = mantissa * 2^exponent
    mantissa = magnitude_from_int(parts.mantissa)
    if parts.exponent >= 0:
        order = compare_magnitude(a.magnitude, shift_left_magnitude(mantissa, parts.exponent))
    else:
        fraction_bits = -parts.exponent
        integer_part = shift_right_magnitude(mantissa, fraction_bits)
        has_fraction = bool(truncate_magnitude(mantissa, fraction_bits))
        order = compare_magnitude(a.magnitude, integer_part)
        if order == 0 and has_fraction:
            # |a| == floor(|b|) < |b|
            order = -1

    return -order if float_sign < 0 else order


def equals_cross_domain(a: BigInteger, b: float) -> bool:
    """Равенство BigInteger и float: float целый и численно идентичен."""
    return compare_cross_domain(a, b) == 0
