"""
FloatBits — классификация и точная декомпозиция float (IEEE-754 binary64)

Float — внешний домен, которым ядро не владеет. Модуль даёт ровно то,
что нужно границе доменов:
- NaN / ±Inf классификация
- проверка математической целочисленности
- точная декомпозиция |f| = mantissa * 2^exponent по битовому образу
  (без округления и без арифметики с плавающей точкой)
- сборка float из (mantissa, exponent) для уже округлённой мантиссы

Битовый образ читается через struct, поля выделяются масками:
    sign(1) | exponent(11) | fraction(52)
"""

import math
from struct import Struct
from typing import Final, NamedTuple

# =============================================================================
# КОНСТАНТЫ ФОРМАТА binary64
# =============================================================================

F64_FRACTION_BITS: Final[int] = 52
F64_EXPONENT_BIAS: Final[int] = 1023
F64_EXPONENT_MASK: Final[int] = 0x7FF
F64_FRACTION_MASK: Final[int] = (1 << F64_FRACTION_BITS) - 1
F64_SIGN_SHIFT: Final[int] = 63

# Точность мантиссы (с неявной единицей)
F64_PRECISION: Final[int] = F64_FRACTION_BITS + 1

# Наибольший показатель конечного float: max = (2 - 2^-52) * 2^1023
F64_MAX_EXPONENT: Final[int] = 1023

# Наибольшее целое, до которого все целые представимы точно (2^53 - 1)
MAX_SAFE_INTEGER: Final[int] = (1 << F64_PRECISION) - 1

_F64: Final[Struct] = Struct("<d")
_U64: Final[Struct] = Struct("<Q")


class FloatParts(NamedTuple):
    """Точная декомпозиция конечного float: value = ±mantissa * 2^exponent."""

    negative: bool
    mantissa: int  # 0 <= mantissa < 2^53
    exponent: int  # -1074 <= exponent <= 971


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def float_to_bits(value: float) -> int:
    """Битовый образ float как беззнаковое 64-битное целое."""
    return _U64.unpack(_F64.pack(value))[0]


def is_nan(value: float) -> bool:
    """Проверка NaN."""
    return math.isnan(value)


def is_infinite(value: float) -> bool:
    """Проверка ±Inf."""
    return math.isinf(value)


def is_integral(value: float) -> bool:
    """
    Является ли float конечным математическим целым.

    Examples:
        >>> is_integral(4.0)
        True
        >>> is_integral(1.5)
        False
        >>> is_integral(float("inf"))
        False
    """
    if not math.isfinite(value):
        return False
    return value.is_integer()


# =============================================================================
# ДЕКОМПОЗИЦИЯ
# =============================================================================


def decompose(value: float) -> FloatParts:
    """
    Точная декомпозиция конечного float.

    Нормализованные числа: mantissa = 2^52 | fraction, exponent = e - 1075.
    Субнормальные: mantissa = fraction, exponent = -1074.
    Ноль (включая -0.0): mantissa = 0.

    Mantissa приводится к нечётной (или нулевой) форме, чтобы показатель был
    максимальным: это упрощает проверку целочисленности (exponent >= 0).

    Raises:
        ValueError: если value — NaN или ±Inf
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot decompose non-finite float: {value}")

    bits = float_to_bits(value)
    negative = bool(bits >> F64_SIGN_SHIFT)
    biased_exponent = (bits >> F64_FRACTION_BITS) & F64_EXPONENT_MASK
    fraction = bits & F64_FRACTION_MASK

    if biased_exponent == 0:
        mantissa = fraction
        exponent = 1 - F64_EXPONENT_BIAS - F64_FRACTION_BITS
    else:
        mantissa = fraction | (1 << F64_FRACTION_BITS)
        exponent = biased_exponent - F64_EXPONENT_BIAS - F64_FRACTION_BITS

    if mantissa == 0:
        return FloatParts(negative=negative, mantissa=0, exponent=0)

    trailing = (mantissa & -mantissa).bit_length() - 1
    return FloatParts(
        negative=negative,
        mantissa=mantissa >> trailing,
        exponent=exponent + trailing,
    )


def compose(negative: bool, mantissa: int, exponent: int) -> float:
    """
    Сборка float из уже округлённой мантиссы (< 2^53) и показателя.

    Переполнение даёт ±Inf (никогда не исключение): вызывающий слой уже
    решил, что результат — ближайший представимый.
    """
    if mantissa == 0:
        return -0.0 if negative else 0.0

    if exponent + mantissa.bit_length() > F64_MAX_EXPONENT + 1:
        result = math.inf
    else:
        result = math.ldexp(float(mantissa), exponent)
    return -result if negative else result
