"""
Arithmetic Engine — знаковая арифметика произвольной точности

Операции над BigInteger × BigInteger, собранные из примитивов Digit Store:
- add, subtract, multiply: точный результат, знак по стандартным правилам
- divide, remainder: деление с округлением к нулю (truncating)
- power: возведение в неотрицательную степень повторным возведением в квадрат
- negate, absolute

Проверка доменов выполняется выше (Domain Guard); здесь операнды всегда
BigInteger, поэтому ошибок типа быть не может.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. a == divide(a, b) * b + remainder(a, b) для всех b != 0
2. sign(remainder(a, b)) ∈ {sign(a), ZERO}
3. power(x, 0) == 1 для всех x, включая power(0, 0) == 1
4. Деление на ноль → DivisionByZeroError (бесконечностей в домене нет)
5. Результат длиннее max_bit_length → ResourceLimitError
"""

from typing import Optional, Tuple

from exactint.core.domain.big_integer import ONE, ZERO, BigInteger, Sign
from exactint.core.errors import DivisionByZeroError, IntRangeError, ResourceLimitError
from exactint.core.math.digits import (
    KARATSUBA_CUTOFF_DEFAULT,
    MAX_BIT_LENGTH_DEFAULT,
    Magnitude,
    add_magnitude,
    bit_at_magnitude,
    bit_length_magnitude,
    compare_magnitude,
    divmod_magnitude,
    multiply_magnitude,
    subtract_magnitude,
)


def check_bit_length(value: BigInteger, max_bit_length: Optional[int], operation: str) -> BigInteger:
    """
    Проверка resource ceiling для готового результата.

    Raises:
        ResourceLimitError: если value.bit_length() > max_bit_length
    """
    if max_bit_length is not None and value.bit_length() > max_bit_length:
        raise ResourceLimitError(
            f"{operation} result has {value.bit_length()} bits, "
            f"exceeds max_bit_length={max_bit_length}"
        )
    return value


def _signed_sum(
    a_negative: bool, a_mag: Magnitude, b_negative: bool, b_mag: Magnitude
) -> BigInteger:
    """Сумма двух знаковых модулей."""
    if a_negative == b_negative:
        return BigInteger.from_magnitude(add_magnitude(a_mag, b_mag), negative=a_negative)

    order = compare_magnitude(a_mag, b_mag)
    if order == 0:
        return ZERO
    if order > 0:
        return BigInteger.from_magnitude(subtract_magnitude(a_mag, b_mag), negative=a_negative)
    return BigInteger.from_magnitude(subtract_magnitude(b_mag, a_mag), negative=b_negative)


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ / ЗНАК
# =============================================================================


def add(a: BigInteger, b: BigInteger) -> BigInteger:
    """
    Сумма a + b.

    Examples:
        >>> add(BigInteger.from_int(-7), BigInteger.from_int(5))
        BigInteger(-2)
    """
    if a.is_zero:
        return b
    if b.is_zero:
        return a
    return _signed_sum(a.is_negative, a.magnitude, b.is_negative, b.magnitude)


def subtract(a: BigInteger, b: BigInteger) -> BigInteger:
    """Разность a - b."""
    if b.is_zero:
        return a
    return _signed_sum(a.is_negative, a.magnitude, not b.is_negative, b.magnitude)


def negate(a: BigInteger) -> BigInteger:
    """Смена знака; negate(0) == 0."""
    if a.is_zero:
        return a
    return BigInteger.from_magnitude(a.magnitude, negative=not a.is_negative)


def absolute(a: BigInteger) -> BigInteger:
    """Модуль |a|."""
    if a.is_negative:
        return negate(a)
    return a


def sign_of(a: BigInteger) -> Sign:
    """Знак значения."""
    return a.sign


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply(
    a: BigInteger,
    b: BigInteger,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
    karatsuba_cutoff: int = KARATSUBA_CUTOFF_DEFAULT,
) -> BigInteger:
    """
    Произведение a * b.

    Знак неотрицателен, если знаки операндов совпадают или один из них ноль.
    Длина произведения не меньше bits(a) + bits(b) - 1, поэтому заведомое
    превышение ceiling обнаруживается до умножения.

    Raises:
        ResourceLimitError: если результат длиннее max_bit_length
    """
    if a.is_zero or b.is_zero:
        return ZERO

    if max_bit_length is not None:
        lower_bound = a.bit_length() + b.bit_length() - 1
        if lower_bound > max_bit_length:
            raise ResourceLimitError(
                f"multiply result has at least {lower_bound} bits, "
                f"exceeds max_bit_length={max_bit_length}"
            )

    product = multiply_magnitude(a.magnitude, b.magnitude, karatsuba_cutoff)
    result = BigInteger.from_magnitude(product, negative=a.is_negative != b.is_negative)
    return check_bit_length(result, max_bit_length, "multiply")


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_truncated(a: BigInteger, b: BigInteger) -> Tuple[BigInteger, BigInteger]:
    """
    Деление с округлением к нулю: (quotient, remainder) за один вызов.

    Частное имеет знак a*b, остаток — знак делимого (или ноль),
    так что a == q*b + r.

    Raises:
        DivisionByZeroError: если b == 0

    Examples:
        >>> q, r = divmod_truncated(BigInteger.from_int(-7), BigInteger.from_int(2))
        >>> (q, r)
        (BigInteger(-3), BigInteger(-1))
    """
    if b.is_zero:
        raise DivisionByZeroError("BigInteger division by zero")

    quotient_mag, remainder_mag = divmod_magnitude(a.magnitude, b.magnitude)
    quotient = BigInteger.from_magnitude(quotient_mag, negative=a.is_negative != b.is_negative)
    remainder = BigInteger.from_magnitude(remainder_mag, negative=a.is_negative)
    return quotient, remainder


def divide(a: BigInteger, b: BigInteger) -> BigInteger:
    """Частное a / b с округлением к нулю."""
    return divmod_truncated(a, b)[0]


def remainder(a: BigInteger, b: BigInteger) -> BigInteger:
    """Остаток a % b со знаком делимого."""
    return divmod_truncated(a, b)[1]


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def power(
    base: BigInteger,
    exponent: BigInteger,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
    karatsuba_cutoff: int = KARATSUBA_CUTOFF_DEFAULT,
) -> BigInteger:
    """
    Возведение в степень base ** exponent повторным возведением в квадрат.

    Raises:
        IntRangeError: если exponent < 0 (результат не целый)
        ResourceLimitError: если результат длиннее max_bit_length

    Examples:
        >>> power(BigInteger.from_int(0), BigInteger.from_int(0))
        BigInteger(1)
    """
    if exponent.is_negative:
        raise IntRangeError(f"exponent must be non-negative, got {exponent}")

    if exponent.is_zero:
        return ONE
    if base.is_zero:
        return ZERO

    negative_result = base.is_negative and exponent.magnitude[0] & 1 == 1

    # |base| == 1: результат ±1 при любой степени
    if base.magnitude == (1,):
        return BigInteger.from_magnitude((1,), negative=negative_result)

    # Нижняя граница длины: (bits(base) - 1) * e + 1
    if max_bit_length is not None:
        base_bits = base.bit_length()
        exponent_bits = exponent.bit_length()
        if exponent_bits > max_bit_length.bit_length() + 1:
            raise ResourceLimitError(
                f"power exponent {exponent} exceeds max_bit_length={max_bit_length}"
            )
        exponent_value = exponent.to_int()
        lower_bound = (base_bits - 1) * exponent_value + 1
        if lower_bound > max_bit_length:
            raise ResourceLimitError(
                f"power result has at least {lower_bound} bits, "
                f"exceeds max_bit_length={max_bit_length}"
            )

    result = (1,)
    square = base.magnitude
    exponent_mag = exponent.magnitude
    total_bits = bit_length_magnitude(exponent_mag)
    for index in range(total_bits):
        if bit_at_magnitude(exponent_mag, index):
            result = multiply_magnitude(result, square, karatsuba_cutoff)
        if index + 1 < total_bits:
            square = multiply_magnitude(square, square, karatsuba_cutoff)

    value = BigInteger.from_magnitude(result, negative=negative_result)
    return check_bit_length(value, max_bit_length, "power")
