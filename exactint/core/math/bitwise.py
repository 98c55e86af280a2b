"""
Bitwise Engine — битовые операции над бесконечным дополнительным кодом

Модель: каждое BigInteger (включая отрицательные) интерпретируется как
бесконечная битовая строка в дополнительном коде. Отрицательное x
эквивалентно инвертированным битам (-x - 1), бесконечно расширенным
знаковым битом.

Бесконечный буфер не создаётся: модуль переводится в дополнительный код
ровно на ширину самого длинного операнда, а знаковый бит каждого операнда
учитывается отдельно как значение всех старших (бесконечных) разрядов.

Операции:
- bitwise_and, bitwise_or, bitwise_xor
- shift_left, shift_right (отрицательный сдвиг = сдвиг в другую сторону)
- bitwise_not(x) = -x - 1

Беззнакового сдвига вправо нет: «беззнаковость» бессмысленна для
знакового типа неограниченной ширины. Для такой семантики значение
сначала ограничивается as_uint_n.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Короткий операнд расширяется знаковым битом, а не нулями
2. Сдвиг вправо отрицательного значения арифметический (floor)
3. Результат всегда канонический
"""

import operator
from typing import Callable, List, Optional

from exactint.core.domain.big_integer import ONE, BigInteger
from exactint.core.errors import ResourceLimitError
from exactint.core.math.arithmetic import negate, subtract
from exactint.core.math.digits import (
    DIGIT_BITS,
    DIGIT_MASK,
    MAX_BIT_LENGTH_DEFAULT,
    ONE_MAGNITUDE,
    Magnitude,
    add_magnitude,
    normalize,
    shift_left_magnitude,
    shift_right_magnitude,
    subtract_magnitude,
)

DigitOp = Callable[[int, int], int]


# =============================================================================
# ДОПОЛНИТЕЛЬНЫЙ КОД
# =============================================================================


def to_twos_complement(value: BigInteger, width: int) -> List[int]:
    """
    Младшие width цифр дополнительного кода value.

    Старшие (бесконечные) разряды равны 0 для неотрицательных и
    DIGIT_MASK для отрицательных значений. width >= len(value.magnitude).
    """
    digits = list(value.magnitude) + [0] * (width - len(value.magnitude))
    if not value.is_negative:
        return digits

    # -m = ~m + 1
    carry = 1
    for i, digit in enumerate(digits):
        total = ((~digit) & DIGIT_MASK) + carry
        digits[i] = total & DIGIT_MASK
        carry = total >> DIGIT_BITS
    return digits


def from_twos_complement(digits: List[int], negative: bool) -> BigInteger:
    """
    Значение по цифрам дополнительного кода и знаковому биту.

    Для отрицательных модуль = ~digits + 1; перенос из старшей цифры
    означает модуль 2^(32*width).
    """
    if not negative:
        return BigInteger.from_magnitude(normalize(digits))

    magnitude: List[int] = []
    carry = 1
    for digit in digits:
        total = ((~digit) & DIGIT_MASK) + carry
        magnitude.append(total & DIGIT_MASK)
        carry = total >> DIGIT_BITS
    if carry:
        magnitude.append(carry)
    return BigInteger.from_magnitude(normalize(magnitude), negative=True)


def _bitwise(a: BigInteger, b: BigInteger, op: DigitOp) -> BigInteger:
    width = max(len(a.magnitude), len(b.magnitude))
    a_digits = to_twos_complement(a, width)
    b_digits = to_twos_complement(b, width)

    # Знаковый бит результата = op над знаковыми битами операндов
    negative = bool(op(int(a.is_negative), int(b.is_negative)))
    digits = [op(x, y) for x, y in zip(a_digits, b_digits)]
    return from_twos_complement(digits, negative)


# =============================================================================
# AND / OR / XOR / NOT
# =============================================================================


def bitwise_and(a: BigInteger, b: BigInteger) -> BigInteger:
    """
    a & b над бесконечным дополнительным кодом.

    Examples:
        >>> bitwise_and(BigInteger.from_int(-1), BigInteger.from_int(12))
        BigInteger(12)
    """
    return _bitwise(a, b, operator.and_)


def bitwise_or(a: BigInteger, b: BigInteger) -> BigInteger:
    """a | b над бесконечным дополнительным кодом."""
    return _bitwise(a, b, operator.or_)


def bitwise_xor(a: BigInteger, b: BigInteger) -> BigInteger:
    """a ^ b над бесконечным дополнительным кодом."""
    return _bitwise(a, b, operator.xor)


def bitwise_not(a: BigInteger) -> BigInteger:
    """~a = -a - 1 (тождество дополнительного кода)."""
    return subtract(negate(a), ONE)


# =============================================================================
# СДВИГИ
# =============================================================================


def shift_left(
    value: BigInteger,
    count: int,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
) -> BigInteger:
    """
    value * 2^count; отрицательный count — сдвиг вправо на |count|.

    Raises:
        ResourceLimitError: если результат длиннее max_bit_length
    """
    if count < 0:
        return shift_right(value, -count, max_bit_length)
    if value.is_zero or count == 0:
        return value

    if max_bit_length is not None and value.bit_length() + count > max_bit_length:
        raise ResourceLimitError(
            f"shift_left result has {value.bit_length() + count} bits, "
            f"exceeds max_bit_length={max_bit_length}"
        )

    return BigInteger.from_magnitude(
        shift_left_magnitude(value.magnitude, count), negative=value.is_negative
    )


def shift_right(
    value: BigInteger,
    count: int,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
) -> BigInteger:
    """
    Арифметический сдвиг вправо: floor(value / 2^count).

    Отрицательный count — сдвиг влево на |count|. Для отрицательного
    value: floor(-m / 2^n) = -(((m - 1) >> n) + 1).

    Examples:
        >>> shift_right(BigInteger.from_int(-5), 1)
        BigInteger(-3)
    """
    if count < 0:
        return shift_left(value, -count, max_bit_length)
    if value.is_zero or count == 0:
        return value

    if not value.is_negative:
        return BigInteger.from_magnitude(shift_right_magnitude(value.magnitude, count))

    reduced: Magnitude = subtract_magnitude(value.magnitude, ONE_MAGNITUDE)
    shifted = add_magnitude(shift_right_magnitude(reduced, count), ONE_MAGNITUDE)
    return BigInteger.from_magnitude(shifted, negative=True)

