"""
Conversion & Wrap Layer — явные мосты между доменами и фиксированная ширина

Единственный допустимый способ преобразований между:
- BigInteger ↔ строка (radix 2..36)
- BigInteger ↔ float (from_float только для точных целых, to_float —
  единственный мост с потерей точности, только по явному запросу)
- BigInteger ↔ int хоста (точный литерал)
- BigInteger → фиксированная ширина (as_int_n / as_uint_n)

ЗАПРЕЩЕНО смешивать домены без явного конвертера из этого модуля.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Потеря информации → исключение (кроме to_float и wrap по запросу)
2. from_float(1.5) → IntRangeError, никогда не усечение и не округление
3. Legacy octal ("0640") → IntSyntaxError
4. 0 <= as_uint_n(x, w) < 2^w
5. -2^(w-1) <= as_int_n(x, w) <= 2^(w-1) - 1
"""

from typing import Any, Dict, Final, List, Optional

from exactint.core.domain.big_integer import ZERO, BigInteger
from exactint.core.domain.float_bits import F64_PRECISION, compose, decompose, is_integral
from exactint.core.errors import DomainTypeError, IntRangeError, IntSyntaxError, ResourceLimitError
from exactint.core.math.digits import (
    DIGIT_BASE,
    MAX_BIT_LENGTH_DEFAULT,
    Magnitude,
    bit_at_magnitude,
    divmod_small,
    magnitude_from_int,
    magnitude_to_int,
    multiply_add_small,
    power_of_two_magnitude,
    shift_left_magnitude,
    shift_right_magnitude,
    subtract_magnitude,
    truncate_magnitude,
)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

RADIX_MIN: Final[int] = 2
RADIX_MAX: Final[int] = 36

DIGIT_CHARS: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"

# Префиксы литералов: 0b / 0o / 0x (любой регистр)
PREFIX_RADIX: Final[Dict[str, int]] = {"b": 2, "o": 8, "x": 16}


def _char_value(char: str) -> int:
    """Значение символа-цифры (36 для недопустимых символов)."""
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    lower = char.lower()
    if "a" <= lower <= "z" and char.isascii():
        return ord(lower) - ord("a") + 10
    return RADIX_MAX


def _chunk_size(radix: int) -> int:
    """Наибольшее k, при котором radix^k помещается в одну цифру."""
    size = 1
    while radix ** (size + 1) < DIGIT_BASE:
        size += 1
    return size


def validate_radix(radix: Any) -> int:
    """
    Проверка radix.

    Raises:
        IntRangeError: если radix не целое в [2, 36]
    """
    if isinstance(radix, bool) or not isinstance(radix, int):
        raise IntRangeError(f"radix must be an integer, got {radix!r}")
    if not RADIX_MIN <= radix <= RADIX_MAX:
        raise IntRangeError(f"radix must be between {RADIX_MIN} and {RADIX_MAX}, got {radix}")
    return radix


# =============================================================================
# СТРОКИ
# =============================================================================


def parse_big_integer(text: str, radix: Optional[int] = None) -> BigInteger:
    """
    Парсинг BigInteger из строки.

    Формат: [пробелы][+|-][0b|0o|0x]цифры[пробелы]. Без префикса и без
    radix — десятичная запись.

    Args:
        text: Текст числа
        radix: Явное основание (2..36); префикс, если есть, обязан совпадать

    Raises:
        IntSyntaxError: пустой текст, посторонние символы, дробная или
            экспоненциальная запись, разделители, legacy octal, конфликт
            префикса с radix
        IntRangeError: radix вне [2, 36]

    Examples:
        >>> parse_big_integer("0x100", 16)
        BigInteger(256)
        >>> parse_big_integer("-42")
        BigInteger(-42)
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_big_integer expects str, got {type(text).__name__}")
    if radix is not None:
        validate_radix(radix)

    body = text.strip()
    if not body:
        raise IntSyntaxError(f"cannot parse empty string as BigInteger: {text!r}")

    negative = False
    if body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]

    effective_radix = radix if radix is not None else 10
    has_prefix = False
    if len(body) >= 2 and body[0] == "0" and body[1].lower() in PREFIX_RADIX:
        marker = body[1].lower()
        # Для radix >= 12 'b' (и 'x' для radix >= 34) является обычной цифрой
        if radix is None or _char_value(marker) >= radix:
            prefix_radix = PREFIX_RADIX[marker]
            if radix is not None and radix != prefix_radix:
                raise IntSyntaxError(
                    f"prefix 0{marker} conflicts with radix {radix}: {text!r}"
                )
            effective_radix = prefix_radix
            has_prefix = True
            body = body[2:]

    if not body:
        raise IntSyntaxError(f"missing digits in {text!r}")

    if effective_radix == 10 and not has_prefix and len(body) > 1 and body[0] == "0":
        raise IntSyntaxError(f"legacy octal literal is not allowed: {text!r}")

    for char in body:
        if _char_value(char) < effective_radix:
            continue
        if char in ".eE" and effective_radix == 10:
            raise IntSyntaxError(
                f"fractional or exponent notation cannot be a BigInteger: {text!r}"
            )
        if char == "_":
            raise IntSyntaxError(f"numeric separators are not allowed: {text!r}")
        raise IntSyntaxError(
            f"invalid digit {char!r} for radix {effective_radix} in {text!r}"
        )

    chunk = _chunk_size(effective_radix)
    magnitude: Magnitude = ()
    for start in range(0, len(body), chunk):
        piece = body[start:start + chunk]
        value = 0
        for char in piece:
            value = value * effective_radix + _char_value(char)
        magnitude = multiply_add_small(magnitude, effective_radix ** len(piece), value)

    return BigInteger.from_magnitude(magnitude, negative=negative)


def to_radix_string(value: BigInteger, radix: int = 10) -> str:
    """
    Строковое представление в radix (строчные цифры, '-' для отрицательных).

    Raises:
        IntRangeError: если radix вне [2, 36]

    Examples:
        >>> to_radix_string(BigInteger.from_int(-255), 16)
        '-ff'
    """
    validate_radix(radix)
    if value.is_zero:
        return "0"

    chunk = _chunk_size(radix)
    divisor = radix ** chunk
    pieces: List[str] = []
    magnitude = value.magnitude
    while magnitude:
        magnitude, part = divmod_small(magnitude, divisor)
        chars = []
        for _ in range(chunk):
            part, digit = divmod(part, radix)
            chars.append(DIGIT_CHARS[digit])
            if not magnitude and not part:
                break
        pieces.append("".join(reversed(chars)))

    text = "".join(reversed(pieces))
    return "-" + text if value.is_negative else text


# =============================================================================
# FLOAT
# =============================================================================


def from_float(value: float) -> BigInteger:
    """
    BigInteger из float: только конечное математическое целое.

    Raises:
        IntRangeError: дробное значение, NaN или ±Inf

    Examples:
        >>> from_float(4.0)
        BigInteger(4)
    """
    if not is_integral(value):
        raise IntRangeError(
            f"cannot convert {value!r} to BigInteger: not a finite integer"
        )

    parts = decompose(value)
    magnitude = shift_left_magnitude(magnitude_from_int(parts.mantissa), parts.exponent)
    return BigInteger.from_magnitude(magnitude, negative=parts.negative)


def to_float(value: BigInteger) -> float:
    """
    Ближайший float (round half to even).

    Единственный мост с потерей точности; модули от 2^1024 (с учётом
    округления) дают ±Inf.
    """
    bits = value.bit_length()
    if bits <= F64_PRECISION:
        return compose(value.is_negative, magnitude_to_int(value.magnitude), 0)

    # 54 старших бита: 53 бита мантиссы + round bit, остальное в sticky
    shift = bits - (F64_PRECISION + 1)
    top = magnitude_to_int(shift_right_magnitude(value.magnitude, shift))
    sticky = bool(truncate_magnitude(value.magnitude, shift))

    mantissa = top >> 1
    exponent = shift + 1
    if top & 1 and (sticky or mantissa & 1):
        mantissa += 1
        if mantissa == 1 << F64_PRECISION:
            mantissa >>= 1
            exponent += 1

    return compose(value.is_negative, mantissa, exponent)


# =============================================================================
# ФИКСИРОВАННАЯ ШИРИНА
# =============================================================================


def _validate_width(width: Any, minimum: int) -> int:
    if isinstance(width, BigInteger):
        width = width.to_int()
    if isinstance(width, bool) or not isinstance(width, int):
        raise IntRangeError(f"width must be an integer, got {width!r}")
    if width < minimum:
        raise IntRangeError(f"width must be >= {minimum}, got {width}")
    return width


def as_uint_n(
    value: BigInteger,
    width: int,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
) -> BigInteger:
    """
    value mod 2^width, результат в [0, 2^width - 1].

    Raises:
        IntRangeError: width отрицательная или не целая
        ResourceLimitError: отрицательное value и width > max_bit_length

    Examples:
        >>> as_uint_n(BigInteger.from_int(-1), 8)
        BigInteger(255)
    """
    width = _validate_width(width, 0)
    if width == 0 or value.is_zero:
        return ZERO

    low = truncate_magnitude(value.magnitude, width)
    if not value.is_negative:
        return BigInteger.from_magnitude(low)
    if not low:
        return ZERO

    if max_bit_length is not None and width > max_bit_length:
        raise ResourceLimitError(
            f"as_uint_n width {width} exceeds max_bit_length={max_bit_length}"
        )
    return BigInteger.from_magnitude(subtract_magnitude(power_of_two_magnitude(width), low))


def as_int_n(
    value: BigInteger,
    width: int,
    max_bit_length: Optional[int] = MAX_BIT_LENGTH_DEFAULT,
) -> BigInteger:
    """
    Единственное значение ≡ value (mod 2^width) в [-2^(width-1), 2^(width-1) - 1].

    Raises:
        IntRangeError: width < 1 или не целая

    Examples:
        >>> as_int_n(BigInteger.from_int(255), 8)
        BigInteger(-1)
    """
    width = _validate_width(width, 1)

    # |value| < 2^(width-1): значение уже в диапазоне
    if value.bit_length() < width:
        return value

    unsigned = as_uint_n(value, width, max_bit_length)
    if not bit_at_magnitude(unsigned.magnitude, width - 1):
        return unsigned
    return BigInteger.from_magnitude(
        subtract_magnitude(power_of_two_magnitude(width), unsigned.magnitude),
        negative=True,
    )


# =============================================================================
# КОНСТРУКТОР BigInt(value)
# =============================================================================


def coerce_big_integer(value: Any) -> BigInteger:
    """
    Явное построение BigInteger из значения хоста.

    - BigInteger → без изменений
    - int → точный литерал
    - str → parse_big_integer
    - float → from_float (только точные целые)

    Raises:
        DomainTypeError: bool и прочие типы
    """
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, bool):
        raise DomainTypeError("cannot convert bool to BigInteger")
    if isinstance(value, int):
        return BigInteger.from_int(value)
    if isinstance(value, str):
        return parse_big_integer(value)
    if isinstance(value, float):
        return from_float(value)
    raise DomainTypeError(f"cannot convert {type(value).__name__} to BigInteger")
