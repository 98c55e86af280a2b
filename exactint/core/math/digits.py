"""
Digit Store — хранение модуля числа и примитивы над ним

Модуль задаёт каноническое представление модуля (magnitude) BigInteger
и примитивные операции, из которых собираются все верхние слои:
- сравнение, сложение, вычитание модулей
- умножение (schoolbook для малых операндов, Karatsuba для больших)
- деление с остатком за один вызов (Knuth, Algorithm D)
- сдвиги, усечение, работа с отдельными битами

ПРЕДСТАВЛЕНИЕ:
    Magnitude = tuple[int, ...] цифр по основанию 2^32,
    младшая цифра первой (most-significant digit last).
    Ноль — пустой кортеж ().

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каноничность: старшая цифра никогда не равна 0
2. Каждая цифра в диапазоне [0, 2^32 - 1]
3. Канонический вход → канонический выход для всех функций
4. Все функции чистые (кортежи неизменяемы, входы не модифицируются)
5. Schoolbook и Karatsuba дают побитно идентичный результат
"""

from typing import Final, List, Sequence, Tuple

from exactint.core.errors import DivisionByZeroError

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Ширина одной цифры в битах
DIGIT_BITS: Final[int] = 32

# Основание системы счисления цифр
DIGIT_BASE: Final[int] = 1 << DIGIT_BITS

# Маска одной цифры
DIGIT_MASK: Final[int] = DIGIT_BASE - 1

# Порог (в цифрах) переключения schoolbook → Karatsuba
KARATSUBA_CUTOFF_DEFAULT: Final[int] = 40

# Минимальный допустимый порог: при меньшем рекурсия Karatsuba не сокращает
# размер операндов
KARATSUBA_MIN_CUTOFF: Final[int] = 4

# Максимальная длина результата в битах по умолчанию (2^30)
MAX_BIT_LENGTH_DEFAULT: Final[int] = 1 << 30

Magnitude = Tuple[int, ...]

ZERO_MAGNITUDE: Final[Magnitude] = ()
ONE_MAGNITUDE: Final[Magnitude] = (1,)


# =============================================================================
# КАНОНИЧНОСТЬ
# =============================================================================


def normalize(digits: Sequence[int]) -> Magnitude:
    """
    Приведение последовательности цифр к каноническому виду.

    Отбрасывает старшие нулевые цифры.

    Examples:
        >>> normalize([5, 0, 0])
        (5,)
        >>> normalize([0, 0])
        ()
    """
    size = len(digits)
    while size > 0 and digits[size - 1] == 0:
        size -= 1
    return tuple(digits[:size])


def is_canonical(digits: Sequence[int]) -> bool:
    """Проверка каноничности: цифры в диапазоне, старшая не ноль."""
    if len(digits) > 0 and digits[-1] == 0:
        return False
    return all(isinstance(d, int) and 0 <= d <= DIGIT_MASK for d in digits)


def magnitude_from_int(value: int) -> Magnitude:
    """
    Модуль из неотрицательного int хоста.

    Raises:
        ValueError: если value < 0
    """
    if value < 0:
        raise ValueError(f"magnitude requires non-negative value, got {value}")

    digits: List[int] = []
    while value:
        digits.append(value & DIGIT_MASK)
        value >>= DIGIT_BITS
    return tuple(digits)


def magnitude_to_int(a: Magnitude) -> int:
    """Точное значение модуля как int хоста."""
    result = 0
    for digit in reversed(a):
        result = (result << DIGIT_BITS) | digit
    return result


def power_of_two_magnitude(exponent: int) -> Magnitude:
    """Модуль числа 2^exponent."""
    words, bits = divmod(exponent, DIGIT_BITS)
    return (0,) * words + (1 << bits,)


# =============================================================================
# СРАВНЕНИЕ И БИТЫ
# =============================================================================


def compare_magnitude(a: Magnitude, b: Magnitude) -> int:
    """
    Сравнение модулей.

    Returns:
        -1 если a < b, 0 если a == b, 1 если a > b
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def bit_length_magnitude(a: Magnitude) -> int:
    """Количество значащих бит модуля (0 для нуля)."""
    if not a:
        return 0
    return (len(a) - 1) * DIGIT_BITS + a[-1].bit_length()


def bit_at_magnitude(a: Magnitude, index: int) -> bool:
    """Значение бита с номером index (0 — младший)."""
    words, bits = divmod(index, DIGIT_BITS)
    if words >= len(a):
        return False
    return bool((a[words] >> bits) & 1)


def truncate_magnitude(a: Magnitude, width: int) -> Magnitude:
    """
    Младшие width бит модуля: a mod 2^width.

    Examples:
        >>> truncate_magnitude((0xFFFFFFFF, 0x1), 36)
        (4294967295, 1)
        >>> truncate_magnitude((0xFFFFFFFF,), 4)
        (15,)
    """
    words, bits = divmod(width, DIGIT_BITS)
    if words >= len(a):
        return a

    digits = list(a[:words])
    if bits:
        digits.append(a[words] & ((1 << bits) - 1))
    return normalize(digits)


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """Сумма модулей."""
    if len(a) < len(b):
        a, b = b, a

    result: List[int] = []
    carry = 0
    for i in range(len(a)):
        total = a[i] + carry
        if i < len(b):
            total += b[i]
        result.append(total & DIGIT_MASK)
        carry = total >> DIGIT_BITS

    if carry:
        result.append(carry)
    return tuple(result)


def subtract_magnitude(a: Magnitude, b: Magnitude) -> Magnitude:
    """
    Разность модулей a - b при условии a >= b.

    Raises:
        ValueError: если a < b (результат не является модулем)
    """
    if compare_magnitude(a, b) < 0:
        raise ValueError("subtract_magnitude requires minuend >= subtrahend")

    result: List[int] = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - borrow
        if i < len(b):
            diff -= b[i]
        borrow = 1 if diff < 0 else 0
        result.append(diff & DIGIT_MASK)

    return normalize(result)


def _add_into(target: List[int], offset: int, b: Magnitude) -> None:
    """target[offset:] += b с переносом (target достаточно длинный)."""
    carry = 0
    i = 0
    while i < len(b) or carry:
        total = target[offset + i] + carry
        if i < len(b):
            total += b[i]
        target[offset + i] = total & DIGIT_MASK
        carry = total >> DIGIT_BITS
        i += 1


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply_add_small(a: Magnitude, factor: int, addend: int = 0) -> Magnitude:
    """
    a * factor + addend для одноцифровых factor и addend.

    Используется парсингом строк (накопление чанков цифр).
    """
    result: List[int] = []
    carry = addend
    for digit in a:
        total = digit * factor + carry
        result.append(total & DIGIT_MASK)
        carry = total >> DIGIT_BITS

    while carry:
        result.append(carry & DIGIT_MASK)
        carry >>= DIGIT_BITS
    return normalize(result)


def _schoolbook_multiply(a: Magnitude, b: Magnitude) -> Magnitude:
    """Квадратичное умножение столбиком."""
    if not a or not b:
        return ZERO_MAGNITUDE

    result = [0] * (len(a) + len(b))
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        for j, bj in enumerate(b):
            total = result[i + j] + ai * bj + carry
            result[i + j] = total & DIGIT_MASK
            carry = total >> DIGIT_BITS
        result[i + len(b)] = carry

    return normalize(result)


def _karatsuba_multiply(a: Magnitude, b: Magnitude, cutoff: int) -> Magnitude:
    """
    Karatsuba: три умножения половинного размера вместо четырёх.

    (ah*X + al)(bh*X + bl) = z2*X^2 + z1*X + z0
        z2 = ah*bh
        z0 = al*bl
        z1 = (ah + al)(bh + bl) - z2 - z0
    """
    # a: более короткий операнд
    if len(a) > len(b):
        a, b = b, a

    if len(a) < cutoff:
        return _schoolbook_multiply(a, b)

    if 2 * len(a) <= len(b):
        return _lopsided_multiply(a, b, cutoff)

    shift = len(b) >> 1
    al, ah = normalize(a[:shift]), normalize(a[shift:])
    bl, bh = normalize(b[:shift]), normalize(b[shift:])

    z2 = _karatsuba_multiply(ah, bh, cutoff)
    z0 = _karatsuba_multiply(al, bl, cutoff)
    z1 = _karatsuba_multiply(add_magnitude(ah, al), add_magnitude(bh, bl), cutoff)
    z1 = subtract_magnitude(subtract_magnitude(z1, z2), z0)

    result = [0] * (len(a) + len(b) + 1)
    _add_into(result, 0, z0)
    _add_into(result, shift, z1)
    _add_into(result, 2 * shift, z2)
    return normalize(result)


def _lopsided_multiply(a: Magnitude, b: Magnitude, cutoff: int) -> Magnitude:
    """Умножение короткого a на длинный b срезами b длины len(a)."""
    step = len(a)
    result = [0] * (len(a) + len(b) + 1)
    for offset in range(0, len(b), step):
        chunk = normalize(b[offset:offset + step])
        _add_into(result, offset, _karatsuba_multiply(a, chunk, cutoff))
    return normalize(result)


def multiply_magnitude(
    a: Magnitude,
    b: Magnitude,
    karatsuba_cutoff: int = KARATSUBA_CUTOFF_DEFAULT,
) -> Magnitude:
    """
    Произведение модулей.

    Алгоритм выбирается по размеру: оба операнда не короче karatsuba_cutoff
    цифр → Karatsuba, иначе schoolbook. Выбор алгоритма не влияет на
    результат (только на производительность).

    Args:
        a, b: Модули
        karatsuba_cutoff: Порог в цифрах (не меньше KARATSUBA_MIN_CUTOFF)
    """
    if not a or not b:
        return ZERO_MAGNITUDE

    cutoff = max(karatsuba_cutoff, KARATSUBA_MIN_CUTOFF)
    if min(len(a), len(b)) < cutoff:
        return _schoolbook_multiply(a, b)
    return _karatsuba_multiply(a, b, cutoff)


# =============================================================================
# СДВИГИ
# =============================================================================


def shift_left_magnitude(a: Magnitude, count: int) -> Magnitude:
    """a * 2^count (count >= 0)."""
    if not a or count == 0:
        return a

    words, bits = divmod(count, DIGIT_BITS)
    if bits == 0:
        return (0,) * words + a

    result = [0] * words
    carry = 0
    for digit in a:
        total = (digit << bits) | carry
        result.append(total & DIGIT_MASK)
        carry = total >> DIGIT_BITS
    if carry:
        result.append(carry)
    return tuple(result)


def shift_right_magnitude(a: Magnitude, count: int) -> Magnitude:
    """floor(a / 2^count) (count >= 0)."""
    if not a or count == 0:
        return a

    words, bits = divmod(count, DIGIT_BITS)
    if words >= len(a):
        return ZERO_MAGNITUDE

    source = a[words:]
    if bits == 0:
        return source

    result: List[int] = []
    for i, digit in enumerate(source):
        high = source[i + 1] if i + 1 < len(source) else 0
        result.append(((digit >> bits) | (high << (DIGIT_BITS - bits))) & DIGIT_MASK)
    return normalize(result)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_small(a: Magnitude, divisor: int) -> Tuple[Magnitude, int]:
    """
    Деление модуля на одну цифру.

    Returns:
        (частное, остаток) где остаток — int в [0, divisor)
    """
    if divisor == 0:
        raise DivisionByZeroError("division by zero")

    quotient = [0] * len(a)
    remainder = 0
    for i in range(len(a) - 1, -1, -1):
        current = (remainder << DIGIT_BITS) | a[i]
        quotient[i], remainder = divmod(current, divisor)
    return normalize(quotient), remainder


def divmod_magnitude(a: Magnitude, b: Magnitude) -> Tuple[Magnitude, Magnitude]:
    """
    Деление модулей с остатком: a = q*b + r, 0 <= r < b.

    Однозначный делитель обрабатывается быстрым путём, иначе —
    Knuth Vol. 2, 4.3.1, Algorithm D (нормализация делителя так, чтобы
    старший бит старшей цифры был установлен; оценка цифры частного по
    двум старшим цифрам; обратное сложение при переоценке).

    Raises:
        DivisionByZeroError: если b == 0
    """
    if not b:
        raise DivisionByZeroError("division by zero")

    if compare_magnitude(a, b) < 0:
        return ZERO_MAGNITUDE, a

    if len(b) == 1:
        quotient, rem = divmod_small(a, b[0])
        return quotient, magnitude_from_int(rem)

    # D1: нормализация
    shift = DIGIT_BITS - b[-1].bit_length()
    v = list(shift_left_magnitude(b, shift))
    u = list(shift_left_magnitude(a, shift))
    if len(u) == len(a):
        u.append(0)

    n = len(v)
    m = len(u) - n - 1
    quotient = [0] * (m + 1)
    v_top = v[-1]
    v_next = v[-2]

    for j in range(m, -1, -1):
        # D3: оценка цифры частного
        numerator = (u[j + n] << DIGIT_BITS) | u[j + n - 1]
        q_hat, r_hat = divmod(numerator, v_top)
        while q_hat >= DIGIT_BASE or q_hat * v_next > ((r_hat << DIGIT_BITS) | u[j + n - 2]):
            q_hat -= 1
            r_hat += v_top
            if r_hat >= DIGIT_BASE:
                break

        # D4: умножение и вычитание
        borrow = 0
        carry = 0
        for i in range(n):
            product = q_hat * v[i] + carry
            carry = product >> DIGIT_BITS
            diff = u[i + j] - (product & DIGIT_MASK) - borrow
            u[i + j] = diff & DIGIT_MASK
            borrow = 1 if diff < 0 else 0
        diff = u[j + n] - carry - borrow
        u[j + n] = diff & DIGIT_MASK

        # D6: обратное сложение (редкая ветка)
        if diff < 0:
            q_hat -= 1
            carry = 0
            for i in range(n):
                total = u[i + j] + v[i] + carry
                u[i + j] = total & DIGIT_MASK
                carry = total >> DIGIT_BITS
            u[j + n] = (u[j + n] + carry) & DIGIT_MASK

        quotient[j] = q_hat

    # D8: денормализация остатка
    remainder = shift_right_magnitude(normalize(u[:n]), shift)
    return normalize(quotient), remainder
