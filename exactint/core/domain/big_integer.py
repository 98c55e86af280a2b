"""
BigInteger — точное целое неограниченной разрядности

Immutable value object. Каждая операция создаёт новый экземпляр;
операнды никогда не модифицируются, поэтому значения безопасно
разделять между потоками без синхронизации.

ПРЕДСТАВЛЕНИЕ:
- sign: Sign (NEGATIVE / ZERO / POSITIVE)
- magnitude: кортеж цифр по основанию 2^32, младшая первой

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каноничность: ровно одно представление на значение (нет -0, нет
   старших нулевых цифр); неканонический экземпляр не создаётся
2. sign == ZERO ⇔ magnitude == ()
3. Смешение с float в арифметике и битовых операциях → DomainTypeError
4. Сравнение с float точное (без округления)

Операторы Python делегируют DEFAULT_ENGINE (exactint.core.engine), который
сначала спрашивает Domain Guard, а затем вызывает нужный движок.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, FrozenSet, Optional

from exactint.core.errors import DomainTypeError
from exactint.core.math.digits import (
    Magnitude,
    bit_length_magnitude,
    is_canonical,
    magnitude_from_int,
    magnitude_to_int,
)

# Типы представления format(), которые неявно переводят значение во float
_FLOAT_PRESENTATION_TYPES: Final[FrozenSet[str]] = frozenset("eEfFgG%")


# =============================================================================
# ENUMS
# =============================================================================


class Sign(int, Enum):
    """Знак BigInteger."""

    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1


_ENGINE = None


def _engine():
    global _ENGINE
    if _ENGINE is None:
        # Отложенный импорт: движки сами импортируют BigInteger
        from exactint.core.engine import DEFAULT_ENGINE

        _ENGINE = DEFAULT_ENGINE
    return _ENGINE


def _is_numeric_operand(value: Any) -> bool:
    """Операнд, который движок умеет классифицировать (не bool)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (BigInteger, int, float))


# =============================================================================
# BIG INTEGER
# =============================================================================


@dataclass(frozen=True, eq=False)
class BigInteger:
    """
    Точное целое произвольной величины.

    Прямой конструктор принимает уже каноническое представление и
    проверяет его. Для построения из значений используйте
    BigInteger.from_int / from_float / parse или функцию bigint().

    Examples:
        >>> BigInteger.from_int(-5)
        BigInteger(-5)
        >>> BigInteger.from_int(2) ** 100 > 1e30
        True
    """

    sign: Sign
    magnitude: Magnitude = ()

    def __post_init__(self) -> None:
        if not isinstance(self.magnitude, tuple):
            raise ValueError("magnitude must be a tuple of digits")
        if not is_canonical(self.magnitude):
            raise ValueError(f"non-canonical magnitude: {self.magnitude!r}")
        if (self.sign == Sign.ZERO) != (len(self.magnitude) == 0):
            raise ValueError(
                f"sign {self.sign.name} inconsistent with magnitude {self.magnitude!r}"
            )

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def from_magnitude(cls, magnitude: Magnitude, negative: bool = False) -> "BigInteger":
        """Значение из канонического модуля и флага знака (-0 невозможен)."""
        if not magnitude:
            return cls(Sign.ZERO, ())
        return cls(Sign.NEGATIVE if negative else Sign.POSITIVE, magnitude)

    @classmethod
    def from_int(cls, value: int) -> "BigInteger":
        """Точный мост из int хоста (литерал BigInteger)."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"from_int expects int, got {type(value).__name__}")
        return cls.from_magnitude(magnitude_from_int(abs(value)), negative=value < 0)

    @classmethod
    def from_float(cls, value: float) -> "BigInteger":
        """Из float: только конечные целые значения, иначе IntRangeError."""
        return _engine().from_float(value)

    @classmethod
    def parse(cls, text: str, radix: Optional[int] = None) -> "BigInteger":
        """Из строки: знак, префикс 0b/0o/0x, цифры radix; иначе IntSyntaxError."""
        return _engine().parse(text, radix)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.sign == Sign.ZERO

    @property
    def is_negative(self) -> bool:
        return self.sign == Sign.NEGATIVE

    def bit_length(self) -> int:
        """Количество бит модуля (как int.bit_length)."""
        return bit_length_magnitude(self.magnitude)

    # -------------------------------------------------------------------------
    # Явные мосты
    # -------------------------------------------------------------------------

    def to_int(self) -> int:
        """Точный мост в int хоста."""
        value = magnitude_to_int(self.magnitude)
        return -value if self.sign == Sign.NEGATIVE else value

    def to_float(self) -> float:
        """Ближайший float (единственный разрешённый мост с потерей точности)."""
        return _engine().to_float(self)

    def to_string(self, radix: int = 10) -> str:
        return _engine().to_string(self, radix)

    def as_int_n(self, width: int) -> "BigInteger":
        return _engine().as_int_n(self, width)

    def as_uint_n(self, width: int) -> "BigInteger":
        return _engine().as_uint_n(self, width)

    # -------------------------------------------------------------------------
    # Протоколы Python
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"BigInteger({self.to_string()})"

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        # Форматирование через точный мост в int; типы float (e, f, g, %) запрещены
        if format_spec and format_spec[-1] in _FLOAT_PRESENTATION_TYPES:
            raise DomainTypeError(
                f"cannot format a BigInteger with float presentation type '{format_spec[-1]}', "
                "use an explicit conversion"
            )
        return format(self.to_int(), format_spec)

    def __hash__(self) -> int:
        # Согласовано с int/float: bigint(4) == 4 == 4.0 → одинаковый hash
        return hash(self.to_int())

    def __bool__(self) -> bool:
        return _engine().truth(self)

    def __int__(self) -> int:
        return self.to_int()

    def __index__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    # -------------------------------------------------------------------------
    # Унарные операторы
    # -------------------------------------------------------------------------

    def __neg__(self) -> "BigInteger":
        return _engine().negate(self)

    def __pos__(self) -> "BigInteger":
        # Неявная конверсия в число запрещена: поднимает DomainTypeError
        return _engine().unary_plus(self)

    def __abs__(self) -> "BigInteger":
        return _engine().absolute(self)

    def __invert__(self) -> "BigInteger":
        return _engine().bitwise_not(self)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> Any:
        if isinstance(other, str):
            return _engine().concatenate(self, other)
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().add(self, other)

    def __radd__(self, other: Any) -> Any:
        if isinstance(other, str):
            return _engine().concatenate(other, self)
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().add(other, self)

    def __sub__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().subtract(self, other)

    def __rsub__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().subtract(other, self)

    def __mul__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().multiply(self, other)

    def __rmul__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().multiply(other, self)

    def __truediv__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().divide(self, other)

    def __rtruediv__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().divide(other, self)

    def __mod__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().remainder(self, other)

    def __rmod__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().remainder(other, self)

    def __divmod__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().divmod(self, other)

    def __rdivmod__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().divmod(other, self)

    def __pow__(self, other: Any, modulo: Any = None) -> Any:
        if modulo is not None or not _is_numeric_operand(other):
            return NotImplemented
        return _engine().power(self, other)

    def __rpow__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().power(other, self)

    # -------------------------------------------------------------------------
    # Битовые операции
    # -------------------------------------------------------------------------

    def __and__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_and(self, other)

    def __rand__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_and(other, self)

    def __or__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_or(self, other)

    def __ror__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_or(other, self)

    def __xor__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_xor(self, other)

    def __rxor__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().bitwise_xor(other, self)

    def __lshift__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().shift_left(self, other)

    def __rlshift__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().shift_left(other, self)

    def __rshift__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().shift_right(self, other)

    def __rrshift__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().shift_right(other, self)

    # -------------------------------------------------------------------------
    # Сравнения (разрешены и для float)
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().equals(self, other)

    def __ne__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return not _engine().equals(self, other)

    def __lt__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().less_than(self, other)

    def __le__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().less_equal(self, other)

    def __gt__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().less_than(other, self)

    def __ge__(self, other: Any) -> Any:
        if not _is_numeric_operand(other):
            return NotImplemented
        return _engine().less_equal(other, self)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO = BigInteger(Sign.ZERO, ())
ONE = BigInteger(Sign.POSITIVE, (1,))
MINUS_ONE = BigInteger(Sign.NEGATIVE, (1,))

