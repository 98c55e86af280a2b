"""
BigIntEngine — единая точка входа операций над BigInteger

Каждая операция:
1. Спрашивает DomainGuard (смешение доменов → DomainTypeError)
2. Приводит int хоста к BigInteger (точный литерал)
3. Вызывает нужный движок: arithmetic / bitwise / comparator / conversion
4. Применяет resource ceiling из EngineConfig

Engine не хранит изменяемого состояния: конфигурация и guard неизменяемы,
DEFAULT_ENGINE — модульная константа, которой делегируют операторы
BigInteger.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Tuple

from exactint.core.domain.big_integer import BigInteger
from exactint.core.domain.engine_config import EngineConfig
from exactint.core.errors import DomainTypeError, ResourceLimitError
from exactint.core.math import arithmetic, bitwise, comparator, conversion
from exactint.guard.domain_guard import DomainGuard, OperatorClass

logger = logging.getLogger(__name__)


@contextmanager
def _resource_ceiling(operation: str) -> Iterator[None]:
    try:
        yield
    except ResourceLimitError as e:
        logger.warning("Resource ceiling hit in %s: %s", operation, e)
        raise


def _to_big(value: Any) -> BigInteger:
    """Операнд, уже допущенный guard'ом: BigInteger или int хоста."""
    if isinstance(value, BigInteger):
        return value
    return BigInteger.from_int(value)


class BigIntEngine:
    """
    Фасад движка BigInteger с конфигурацией.

    Examples:
        >>> engine = BigIntEngine(EngineConfig(max_bit_length=64))
        >>> engine.add(BigInteger.from_int(2), 3)
        BigInteger(5)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Args:
            config: Конфигурация (по умолчанию — EngineConfig())
        """
        self.config = config or EngineConfig()
        self.guard = DomainGuard(self.config.cross_domain_comparison)

    def __repr__(self) -> str:
        return f"BigIntEngine({self.config!r})"

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def coerce(self, value: Any) -> BigInteger:
        """BigInt(value): BigInteger / int / str / целый float."""
        return conversion.coerce_big_integer(value)

    def from_float(self, value: float) -> BigInteger:
        return conversion.from_float(value)

    def parse(self, text: str, radix: Optional[int] = None) -> BigInteger:
        return conversion.parse_big_integer(text, radix)

    def to_float(self, value: Any) -> float:
        return conversion.to_float(self._unary_operand(value))

    def to_string(self, value: Any, radix: int = 10) -> str:
        return conversion.to_radix_string(self._unary_operand(value), radix)

    def as_int_n(self, value: Any, width: Any) -> BigInteger:
        """Знаковый wrap к width битам."""
        with _resource_ceiling("as_int_n"):
            return conversion.as_int_n(
                self._unary_operand(value), width, self.config.max_bit_length
            )

    def as_uint_n(self, value: Any, width: Any) -> BigInteger:
        """Беззнаковый wrap к width битам."""
        with _resource_ceiling("as_uint_n"):
            return conversion.as_uint_n(
                self._unary_operand(value), width, self.config.max_bit_length
            )

    def concatenate(self, left: Any, right: Any) -> str:
        """str + BigInteger / BigInteger + str: десятичное представление."""
        self.guard.enforce(OperatorClass.CONCATENATION, left, right)
        if isinstance(left, str):
            return left + conversion.to_radix_string(_to_big(right))
        return conversion.to_radix_string(_to_big(left)) + right

    # =========================================================================
    # УНАРНЫЕ
    # =========================================================================

    def _unary_operand(self, value: Any, operator_class: OperatorClass = OperatorClass.ARITHMETIC) -> BigInteger:
        self.guard.enforce(operator_class, value, unary=True)
        return _to_big(value)

    def truth(self, value: Any) -> bool:
        return self.guard.truth(self._unary_operand(value))

    def negate(self, value: Any) -> BigInteger:
        return arithmetic.negate(self._unary_operand(value, OperatorClass.UNARY_NEGATE))

    def unary_plus(self, value: Any) -> BigInteger:
        """Неявная конверсия BigInteger в число запрещена: всегда DomainTypeError."""
        return self._unary_operand(value, OperatorClass.UNARY_PLUS)

    def absolute(self, value: Any) -> BigInteger:
        return arithmetic.absolute(self._unary_operand(value))

    def bitwise_not(self, value: Any) -> BigInteger:
        return bitwise.bitwise_not(self._unary_operand(value, OperatorClass.BITWISE))

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def _binary(self, operator_class: OperatorClass, left: Any, right: Any) -> Tuple[BigInteger, BigInteger]:
        self.guard.enforce(operator_class, left, right)
        return _to_big(left), _to_big(right)

    def add(self, left: Any, right: Any) -> BigInteger:
        return arithmetic.add(*self._binary(OperatorClass.ARITHMETIC, left, right))

    def subtract(self, left: Any, right: Any) -> BigInteger:
        return arithmetic.subtract(*self._binary(OperatorClass.ARITHMETIC, left, right))

    def multiply(self, left: Any, right: Any) -> BigInteger:
        a, b = self._binary(OperatorClass.ARITHMETIC, left, right)
        with _resource_ceiling("multiply"):
            return arithmetic.multiply(
                a, b, self.config.max_bit_length, self.config.karatsuba_cutoff
            )

    def divide(self, left: Any, right: Any) -> BigInteger:
        return arithmetic.divide(*self._binary(OperatorClass.ARITHMETIC, left, right))

    def remainder(self, left: Any, right: Any) -> BigInteger:
        return arithmetic.remainder(*self._binary(OperatorClass.ARITHMETIC, left, right))

    def divmod(self, left: Any, right: Any) -> Tuple[BigInteger, BigInteger]:
        return arithmetic.divmod_truncated(*self._binary(OperatorClass.ARITHMETIC, left, right))

    def power(self, base: Any, exponent: Any) -> BigInteger:
        a, e = self._binary(OperatorClass.ARITHMETIC, base, exponent)
        with _resource_ceiling("power"):
            return arithmetic.power(
                a, e, self.config.max_bit_length, self.config.karatsuba_cutoff
            )

    # =========================================================================
    # БИТОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    def bitwise_and(self, left: Any, right: Any) -> BigInteger:
        return bitwise.bitwise_and(*self._binary(OperatorClass.BITWISE, left, right))

    def bitwise_or(self, left: Any, right: Any) -> BigInteger:
        return bitwise.bitwise_or(*self._binary(OperatorClass.BITWISE, left, right))

    def bitwise_xor(self, left: Any, right: Any) -> BigInteger:
        return bitwise.bitwise_xor(*self._binary(OperatorClass.BITWISE, left, right))

    def shift_left(self, value: Any, count: Any) -> BigInteger:
        a, n = self._binary(OperatorClass.BITWISE, value, count)
        with _resource_ceiling("shift_left"):
            return bitwise.shift_left(a, n.to_int(), self.config.max_bit_length)

    def shift_right(self, value: Any, count: Any) -> BigInteger:
        a, n = self._binary(OperatorClass.BITWISE, value, count)
        with _resource_ceiling("shift_right"):
            return bitwise.shift_right(a, n.to_int(), self.config.max_bit_length)

    def unsigned_shift_right(self, value: Any, count: Any) -> BigInteger:
        """Беззнакового сдвига у BigInteger нет: всегда DomainTypeError."""
        decision = self.guard.check(OperatorClass.UNSIGNED_SHIFT, value, count)
        logger.debug("Domain guard rejected %s: %s", OperatorClass.UNSIGNED_SHIFT.value, decision.reason)
        raise DomainTypeError(decision.reason)

    # =========================================================================
    # СРАВНЕНИЯ
    # =========================================================================

    def compare(self, left: Any, right: Any) -> Optional[int]:
        """
        Сравнение с поддержкой float с любой стороны.

        Returns:
            -1 / 0 / 1; None если один из операндов NaN
        """
        self.guard.enforce(OperatorClass.COMPARISON, left, right)
        if isinstance(right, float):
            return comparator.compare_cross_domain(_to_big(left), right)
        if isinstance(left, float):
            order = comparator.compare_cross_domain(_to_big(right), left)
            return None if order is None else -order
        return comparator.compare_same_domain(_to_big(left), _to_big(right))

    def equals(self, left: Any, right: Any) -> bool:
        return self.compare(left, right) == 0

    def less_than(self, left: Any, right: Any) -> bool:
        order = self.compare(left, right)
        return order is not None and order < 0

    def less_equal(self, left: Any, right: Any) -> bool:
        order = self.compare(left, right)
        return order is not None and order <= 0


DEFAULT_ENGINE = BigIntEngine()
