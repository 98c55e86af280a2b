"""Domain Guard — политика допуска операций между доменами BigInteger и float.

Каждый оператор спрашивает guard до вызова движка. Правило смешения
доменов сосредоточено здесь, а не продублировано в каждом операторе:
если набор исключений (сейчас — только сравнения) изменится, меняется
одна таблица.

Таблица политики:

| Класс оператора            | BigInt ⊗ BigInt | BigInt ⊗ float          | Унарный              |
|----------------------------|-----------------|-------------------------|----------------------|
| ARITHMETIC (+ - * / % **)  | → ARITHMETIC    | REJECT (type condition) | —                    |
| BITWISE (& | ^ << >>)      | → BITWISE       | REJECT                  | —                    |
| COMPARISON (== < > <= >=)  | → COMPARATOR    | → COMPARATOR (исключение)| —                   |
| UNARY_NEGATE (-x)          | —               | —                       | → ARITHMETIC         |
| UNARY_PLUS (+x)            | —               | —                       | REJECT               |
| UNSIGNED_SHIFT (>>>)       | REJECT          | REJECT                  | —                    |
| CONCATENATION (str + x)    | —               | —                       | → CONVERSION (base 10)|

Проверка истинности: 0 — ложь, любое другое значение — истина.

int хоста (не bool) — точный литерал домена BigInteger.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from exactint.core.domain.big_integer import BigInteger
from exactint.core.domain.engine_config import CrossDomainComparison
from exactint.core.errors import DomainTypeError

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Domain(str, Enum):
    """Домен операнда."""

    BIG_INTEGER = "big_integer"
    FLOATING = "floating"
    STRING = "string"
    UNSUPPORTED = "unsupported"


class OperatorClass(str, Enum):
    """Класс оператора для политики допуска."""

    ARITHMETIC = "arithmetic"
    BITWISE = "bitwise"
    COMPARISON = "comparison"
    UNARY_NEGATE = "unary_negate"
    UNARY_PLUS = "unary_plus"
    UNSIGNED_SHIFT = "unsigned_shift"
    CONCATENATION = "concatenation"


class Route(str, Enum):
    """Куда направляется разрешённая операция."""

    ARITHMETIC = "arithmetic"
    BITWISE = "bitwise"
    COMPARATOR = "comparator"
    CONVERSION = "conversion"
    REJECTED = "rejected"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class GuardDecision:
    """Решение Domain Guard."""

    allowed: bool
    route: Route
    operator_class: OperatorClass

    # Домены операндов (right is None для унарных)
    left_domain: Domain
    right_domain: Optional[Domain]

    # Смешение BigInteger и float
    mixed_domain: bool

    # Детали
    reason: str


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def classify_operand(value: Any) -> Domain:
    """
    Домен операнда.

    Examples:
        >>> classify_operand(1.5)
        <Domain.FLOATING: 'floating'>
        >>> classify_operand(True)
        <Domain.UNSUPPORTED: 'unsupported'>
    """
    if isinstance(value, BigInteger):
        return Domain.BIG_INTEGER
    if isinstance(value, bool):
        return Domain.UNSUPPORTED
    if isinstance(value, int):
        return Domain.BIG_INTEGER
    if isinstance(value, float):
        return Domain.FLOATING
    if isinstance(value, str):
        return Domain.STRING
    return Domain.UNSUPPORTED


# =============================================================================
# DOMAIN GUARD
# =============================================================================


class DomainGuard:
    """Domain Guard: stateless политика, консультируемая каждым оператором.

    Порядок проверок в check():
    1. Классификация доменов операндов
    2. Унарные классы (UNARY_NEGATE, UNARY_PLUS; abs и ~ как unary=True)
    3. UNSIGNED_SHIFT — всегда отклоняется
    4. CONCATENATION — ровно один str и один BigInteger
    5. Бинарные классы: оба BigInteger → движок; BigInteger ⊗ float →
       только COMPARISON (если политика ALLOW)
    """

    def __init__(self, cross_domain_comparison: CrossDomainComparison = CrossDomainComparison.ALLOW):
        """
        Args:
            cross_domain_comparison: Политика сравнения BigInteger с float
        """
        self.cross_domain_comparison = CrossDomainComparison(cross_domain_comparison)

    def check(
        self,
        operator_class: OperatorClass,
        left: Any,
        right: Any = None,
        unary: bool = False,
    ) -> GuardDecision:
        """Решение о допуске операции (без исключений).

        Args:
            operator_class: Класс оператора
            left: Левый (или единственный) операнд
            right: Правый операнд (игнорируется для unary)
            unary: Унарная операция

        Returns:
            GuardDecision
        """
        unary = unary or operator_class in (OperatorClass.UNARY_NEGATE, OperatorClass.UNARY_PLUS)
        left_domain = classify_operand(left)
        right_domain = None if unary else classify_operand(right)

        def decide(allowed: bool, route: Route, reason: str, mixed: bool = False) -> GuardDecision:
            return GuardDecision(
                allowed=allowed,
                route=route if allowed else Route.REJECTED,
                operator_class=operator_class,
                left_domain=left_domain,
                right_domain=right_domain,
                mixed_domain=mixed,
                reason=reason,
            )

        # Унарные операторы
        if unary:
            if left_domain != Domain.BIG_INTEGER:
                return decide(False, Route.REJECTED, f"unary operand must be BigInteger, got {left_domain.value}")
            if operator_class in (OperatorClass.UNARY_NEGATE, OperatorClass.ARITHMETIC):
                return decide(True, Route.ARITHMETIC, f"unary {operator_class.value}")
            if operator_class == OperatorClass.UNARY_PLUS:
                return decide(False, Route.REJECTED, "cannot convert a BigInteger to a number with unary plus")
            if operator_class == OperatorClass.BITWISE:
                return decide(True, Route.BITWISE, "bitwise not")
            return decide(False, Route.REJECTED, f"{operator_class.value} is not a unary operator")

        if operator_class == OperatorClass.UNSIGNED_SHIFT:
            return decide(
                False,
                Route.REJECTED,
                "BigIntegers have no unsigned right shift, use shift_right on as_uint_n instead",
                mixed=Domain.FLOATING in (left_domain, right_domain),
            )

        if operator_class == OperatorClass.CONCATENATION:
            domains = {left_domain, right_domain}
            if domains == {Domain.STRING, Domain.BIG_INTEGER}:
                return decide(True, Route.CONVERSION, "string concatenation renders base 10")
            return decide(False, Route.REJECTED, "concatenation requires one str and one BigInteger")

        # Бинарные операторы
        both_big = left_domain == Domain.BIG_INTEGER and right_domain == Domain.BIG_INTEGER
        mixed = {left_domain, right_domain} == {Domain.BIG_INTEGER, Domain.FLOATING}

        if both_big:
            route = {
                OperatorClass.ARITHMETIC: Route.ARITHMETIC,
                OperatorClass.BITWISE: Route.BITWISE,
                OperatorClass.COMPARISON: Route.COMPARATOR,
            }.get(operator_class)
            if route is None:
                return decide(False, Route.REJECTED, f"{operator_class.value} is not a binary operator")
            return decide(True, route, f"same-domain {operator_class.value}")

        if mixed:
            if operator_class == OperatorClass.COMPARISON:
                if self.cross_domain_comparison == CrossDomainComparison.ALLOW:
                    return decide(True, Route.COMPARATOR, "exact cross-domain comparison", mixed=True)
                return decide(
                    False,
                    Route.REJECTED,
                    "cross-domain comparison is disabled by policy",
                    mixed=True,
                )
            return decide(
                False,
                Route.REJECTED,
                f"cannot mix BigInteger and float in {operator_class.value} operation, "
                f"use explicit conversions",
                mixed=True,
            )

        return decide(
            False,
            Route.REJECTED,
            f"unsupported operand domains for {operator_class.value}: "
            f"{left_domain.value} and {right_domain.value if right_domain else None}",
        )

    def enforce(
        self,
        operator_class: OperatorClass,
        left: Any,
        right: Any = None,
        unary: bool = False,
    ) -> GuardDecision:
        """check() с исключением при отказе.

        Raises:
            DomainTypeError: если операция отклонена
        """
        decision = self.check(operator_class, left, right, unary=unary)
        if not decision.allowed:
            logger.debug(
                "Domain guard rejected %s: %s",
                operator_class.value,
                decision.reason,
            )
            raise DomainTypeError(decision.reason)
        return decision

    @staticmethod
    def truth(value: BigInteger) -> bool:
        """Проверка истинности: 0 — False, остальное — True."""
        return not value.is_zero
