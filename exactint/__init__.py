"""
exactint — точные целые произвольной разрядности рядом с float.

BigInteger никогда не теряет точность молча: арифметика и битовые
операции со смешением BigInteger и float поднимают DomainTypeError,
единственное исключение — точное сравнение.

Examples:
    >>> from exactint import bigint
    >>> bigint("0x100") * 2 ** 64
    BigInteger(4722366482869645213696)
    >>> bigint(2) ** 53 - 1 < 2.0 ** 53
    True
"""

from typing import Any

from exactint.core.domain.big_integer import MINUS_ONE, ONE, ZERO, BigInteger, Sign
from exactint.core.domain.engine_config import CrossDomainComparison, EngineConfig
from exactint.core.engine import DEFAULT_ENGINE, BigIntEngine
from exactint.core.errors import (
    DivisionByZeroError,
    DomainTypeError,
    ExactIntError,
    IntRangeError,
    IntSyntaxError,
    ResourceLimitError,
)
from exactint.guard.domain_guard import DomainGuard, GuardDecision, OperatorClass, Route

__version__ = "0.1.0"


def bigint(value: Any) -> BigInteger:
    """
    BigInt(value): явное построение BigInteger.

    int — точно, str — парсинг (знак, 0b/0o/0x), float — только точное
    целое; bool и прочие типы → DomainTypeError.
    """
    return DEFAULT_ENGINE.coerce(value)


__all__ = [
    # Value type
    "BigInteger",
    "Sign",
    "ZERO",
    "ONE",
    "MINUS_ONE",
    "bigint",
    # Engine / configuration
    "BigIntEngine",
    "DEFAULT_ENGINE",
    "EngineConfig",
    "CrossDomainComparison",
    # Guard
    "DomainGuard",
    "GuardDecision",
    "OperatorClass",
    "Route",
    # Errors
    "ExactIntError",
    "DomainTypeError",
    "IntRangeError",
    "DivisionByZeroError",
    "IntSyntaxError",
    "ResourceLimitError",
]
