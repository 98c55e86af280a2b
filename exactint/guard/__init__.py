"""Domain Guard — допуск операций между доменами BigInteger и float."""

from .domain_guard import (
    Domain,
    DomainGuard,
    GuardDecision,
    OperatorClass,
    Route,
    classify_operand,
)

__all__ = [
    "Domain",
    "DomainGuard",
    "GuardDecision",
    "OperatorClass",
    "Route",
    "classify_operand",
]
