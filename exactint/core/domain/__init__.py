"""
Domain models: BigInteger, разложение float, конфигурация движка.
"""

from .big_integer import MINUS_ONE, ONE, ZERO, BigInteger, Sign
from .engine_config import DEFAULT_CONFIG, CrossDomainComparison, EngineConfig
from .float_bits import FloatParts, decompose, is_integral

__all__ = [
    # BigInteger
    "BigInteger",
    "Sign",
    "ZERO",
    "ONE",
    "MINUS_ONE",
    # Float decomposition
    "FloatParts",
    "decompose",
    "is_integral",
    # Configuration
    "CrossDomainComparison",
    "EngineConfig",
    "DEFAULT_CONFIG",
]
