"""
Core math modules для exactint

Digit Store — примитивы над модулями (кортежи цифр по основанию 2^32).
Движки arithmetic / bitwise / comparator / conversion работают над
BigInteger и импортируются из своих модулей напрямую: BigInteger сам
построен на Digit Store.
"""

# Digit Store
from exactint.core.math.digits import (
    DIGIT_BASE,
    DIGIT_BITS,
    DIGIT_MASK,
    KARATSUBA_CUTOFF_DEFAULT,
    KARATSUBA_MIN_CUTOFF,
    MAX_BIT_LENGTH_DEFAULT,
    Magnitude,
    add_magnitude,
    compare_magnitude,
    divmod_magnitude,
    multiply_magnitude,
    normalize,
    subtract_magnitude,
)

__all__ = [
    # Digit Store: Constants
    "DIGIT_BASE",
    "DIGIT_BITS",
    "DIGIT_MASK",
    "KARATSUBA_CUTOFF_DEFAULT",
    "KARATSUBA_MIN_CUTOFF",
    "MAX_BIT_LENGTH_DEFAULT",
    # Digit Store: Types
    "Magnitude",
    # Digit Store: Functions
    "add_magnitude",
    "compare_magnitude",
    "divmod_magnitude",
    "multiply_magnitude",
    "normalize",
    "subtract_magnitude",
]
