"""
EngineConfig — конфигурация движка BigInteger

Immutable Pydantic модель. Полная совместимость с JSON Schema
(exactint/core/contracts/schema/engine_config.json).

Параметры:
- max_bit_length: resource ceiling для умножения, степени, сдвига влево
  и широких wrap-операций
- karatsuba_cutoff: длина операнда (в цифрах), начиная с которой
  умножение переходит со schoolbook на Karatsuba
- cross_domain_comparison: разрешено ли точное сравнение BigInteger с float
"""

from enum import Enum
from typing import Any, Final, Mapping

from pydantic import BaseModel, Field, field_validator

from exactint.core.math.digits import (
    KARATSUBA_CUTOFF_DEFAULT,
    KARATSUBA_MIN_CUTOFF,
    MAX_BIT_LENGTH_DEFAULT,
)

# Верхняя граница ceiling: длина в битах должна оставаться индексируемой
MAX_BIT_LENGTH_LIMIT: Final[int] = 1 << 48


# =============================================================================
# ENUMS
# =============================================================================


class CrossDomainComparison(str, Enum):
    """
    Политика сравнения BigInteger с float.

    ALLOW — сравнение разрешено и точно (основной вариант).
    REJECT — сравнение между доменами тоже поднимает DomainTypeError.
    """

    ALLOW = "allow"
    REJECT = "reject"


# =============================================================================
# ENGINE CONFIG
# =============================================================================


class EngineConfig(BaseModel):
    """
    Конфигурация BigIntEngine.

    Examples:
        >>> EngineConfig().max_bit_length
        1073741824
        >>> EngineConfig.from_mapping({"cross_domain_comparison": "reject"}).cross_domain_comparison
        <CrossDomainComparison.REJECT: 'reject'>
    """

    max_bit_length: int = Field(
        MAX_BIT_LENGTH_DEFAULT,
        gt=0,
        le=MAX_BIT_LENGTH_LIMIT,
        description="Максимальная длина результата (бит)",
    )
    karatsuba_cutoff: int = Field(
        KARATSUBA_CUTOFF_DEFAULT,
        ge=KARATSUBA_MIN_CUTOFF,
        description="Порог Karatsuba (цифр по 32 бита)",
    )
    cross_domain_comparison: CrossDomainComparison = Field(
        CrossDomainComparison.ALLOW,
        description="Политика сравнения BigInteger с float",
    )

    model_config = {"frozen": True}

    @field_validator("max_bit_length", "karatsuba_cutoff", mode="before")
    @classmethod
    def reject_non_integer(cls, v: Any) -> Any:
        """bool и float (даже целый 64.0) не принимаются как число бит."""
        if isinstance(v, bool):
            raise ValueError("must be an integer, not bool")
        if isinstance(v, float):
            raise ValueError("must be an integer, not float")
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """
        Конфигурация из dict (например, загруженного из JSON).

        Сначала контракт engine_config.json (jsonschema), затем модель.

        Raises:
            jsonschema.ValidationError: нарушение контракта
            pydantic.ValidationError: нарушение ограничений модели
        """
        # Отложенный импорт: contracts загружает схемы при импорте
        from exactint.core.contracts.validators import validate_engine_config

        payload = dict(data)
        validate_engine_config(payload)
        return cls.model_validate(payload)


DEFAULT_CONFIG: Final[EngineConfig] = EngineConfig()
