"""
Contract Validation Module

Модуль для валидации JSON контрактов exactint.
"""

from .validators import (
    CellsSnapshotValidator,
    ContractValidator,
    EngineConfigValidator,
    SchemaLoader,
    validate_cells_snapshot,
    validate_engine_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EngineConfigValidator",
    "CellsSnapshotValidator",
    # Functions
    "validate_engine_config",
    "validate_cells_snapshot",
]
