"""Мост BigInteger ↔ 64-битные ячейки фиксированной ширины."""

from .int64_cells import (
    CELL_SIZE,
    ByteOrder,
    CellKind,
    CellsSnapshot,
    Int64Cells,
    Uint64Cells,
    read_int64,
    read_uint64,
    write_int64,
    write_uint64,
)

__all__ = [
    # Constants / Types
    "CELL_SIZE",
    "ByteOrder",
    "CellKind",
    "CellsSnapshot",
    # Cell arrays
    "Int64Cells",
    "Uint64Cells",
    # Functions
    "read_int64",
    "read_uint64",
    "write_int64",
    "write_uint64",
]
