"""
Int64 Cells — мост BigInteger ↔ 64-битные ячейки фиксированной ширины

Контракт записи: в знаковую ячейку пишется as_int_n(x, 64), в беззнаковую
— as_uint_n(x, 64). Переполнение оборачивается молча (дополнительный код):
запись 2^63 в знаковую ячейку читается обратно как -2^63.

Чтение всегда возвращает BigInteger, никогда float.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. read_int64(write_int64(x)) == as_int_n(x, 64)
2. read_uint64(write_uint64(x)) == as_uint_n(x, 64)
3. Запись float → DomainTypeError (даже целого: домены не смешиваются)
4. Ячейка за пределами буфера → IndexError
"""

from enum import Enum
from struct import Struct
from typing import Any, Dict, Final, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from exactint.core.contracts.validators import validate_cells_snapshot
from exactint.core.domain.big_integer import BigInteger
from exactint.core.engine import DEFAULT_ENGINE
from exactint.core.errors import DomainTypeError
from exactint.guard.domain_guard import Domain, classify_operand

# Размер ячейки в байтах
CELL_SIZE: Final[int] = 8

# Ширина ячейки в битах
CELL_BITS: Final[int] = 64


# =============================================================================
# ENUMS
# =============================================================================


class CellKind(str, Enum):
    """Тип 64-битной ячейки."""

    INT64 = "int64"
    UINT64 = "uint64"


class ByteOrder(str, Enum):
    """Порядок байт ячейки."""

    LITTLE = "little"
    BIG = "big"


_STRUCTS: Final[Dict[Tuple[CellKind, ByteOrder], Struct]] = {
    (CellKind.INT64, ByteOrder.LITTLE): Struct("<q"),
    (CellKind.INT64, ByteOrder.BIG): Struct(">q"),
    (CellKind.UINT64, ByteOrder.LITTLE): Struct("<Q"),
    (CellKind.UINT64, ByteOrder.BIG): Struct(">Q"),
}


# =============================================================================
# ЧТЕНИЕ / ЗАПИСЬ ОДНОЙ ЯЧЕЙКИ
# =============================================================================


def _cell_value(value: Any) -> BigInteger:
    domain = classify_operand(value)
    if domain == Domain.FLOATING:
        raise DomainTypeError(
            f"cannot write float {value!r} into a 64-bit integer cell, convert explicitly"
        )
    if domain != Domain.BIG_INTEGER:
        raise DomainTypeError(
            f"cannot write {type(value).__name__} into a 64-bit integer cell"
        )
    return DEFAULT_ENGINE.coerce(value)


def _check_offset(buffer: Any, offset: int) -> None:
    if offset < 0 or offset + CELL_SIZE > len(buffer):
        raise IndexError(
            f"cell at byte offset {offset} is outside buffer of {len(buffer)} bytes"
        )


def _write(kind: CellKind, buffer: bytearray, offset: int, value: Any, byte_order: ByteOrder) -> None:
    _check_offset(buffer, offset)
    big = _cell_value(value)
    if kind == CellKind.INT64:
        wrapped = DEFAULT_ENGINE.as_int_n(big, CELL_BITS)
    else:
        wrapped = DEFAULT_ENGINE.as_uint_n(big, CELL_BITS)
    _STRUCTS[(kind, ByteOrder(byte_order))].pack_into(buffer, offset, wrapped.to_int())


def _read(kind: CellKind, buffer: Any, offset: int, byte_order: ByteOrder) -> BigInteger:
    _check_offset(buffer, offset)
    (raw,) = _STRUCTS[(kind, ByteOrder(byte_order))].unpack_from(buffer, offset)
    return BigInteger.from_int(raw)


def write_int64(
    buffer: bytearray,
    offset: int,
    value: Any,
    byte_order: ByteOrder = ByteOrder.LITTLE,
) -> None:
    """
    Запись as_int_n(value, 64) в 8 байт буфера.

    Args:
        buffer: Изменяемый буфер (bytearray, memoryview)
        offset: Смещение ячейки в байтах
        value: BigInteger или int
        byte_order: Порядок байт

    Raises:
        DomainTypeError: value — float или не целое
        IndexError: ячейка выходит за пределы буфера
    """
    _write(CellKind.INT64, buffer, offset, value, byte_order)


def write_uint64(
    buffer: bytearray,
    offset: int,
    value: Any,
    byte_order: ByteOrder = ByteOrder.LITTLE,
) -> None:
    """Запись as_uint_n(value, 64) в 8 байт буфера."""
    _write(CellKind.UINT64, buffer, offset, value, byte_order)


def read_int64(buffer: Any, offset: int, byte_order: ByteOrder = ByteOrder.LITTLE) -> BigInteger:
    """Чтение знаковой ячейки как BigInteger в [-2^63, 2^63 - 1]."""
    return _read(CellKind.INT64, buffer, offset, byte_order)


def read_uint64(buffer: Any, offset: int, byte_order: ByteOrder = ByteOrder.LITTLE) -> BigInteger:
    """Чтение беззнаковой ячейки как BigInteger в [0, 2^64 - 1]."""
    return _read(CellKind.UINT64, buffer, offset, byte_order)


# =============================================================================
# SNAPSHOT
# =============================================================================


class CellsSnapshot(BaseModel):
    """
    Снапшот массива ячеек.

    Значения хранятся десятичными строками: JSON number не вмещает 64 бита
    без потери точности.

    Совместим с JSON Schema cells_snapshot.json.
    """

    kind: CellKind = Field(..., description="Тип ячеек")
    byte_order: ByteOrder = Field(ByteOrder.LITTLE, description="Порядок байт")
    values: List[str] = Field(default_factory=list, description="Значения (base 10)")

    model_config = {"frozen": True}

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: List[str], info) -> List[str]:
        """Каждое значение — каноническая десятичная запись в диапазоне типа ячейки."""
        kind = info.data.get("kind")
        for text in v:
            value = DEFAULT_ENGINE.parse(text).to_int()
            if DEFAULT_ENGINE.to_string(value) != text:
                raise ValueError(f"value {text!r} is not canonical decimal")
            if kind == CellKind.INT64 and not -(1 << 63) <= value < (1 << 63):
                raise ValueError(f"value {text} out of int64 range")
            if kind == CellKind.UINT64 and not 0 <= value < (1 << 64):
                raise ValueError(f"value {text} out of uint64 range")
        return v

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "CellsSnapshot":
        """
        Снапшот из dict: контракт cells_snapshot.json, затем модель.

        Raises:
            jsonschema.ValidationError: нарушение контракта
            pydantic.ValidationError: значение вне диапазона типа ячейки
        """
        validate_cells_snapshot(data)
        return cls.model_validate(data)


# =============================================================================
# МАССИВЫ ЯЧЕЕК
# =============================================================================


class _CellArray:
    """Массив 64-битных ячеек фиксированной длины поверх bytearray."""

    kind: CellKind

    def __init__(
        self,
        length: int = 0,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        buffer: Optional[bytearray] = None,
    ):
        """
        Args:
            length: Количество ячеек (игнорируется, если передан buffer)
            byte_order: Порядок байт
            buffer: Существующий буфер (длина кратна 8)
        """
        if buffer is None:
            if length < 0:
                raise ValueError(f"length must be >= 0, got {length}")
            buffer = bytearray(length * CELL_SIZE)
        elif len(buffer) % CELL_SIZE:
            raise ValueError(
                f"buffer length {len(buffer)} is not a multiple of {CELL_SIZE}"
            )
        self._buffer = buffer
        self.byte_order = ByteOrder(byte_order)

    @classmethod
    def from_values(
        cls,
        values: Iterable[Any],
        byte_order: ByteOrder = ByteOrder.LITTLE,
    ) -> "_CellArray":
        """Массив из значений (каждое оборачивается к 64 битам)."""
        items = list(values)
        cells = cls(len(items), byte_order)
        for index, value in enumerate(items):
            cells[index] = value
        return cells

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE) -> "_CellArray":
        return cls(byte_order=byte_order, buffer=bytearray(data))

    @classmethod
    def from_snapshot(cls, snapshot: CellsSnapshot) -> "_CellArray":
        if snapshot.kind != cls.kind:
            raise ValueError(
                f"snapshot of {snapshot.kind.value} cells cannot restore {cls.__name__}"
            )
        return cls.from_values(
            (DEFAULT_ENGINE.parse(text) for text in snapshot.values),
            snapshot.byte_order,
        )

    def _offset(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"cell index must be int, got {type(index).__name__}")
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError(f"cell index out of range for {length} cells")
        return index * CELL_SIZE

    def __len__(self) -> int:
        return len(self._buffer) // CELL_SIZE

    def __getitem__(self, index: int) -> BigInteger:
        return _read(self.kind, self._buffer, self._offset(index), self.byte_order)

    def __setitem__(self, index: int, value: Any) -> None:
        _write(self.kind, self._buffer, self._offset(index), value, self.byte_order)

    def __iter__(self) -> Iterator[BigInteger]:
        for index in range(len(self)):
            yield self[index]

    def __repr__(self) -> str:
        values = ", ".join(str(value) for value in self)
        return f"{type(self).__name__}([{values}], byte_order={self.byte_order.value!r})"

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def snapshot(self) -> CellsSnapshot:
        return CellsSnapshot(
            kind=self.kind,
            byte_order=self.byte_order,
            values=[str(value) for value in self],
        )


class Int64Cells(_CellArray):
    """
    Знаковые 64-битные ячейки.

    Examples:
        >>> cells = Int64Cells.from_values([2 ** 63])
        >>> cells[0]
        BigInteger(-9223372036854775808)
    """

    kind = CellKind.INT64


class Uint64Cells(_CellArray):
    """
    Беззнаковые 64-битные ячейки.

    Examples:
        >>> Uint64Cells.from_values([-1])[0]
        BigInteger(18446744073709551615)
    """

    kind = CellKind.UINT64
