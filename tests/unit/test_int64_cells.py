"""
Тесты для моста BigInteger ↔ 64-битные ячейки

Проверяет:
1. Молчаливое оборачивание при записи (дополнительный код)
2. Порядок байт
3. Отказ от float и выход за пределы буфера
4. Int64Cells / Uint64Cells и CellsSnapshot
"""

import pytest
from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from exactint.core.domain.big_integer import BigInteger
from exactint.core.errors import DomainTypeError
from exactint.storage import (
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

INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)
UINT64_MAX = 2 ** 64 - 1


def B(value: int) -> BigInteger:
    return BigInteger.from_int(value)


@pytest.fixture
def buffer():
    return bytearray(2 * CELL_SIZE)


# =============================================================================
# ОДНА ЯЧЕЙКА
# =============================================================================


class TestSingleCell:
    """Тесты write_* / read_*"""

    def test_int64_overflow_wraps(self, buffer):
        """2^63 - 1 + 1 в знаковой ячейке читается как -2^63"""
        write_int64(buffer, 0, B(INT64_MAX) + 1)
        assert read_int64(buffer, 0) == B(INT64_MIN)

    def test_uint64_negative_wraps(self, buffer):
        write_uint64(buffer, 8, -1)
        assert read_uint64(buffer, 8).to_int() == UINT64_MAX

    @pytest.mark.parametrize(
        "value", [0, 1, -1, INT64_MAX, INT64_MIN, 2 ** 64, 2 ** 100 + 17, -(2 ** 90) - 3]
    )
    def test_wrap_contract(self, buffer, value):
        write_int64(buffer, 0, value)
        write_uint64(buffer, 8, value)
        unsigned = value % (1 << 64)
        signed = unsigned - (1 << 64) if unsigned > INT64_MAX else unsigned
        assert read_int64(buffer, 0).to_int() == signed
        assert read_uint64(buffer, 8).to_int() == unsigned

    def test_read_returns_big_integer(self, buffer):
        write_int64(buffer, 0, 5)
        assert isinstance(read_int64(buffer, 0), BigInteger)

    def test_byte_order(self, buffer):
        write_uint64(buffer, 0, 0x0102030405060708, ByteOrder.LITTLE)
        assert bytes(buffer[:8]) == bytes([8, 7, 6, 5, 4, 3, 2, 1])
        write_uint64(buffer, 0, 0x0102030405060708, ByteOrder.BIG)
        assert bytes(buffer[:8]) == bytes([1, 2, 3, 4, 5, 6, 7, 8])
        assert read_uint64(buffer, 0, "big").to_int() == 0x0102030405060708

    def test_float_rejected(self, buffer):
        """Даже целый float не пишется в ячейку"""
        with pytest.raises(DomainTypeError, match="cannot write float"):
            write_int64(buffer, 0, 1.0)

    def test_other_types_rejected(self, buffer):
        with pytest.raises(DomainTypeError, match="cannot write str"):
            write_uint64(buffer, 0, "1")
        with pytest.raises(DomainTypeError):
            write_int64(buffer, 0, True)

    @pytest.mark.parametrize("offset", [-1, 9, 16])
    def test_out_of_range(self, buffer, offset):
        with pytest.raises(IndexError, match="outside buffer"):
            write_int64(buffer, offset, 1)
        with pytest.raises(IndexError):
            read_int64(buffer, offset)

    def test_memoryview_buffer(self):
        raw = bytearray(8)
        write_int64(memoryview(raw), 0, -2)
        assert read_int64(bytes(raw), 0).to_int() == -2


# =============================================================================
# МАССИВЫ ЯЧЕЕК
# =============================================================================


class TestCellArrays:
    """Тесты Int64Cells / Uint64Cells"""

    def test_zero_initialised(self):
        cells = Int64Cells(3)
        assert len(cells) == 3
        assert [value.to_int() for value in cells] == [0, 0, 0]

    def test_from_values_wraps(self):
        cells = Int64Cells.from_values([2 ** 63, -1, B(7)])
        assert [value.to_int() for value in cells] == [INT64_MIN, -1, 7]
        unsigned = Uint64Cells.from_values([-1, 2 ** 64 + 3])
        assert [value.to_int() for value in unsigned] == [UINT64_MAX, 3]

    def test_negative_index(self):
        cells = Uint64Cells.from_values([1, 2, 3])
        assert cells[-1].to_int() == 3
        cells[-3] = 10
        assert cells[0].to_int() == 10

    def test_index_errors(self):
        cells = Int64Cells(2)
        with pytest.raises(IndexError, match="out of range"):
            cells[2]
        with pytest.raises(IndexError):
            cells[-3] = 1
        with pytest.raises(TypeError, match="cell index must be int"):
            cells[0:1]

    def test_float_write_rejected(self):
        cells = Int64Cells(1)
        with pytest.raises(DomainTypeError):
            cells[0] = 2.0
        assert cells[0].to_int() == 0

    def test_bytes_roundtrip(self):
        cells = Int64Cells.from_values([INT64_MIN, INT64_MAX], ByteOrder.BIG)
        restored = Int64Cells.from_bytes(cells.to_bytes(), ByteOrder.BIG)
        assert [value.to_int() for value in restored] == [INT64_MIN, INT64_MAX]

    def test_buffer_length_must_be_multiple_of_cell(self):
        with pytest.raises(ValueError, match="multiple of 8"):
            Int64Cells.from_bytes(b"\x00" * 7)
        with pytest.raises(ValueError, match="length must be >= 0"):
            Int64Cells(-1)

    def test_shared_buffer(self):
        """Ячейки — представление буфера, а не копия"""
        raw = bytearray(8)
        cells = Uint64Cells(buffer=raw)
        cells[0] = 0xFF
        assert raw[0] == 0xFF

    def test_repr(self):
        assert repr(Int64Cells.from_values([-1, 2])) == "Int64Cells([-1, 2], byte_order='little')"


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestCellsSnapshot:
    """Тесты CellsSnapshot"""

    def test_snapshot_of_cells(self):
        snapshot = Int64Cells.from_values([2 ** 63, 5]).snapshot()
        assert snapshot.kind == CellKind.INT64
        assert snapshot.byte_order == ByteOrder.LITTLE
        assert snapshot.values == [str(INT64_MIN), "5"]

    def test_snapshot_roundtrip(self):
        cells = Uint64Cells.from_values([UINT64_MAX, 0, 42], ByteOrder.BIG)
        restored = Uint64Cells.from_snapshot(cells.snapshot())
        assert restored.to_bytes() == cells.to_bytes()
        assert restored.byte_order == ByteOrder.BIG

    def test_snapshot_kind_mismatch(self):
        snapshot = Int64Cells.from_values([1]).snapshot()
        with pytest.raises(ValueError, match="cannot restore Uint64Cells"):
            Uint64Cells.from_snapshot(snapshot)

    def test_snapshot_json_matches_contract(self):
        snapshot = Int64Cells.from_values([-7, 7]).snapshot()
        data = snapshot.model_dump(mode="json")
        assert data == {"kind": "int64", "byte_order": "little", "values": ["-7", "7"]}
        assert CellsSnapshot.from_mapping(data) == snapshot

    def test_values_out_of_range(self):
        with pytest.raises(ValidationError, match="out of int64 range"):
            CellsSnapshot(kind=CellKind.INT64, values=[str(2 ** 63)])
        with pytest.raises(ValidationError, match="out of uint64 range"):
            CellsSnapshot(kind=CellKind.UINT64, values=["-1"])

    def test_values_must_be_canonical(self):
        with pytest.raises(ValidationError):
            CellsSnapshot(kind=CellKind.INT64, values=["+5"])

    def test_from_mapping_contract_violation(self):
        with pytest.raises(SchemaValidationError):
            CellsSnapshot.from_mapping({"kind": "int64", "byte_order": "middle", "values": []})

    def test_frozen(self):
        snapshot = CellsSnapshot(kind=CellKind.UINT64, values=["1"])
        with pytest.raises(ValidationError):
            snapshot.kind = CellKind.INT64
